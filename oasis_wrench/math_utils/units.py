################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numeric constants and finiteness checks."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class NumericConstants:
    """Constants shared by the math utilities."""

    # Norm below which a vector or quaternion is treated as degenerate
    EPS: float = 1e-12

    # Nanoseconds per second
    NS_PER_SEC: int = 1_000_000_000


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")


def is_finite(x: NDArray[np.float64]) -> bool:
    """Return True when every element of the array is finite."""
    return bool(np.all(np.isfinite(x)))
