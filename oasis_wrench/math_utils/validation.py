################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Permissive coercion helpers for streamed transform inputs.

Streamed TF data is never rejected for its numeric content. These helpers
only fail on structural problems such as a wrong element count.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .quat import Quaternion
from .units import is_finite


# Quaternion normalization tolerance for near-zero checks
QUAT_NORM_EPS: float = 1e-12


def coerce_translation(values: Sequence[float]) -> np.ndarray:
    """Return a float 3-vector, keeping the values as given."""
    if len(values) != 3:
        raise ValueError("Translation must have 3 elements")

    return np.asarray(values, dtype=np.float64).reshape((3,))


def quaternion_from_xyzw(xyzw: Sequence[float]) -> Quaternion:
    """Return a unit quaternion from xyzw input.

    Zero-norm and non-finite input is treated as the identity rotation.
    """
    if len(xyzw) != 4:
        raise ValueError("Quaternion must have 4 elements")

    array: np.ndarray = np.asarray(xyzw, dtype=np.float64).reshape((4,))
    if not is_finite(array):
        return Quaternion.identity()

    norm: float = float(np.linalg.norm(array))
    if not np.isfinite(norm) or norm <= QUAT_NORM_EPS:
        return Quaternion.identity()

    unit: np.ndarray = array / norm
    return Quaternion.from_xyzw(
        float(unit[0]), float(unit[1]), float(unit[2]), float(unit[3])
    )


def is_degenerate_xyzw(xyzw: Sequence[float]) -> bool:
    """Return True when an xyzw quaternion would be replaced by the identity."""
    array: np.ndarray = np.asarray(xyzw, dtype=np.float64)
    if not is_finite(array):
        return True

    return float(np.linalg.norm(array)) <= QUAT_NORM_EPS
