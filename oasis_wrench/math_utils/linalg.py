################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Linear algebra utilities for rotations and vectors."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .units import NumericConstants
from .units import assert_finite


class SO3:
    """SO(3) rotation utilities."""

    @staticmethod
    def project_to_so3(R: NDArray[np.float64]) -> NDArray[np.float64]:
        """Project a matrix to the nearest SO(3) rotation matrix."""
        mat: NDArray[np.float64] = np.asarray(R, dtype=float)
        Linalg.ensure_shape(mat, (3, 3), "R")
        assert_finite(mat, "R")
        U: NDArray[np.float64]
        S: NDArray[np.float64]
        Vt: NDArray[np.float64]
        U, S, Vt = np.linalg.svd(mat)
        R_proj: NDArray[np.float64] = U @ Vt
        if np.linalg.det(R_proj) < 0.0:
            U[:, -1] *= -1.0
            R_proj = U @ Vt
        return R_proj


class Linalg:
    """General linear algebra helpers."""

    @staticmethod
    def ensure_shape(x: NDArray[np.float64], shape: tuple[int, ...], name: str) -> None:
        """Ensure an array has the expected shape."""
        if x.shape != shape:
            raise ValueError(f"{name} must have shape {shape}")

    @staticmethod
    def vector3(v: object, name: str) -> NDArray[np.float64]:
        """Return a finite float 3-vector."""
        vec: NDArray[np.float64] = np.asarray(v, dtype=float)
        Linalg.ensure_shape(vec, (3,), name)
        assert_finite(vec, name)
        return vec

    @staticmethod
    def unit(v: NDArray[np.float64]) -> NDArray[np.float64] | None:
        """Return the unit vector along v, or None when v is degenerate."""
        vec: NDArray[np.float64] = np.asarray(v, dtype=float)
        norm: float = float(np.linalg.norm(vec))
        if not np.isfinite(norm) or norm < NumericConstants.EPS:
            return None
        return vec / norm
