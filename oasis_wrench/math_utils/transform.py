################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Rigid-body transforms as translation plus unit quaternion.

A Transform maps coordinates from a child frame into its parent frame, so
T_AC = T_AB * T_BC reads as "apply T_BC, then T_AB". Scale is always 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .linalg import SO3
from .linalg import Linalg
from .quat import Quaternion
from .units import assert_finite


@dataclass(frozen=True)
class Transform:
    """Rigid-body transform with translation and rotation.

    Attributes:
        translation: Translation of the child origin in the parent frame
        rotation: Rotation from child axes to parent axes, normalized on
            construction
    """

    translation: NDArray[np.float64]
    rotation: Quaternion

    def __post_init__(self) -> None:
        """Coerce the translation and normalize the rotation."""
        p_vec: NDArray[np.float64] = np.asarray(self.translation, dtype=float)
        Linalg.ensure_shape(p_vec, (3,), "translation")
        if not isinstance(self.rotation, Quaternion):
            raise ValueError("rotation must be a Quaternion")
        object.__setattr__(self, "translation", p_vec)
        object.__setattr__(self, "rotation", self.rotation.normalized())

    @staticmethod
    def identity() -> "Transform":
        """Return the identity transform."""
        return Transform(np.zeros(3, dtype=float), Quaternion.identity())

    @staticmethod
    def from_translation_xyzw(
        translation: Sequence[float], rotation_xyzw: Sequence[float]
    ) -> "Transform":
        """Create a transform from a translation and an xyzw quaternion."""
        if len(rotation_xyzw) != 4:
            raise ValueError("rotation_xyzw must have 4 elements")
        x, y, z, w = (float(value) for value in rotation_xyzw)
        return Transform(
            np.asarray(translation, dtype=float), Quaternion.from_xyzw(x, y, z, w)
        )

    @staticmethod
    def from_matrix4(mat: NDArray[np.float64]) -> "Transform":
        """Decompose a homogeneous 4x4 matrix into translation and rotation.

        The rotation block is projected onto SO(3) first, which absorbs
        accumulated numerical drift.
        """
        mat4: NDArray[np.float64] = np.asarray(mat, dtype=float)
        Linalg.ensure_shape(mat4, (4, 4), "mat")
        assert_finite(mat4, "mat")
        R: NDArray[np.float64] = SO3.project_to_so3(mat4[:3, :3])
        return Transform(np.array(mat4[:3, 3], dtype=float), Quaternion.from_matrix(R))

    def as_matrix4(self) -> NDArray[np.float64]:
        """Return the homogeneous 4x4 transform matrix."""
        mat: NDArray[np.float64] = np.eye(4, dtype=float)
        mat[:3, :3] = self.rotation.as_matrix()
        mat[:3, 3] = self.translation
        return mat

    def inverse(self) -> "Transform":
        """Return the inverse transform."""
        q_inv: Quaternion = self.rotation.inverse()
        p_inv: NDArray[np.float64] = -(q_inv.as_matrix() @ self.translation)
        return Transform(p_inv, q_inv)

    def __mul__(self, other: "Transform") -> "Transform":
        """Compose two transforms, applying other first."""
        q_new: Quaternion = self.rotation * other.rotation
        p_new: NDArray[np.float64] = (
            self.rotation.as_matrix() @ other.translation + self.translation
        )
        return Transform(p_new, q_new)

    def normalized(self) -> "Transform":
        """Return a copy with the rotation renormalized."""
        return Transform(
            np.array(self.translation, dtype=float), self.rotation.normalized()
        )

    def transform_point(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a point by rotation and translation."""
        vec: NDArray[np.float64] = Linalg.vector3(x, "x")
        return self.rotation.as_matrix() @ vec + self.translation

    def transform_vector(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a free vector by rotation only."""
        vec: NDArray[np.float64] = Linalg.vector3(v, "v")
        return self.rotation.as_matrix() @ vec

    def almost_equal(self, other: "Transform", atol: float = 1e-9) -> bool:
        """Check approximate equality of translation and rotation."""
        if not np.allclose(self.translation, other.translation, atol=atol):
            return False
        return self.rotation.almost_equal(other.rotation, atol=atol)


def identity() -> Transform:
    """Return the identity transform."""
    return Transform.identity()


def compose(a: Transform, b: Transform) -> Transform:
    """Return the transform that applies b, then a."""
    return a * b


def invert(t: Transform) -> Transform:
    """Return the exact rigid inverse of t."""
    return t.inverse()
