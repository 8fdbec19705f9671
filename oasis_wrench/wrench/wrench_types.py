################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Force/torque sample type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.tf.tf_conversions import get_field
from oasis_wrench.tf.tf_conversions import stamp_to_ns
from oasis_wrench.tf.tf_conversions import vector3_from_msg


class WrenchTypesError(Exception):
    """Raised when wrench sample fields are invalid."""


@dataclass(frozen=True)
class WrenchSample:
    """Force and torque measured in a sensor frame.

    Attributes:
        frame_id: Frame the force and torque are expressed in
        t_ns: Timestamp in nanoseconds
        force_n: Force vector in newtons
        torque_nm: Torque vector in newton-meters
    """

    frame_id: str
    t_ns: int
    force_n: NDArray[np.float64]
    torque_nm: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate the sample fields."""
        if not isinstance(self.frame_id, str):
            raise WrenchTypesError("frame_id must be a str")
        if not isinstance(self.t_ns, int) or isinstance(self.t_ns, bool):
            raise WrenchTypesError("t_ns must be an int")
        force_n: NDArray[np.float64] = _coerce_vector(self.force_n, "force_n")
        torque_nm: NDArray[np.float64] = _coerce_vector(self.torque_nm, "torque_nm")
        object.__setattr__(self, "force_n", force_n)
        object.__setattr__(self, "torque_nm", torque_nm)

    def expressed_in(self, transform: Transform, frame_id: str) -> WrenchSample:
        """Return the sample rotated into another frame.

        transform maps this sample's frame into frame_id. Only the rotation is
        applied, so the torque keeps its original reference point.
        """
        return WrenchSample(
            frame_id=frame_id,
            t_ns=self.t_ns,
            force_n=transform.transform_vector(self.force_n),
            torque_nm=transform.transform_vector(self.torque_nm),
        )


def wrench_from_msg(msg: Any) -> WrenchSample:
    """Convert a geometry_msgs/WrenchStamped-like message into a sample."""
    header: Any = get_field(msg, "header")
    wrench: Any = get_field(msg, "wrench")
    return WrenchSample(
        frame_id=str(get_field(header, "frame_id")),
        t_ns=stamp_to_ns(get_field(header, "stamp")),
        force_n=np.asarray(vector3_from_msg(get_field(wrench, "force")), dtype=float),
        torque_nm=np.asarray(
            vector3_from_msg(get_field(wrench, "torque")), dtype=float
        ),
    )


def _coerce_vector(value: Any, name: str) -> NDArray[np.float64]:
    """Return a finite float 3-vector."""
    vec: NDArray[np.float64] = np.asarray(value, dtype=float)
    if vec.shape != (3,):
        raise WrenchTypesError(f"{name} must be shape (3,)")
    if not np.all(np.isfinite(vec)):
        raise WrenchTypesError(f"{name} must be finite")
    return vec
