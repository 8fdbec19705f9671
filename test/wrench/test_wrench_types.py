################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for wrench samples."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from oasis_wrench.math_utils.quat import Quaternion
from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.tf.tf_conversions import TfConversionError
from oasis_wrench.wrench.wrench_types import WrenchSample
from oasis_wrench.wrench.wrench_types import WrenchTypesError
from oasis_wrench.wrench.wrench_types import wrench_from_msg


def _wrench_msg(force: list[float], torque: list[float]) -> dict[str, Any]:
    """Return a decoded WrenchStamped as nested dicts."""
    return {
        "header": {"frame_id": "ft_sensor", "stamp": {"sec": 4, "nanosec": 250}},
        "wrench": {
            "force": dict(zip("xyz", force)),
            "torque": dict(zip("xyz", torque)),
        },
    }


def test_wrench_from_msg() -> None:
    """Read the frame, stamp, force and torque of a message."""
    sample: WrenchSample = wrench_from_msg(
        _wrench_msg([1.0, 2.0, 3.0], [0.1, 0.2, 0.3])
    )
    assert sample.frame_id == "ft_sensor"
    assert sample.t_ns == 4_000_000_250
    assert np.allclose(sample.force_n, [1.0, 2.0, 3.0])
    assert np.allclose(sample.torque_nm, [0.1, 0.2, 0.3])


def test_wrench_from_msg_missing_torque() -> None:
    """Raise a conversion error when the torque is missing."""
    msg: dict[str, Any] = _wrench_msg([1.0, 2.0, 3.0], [0.0, 0.0, 0.0])
    del msg["wrench"]["torque"]
    with pytest.raises(TfConversionError):
        wrench_from_msg(msg)


def test_non_finite_force_rejected() -> None:
    """Reject samples with non-finite components."""
    with pytest.raises(WrenchTypesError):
        wrench_from_msg(_wrench_msg([float("nan"), 0.0, 0.0], [0.0, 0.0, 0.0]))


def test_bad_vector_shape_rejected() -> None:
    """Reject force vectors that are not 3-vectors."""
    with pytest.raises(WrenchTypesError):
        WrenchSample("s", 0, np.zeros(2), np.zeros(3))


def test_expressed_in_rotates_only() -> None:
    """Rotate force and torque without applying the translation."""
    sample: WrenchSample = WrenchSample(
        "sensor", 10, np.array([1.0, 0.0, 0.0]), np.array([0.0, 0.0, 2.0])
    )
    pose: Transform = Transform(
        np.array([5.0, 5.0, 5.0], dtype=float),
        Quaternion.from_axis_angle(np.array([0.0, 0.0, 1.0]), 0.5 * np.pi),
    )
    rotated: WrenchSample = sample.expressed_in(pose, "world")
    assert rotated.frame_id == "world"
    assert rotated.t_ns == 10
    assert np.allclose(rotated.force_n, [0.0, 1.0, 0.0])
    assert np.allclose(rotated.torque_nm, [0.0, 0.0, 2.0])
