################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Conversion helpers between TF messages and frame graph updates

Messages may be ROS message instances (attribute access) or decoded
recordings (nested mappings). ROS 2 stamps carry ``nanosec`` and ROS 1
stamps carry ``nsec``; both are accepted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
from typing import Protocol

from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.math_utils.units import NumericConstants
from oasis_wrench.math_utils.validation import coerce_translation
from oasis_wrench.math_utils.validation import is_degenerate_xyzw
from oasis_wrench.math_utils.validation import quaternion_from_xyzw
from oasis_wrench.tf.tf_types import TransformUpdate


_LOG: logging.Logger = logging.getLogger(__name__)


# Schema names of TF topics
TF_SCHEMA_NAMES: frozenset[str] = frozenset(
    {
        "tf2_msgs/msg/TFMessage",
        "tf2_msgs/TFMessage",
        "tf/tfMessage",
    }
)

# Schema names of wrench topics
WRENCH_SCHEMA_NAMES: frozenset[str] = frozenset(
    {
        "geometry_msgs/msg/WrenchStamped",
        "geometry_msgs/WrenchStamped",
    }
)


class TfConversionError(Exception):
    """Raised when a message does not have the structure of a transform."""


class Vector3Like(Protocol):
    """
    Protocol for geometry messages with x/y/z fields
    """

    x: float
    y: float
    z: float


class QuaternionLike(Protocol):
    """
    Protocol for geometry messages with x/y/z/w fields
    """

    x: float
    y: float
    z: float
    w: float


class TransformLike(Protocol):
    """
    Protocol for geometry_msgs/Transform
    """

    translation: Vector3Like
    rotation: QuaternionLike


class TransformStampedLike(Protocol):
    """
    Protocol for geometry_msgs/TransformStamped
    """

    header: Any
    child_frame_id: str
    transform: TransformLike


class TfMessageLike(Protocol):
    """
    Protocol for tf2_msgs/TFMessage
    """

    transforms: Sequence[TransformStampedLike]


def get_field(msg: Any, name: str) -> Any:
    """
    Return a message field by attribute or mapping key
    """

    if isinstance(msg, Mapping):
        if name not in msg:
            raise TfConversionError(f"Message is missing field '{name}'")
        return msg[name]

    if not hasattr(msg, name):
        raise TfConversionError(f"Message is missing field '{name}'")

    return getattr(msg, name)


def _float_field(msg: Any, name: str) -> float:
    try:
        return float(get_field(msg, name))
    except (TypeError, ValueError) as exc:
        raise TfConversionError(f"Field '{name}' is not a number") from exc


def vector3_from_msg(msg: Vector3Like | Mapping[str, Any]) -> list[float]:
    """
    Convert a Vector3-like message into a list
    """

    return [
        _float_field(msg, "x"),
        _float_field(msg, "y"),
        _float_field(msg, "z"),
    ]


def quaternion_xyzw_from_msg(msg: QuaternionLike | Mapping[str, Any]) -> list[float]:
    """
    Convert a Quaternion-like message into an xyzw list
    """

    return [
        _float_field(msg, "x"),
        _float_field(msg, "y"),
        _float_field(msg, "z"),
        _float_field(msg, "w"),
    ]


def stamp_to_ns(stamp: Any) -> int:
    """
    Convert a ROS time stamp into integer nanoseconds
    """

    sec: int = int(get_field(stamp, "sec"))

    nanosec: int
    try:
        nanosec = int(get_field(stamp, "nanosec"))
    except TfConversionError:
        nanosec = int(get_field(stamp, "nsec"))

    return sec * NumericConstants.NS_PER_SEC + nanosec


def transform_from_msg(msg: TransformLike | Mapping[str, Any]) -> Transform:
    """
    Convert a geometry_msgs/Transform-like message into a Transform
    """

    translation: list[float] = vector3_from_msg(get_field(msg, "translation"))
    rotation_xyzw: list[float] = quaternion_xyzw_from_msg(get_field(msg, "rotation"))

    if is_degenerate_xyzw(rotation_xyzw):
        _LOG.debug("Treating degenerate rotation %s as identity", rotation_xyzw)

    return Transform(
        coerce_translation(translation), quaternion_from_xyzw(rotation_xyzw)
    )


def update_from_transform_stamped(
    msg: TransformStampedLike | Mapping[str, Any],
) -> TransformUpdate:
    """
    Convert a geometry_msgs/TransformStamped-like message into an update
    """

    header: Any = get_field(msg, "header")

    return TransformUpdate(
        child_frame_id=str(get_field(msg, "child_frame_id")),
        parent_frame_id=str(get_field(header, "frame_id")),
        transform=transform_from_msg(get_field(msg, "transform")),
        t_ns=stamp_to_ns(get_field(header, "stamp")),
    )


def updates_from_tf_message(
    msg: TfMessageLike | Mapping[str, Any],
) -> list[TransformUpdate]:
    """
    Convert a tf2_msgs/TFMessage-like message into an ordered update batch
    """

    return [
        update_from_transform_stamped(transform)
        for transform in get_field(msg, "transforms")
    ]


def is_tf_schema(schema_name: str) -> bool:
    """
    Return True if the schema name is a TF message schema
    """

    return schema_name in TF_SCHEMA_NAMES


def is_wrench_schema(schema_name: str) -> bool:
    """
    Return True if the schema name is a WrenchStamped schema
    """

    return schema_name in WRENCH_SCHEMA_NAMES
