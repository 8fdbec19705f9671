################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Placement of force and torque glyphs in the sensor frame.

Only poses and sizes are computed here. Building meshes from them is left to
the renderer. Arrows point along their local +Y axis and the torque arc lies
in its local XY plane, so its normal is local +Z.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_wrench.config.wrench_params import DisplayParams
from oasis_wrench.config.wrench_params import color_to_int
from oasis_wrench.math_utils.linalg import Linalg
from oasis_wrench.math_utils.quat import Quaternion
from oasis_wrench.wrench.wrench_types import WrenchSample


# Arrow head length as a fraction of the arrow length
ARROW_HEAD_LENGTH_RATIO: float = 0.2
# Arrow head width as a fraction of the arrow length
ARROW_HEAD_WIDTH_RATIO: float = 0.1

# Torque arc sweep in radians
TORQUE_ARC_ANGLE_RAD: float = 1.5 * np.pi
# Torque arc radius as a fraction of the scaled torque magnitude
TORQUE_RADIUS_RATIO: float = 0.15
# Offset of the arc along the torque axis as a fraction of the scaled magnitude
TORQUE_OFFSET_RATIO: float = 0.25
# Arc radius before any torque has been received
TORQUE_DEFAULT_RADIUS: float = 0.5
# Arc angle at which the direction arrow head sits
TORQUE_HEAD_ANGLE_RAD: float = -0.5 * np.pi
# Offset of the arrow head back along the arc tangent, relative to the radius
TORQUE_HEAD_OFFSET_RATIO: float = 0.15

# Cross product norm below which the arc normal is treated as aligned
ALIGN_CROSS_EPS: float = 1e-3

# Local axis arrows point along
ARROW_AXIS: NDArray[np.float64] = np.array([0.0, 1.0, 0.0], dtype=np.float64)
# Local normal of the torque arc
ARC_NORMAL: NDArray[np.float64] = np.array([0.0, 0.0, 1.0], dtype=np.float64)

# Direction of the force arrow before any force has been received
DEFAULT_FORCE_DIRECTION: NDArray[np.float64] = np.array(
    [1.0, 0.0, 0.0], dtype=np.float64
)
# Direction of the torque glyphs before any torque has been received
DEFAULT_TORQUE_DIRECTION: NDArray[np.float64] = np.array(
    [0.0, 1.0, 0.0], dtype=np.float64
)


@dataclass(frozen=True)
class ArrowGlyph:
    """Straight arrow from the sensor origin.

    Attributes:
        direction: Unit direction of the arrow
        orientation: Rotation taking the local arrow axis onto direction
        length: Total arrow length in scene units
        head_length: Length of the arrow head
        head_width: Width of the arrow head
        visible: Whether the arrow should be drawn
    """

    direction: NDArray[np.float64]
    orientation: Quaternion
    length: float
    head_length: float
    head_width: float
    visible: bool


@dataclass(frozen=True)
class TorqueIndicator:
    """Circular arc showing the sense of rotation of a torque.

    Attributes:
        orientation: Rotation taking the arc normal onto the torque axis
        position: Arc center in the sensor frame
        radius: Arc radius
        arc_angle_rad: Arc sweep
        head_position: Arrow head position in the arc plane
        head_orientation: Arrow head rotation in the arc plane
        visible: Whether the indicator should be drawn
    """

    orientation: Quaternion
    position: NDArray[np.float64]
    radius: float
    arc_angle_rad: float
    head_position: NDArray[np.float64]
    head_orientation: Quaternion
    visible: bool


@dataclass(frozen=True)
class WrenchGlyphs:
    """All glyphs for one wrench sample."""

    force: ArrowGlyph
    torque: ArrowGlyph
    torque_indicator: TorqueIndicator
    force_color: int
    torque_color: int


def arrow_for_vector(
    vector: NDArray[np.float64],
    scale_factor: float,
    default_direction: NDArray[np.float64],
    visible: bool,
) -> ArrowGlyph:
    """Return the arrow for a vector, or a unit arrow when it is zero."""
    vec: NDArray[np.float64] = Linalg.vector3(vector, "vector")
    magnitude: float = float(np.linalg.norm(vec))

    direction: NDArray[np.float64]
    length: float
    if magnitude > 0.0:
        direction = vec / magnitude
        length = magnitude * scale_factor
    else:
        direction = np.array(default_direction, dtype=float)
        length = 1.0

    return ArrowGlyph(
        direction=direction,
        orientation=Quaternion.from_unit_vectors(ARROW_AXIS, direction),
        length=length,
        head_length=length * ARROW_HEAD_LENGTH_RATIO,
        head_width=length * ARROW_HEAD_WIDTH_RATIO,
        visible=visible,
    )


def align_arc_normal(direction: NDArray[np.float64]) -> Quaternion:
    """Return the rotation taking the arc normal onto direction.

    When the cross product is too short to define a rotation axis the
    identity is returned, including for a direction opposite the normal.
    """
    unit_dir: NDArray[np.float64] | None = Linalg.unit(direction)
    if unit_dir is None:
        return Quaternion.identity()

    axis: NDArray[np.float64] = np.cross(ARC_NORMAL, unit_dir)
    if float(np.linalg.norm(axis)) <= ALIGN_CROSS_EPS:
        return Quaternion.identity()

    cos_angle: float = float(np.clip(np.dot(ARC_NORMAL, unit_dir), -1.0, 1.0))
    return Quaternion.from_axis_angle(axis, float(np.arccos(cos_angle)))


def torque_indicator(
    direction: NDArray[np.float64],
    distance: float,
    radius: float,
    visible: bool,
) -> TorqueIndicator:
    """Return the arc indicator for a torque axis."""
    unit_dir: NDArray[np.float64] | None = Linalg.unit(direction)
    if unit_dir is None:
        unit_dir = np.array(DEFAULT_TORQUE_DIRECTION, dtype=float)

    tangent_angle: float = TORQUE_HEAD_ANGLE_RAD + 0.5 * np.pi
    tangent: NDArray[np.float64] = np.array(
        [np.cos(tangent_angle), np.sin(tangent_angle), 0.0], dtype=float
    )
    head_position: NDArray[np.float64] = np.array(
        [
            radius * np.cos(TORQUE_HEAD_ANGLE_RAD),
            radius * np.sin(TORQUE_HEAD_ANGLE_RAD),
            0.0,
        ],
        dtype=float,
    )
    head_position = head_position - tangent * (radius * TORQUE_HEAD_OFFSET_RATIO)

    return TorqueIndicator(
        orientation=align_arc_normal(unit_dir),
        position=unit_dir * (distance * TORQUE_OFFSET_RATIO),
        radius=radius,
        arc_angle_rad=TORQUE_ARC_ANGLE_RAD,
        head_position=head_position,
        head_orientation=Quaternion.from_unit_vectors(ARROW_AXIS, tangent),
        visible=visible,
    )


def build_wrench_glyphs(sample: WrenchSample, display: DisplayParams) -> WrenchGlyphs:
    """Return the glyphs for a wrench sample under the display options."""
    force: ArrowGlyph = arrow_for_vector(
        sample.force_n,
        display.force_scale_factor,
        DEFAULT_FORCE_DIRECTION,
        display.show_force,
    )
    torque: ArrowGlyph = arrow_for_vector(
        sample.torque_nm,
        display.torque_scale_factor,
        DEFAULT_TORQUE_DIRECTION,
        display.show_torque,
    )

    torque_magnitude: float = float(np.linalg.norm(sample.torque_nm))
    indicator: TorqueIndicator
    if torque_magnitude > 0.0:
        scaled: float = torque_magnitude * display.torque_scale_factor
        indicator = torque_indicator(
            sample.torque_nm,
            scaled,
            scaled * TORQUE_RADIUS_RATIO,
            display.show_torque,
        )
    else:
        indicator = torque_indicator(
            DEFAULT_TORQUE_DIRECTION,
            display.torque_scale_factor,
            TORQUE_DEFAULT_RADIUS,
            display.show_torque,
        )

    return WrenchGlyphs(
        force=force,
        torque=torque,
        torque_indicator=indicator,
        force_color=color_to_int(display.force_color),
        torque_color=color_to_int(display.torque_color),
    )
