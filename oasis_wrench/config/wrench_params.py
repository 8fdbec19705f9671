################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for the wrench view."""

from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Mapping


# Title shown above the view
DATA_LABEL: str = "Wrench Visualization"
# Wrench topic name, None until one is selected
DATA_TOPIC: str | None = None
# Whether the view is visible
DATA_VISIBLE: bool = True
# Reference frame the sensor pose is expressed in
DATA_FIXED_FRAME: str = "world"

# Draw the force arrow
DISPLAY_SHOW_FORCE: bool = True
# Draw the torque arrow and rotation indicator
DISPLAY_SHOW_TORQUE: bool = True
# Arrow length per newton
DISPLAY_FORCE_SCALE_FACTOR: float = 1.0
# Arrow length per newton-meter
DISPLAY_TORQUE_SCALE_FACTOR: float = 1.0
# Force glyph color as #rrggbb
DISPLAY_FORCE_COLOR: str = "#ff0000"
# Torque glyph color as #rrggbb
DISPLAY_TORQUE_COLOR: str = "#0000ff"
# Draw the ground grid
DISPLAY_GRID_VISIBLE: bool = True
# Draw the reference axes
DISPLAY_AXES_VISIBLE: bool = True

# Allowed range of the scale factors
SCALE_FACTOR_MIN: float = 0.01
SCALE_FACTOR_MAX: float = 10.0

_COLOR_PATTERN: re.Pattern[str] = re.compile(r"^#[0-9a-fA-F]{6}$")


class WrenchParamsError(Exception):
    """Raised when wrench view parameters are invalid."""


def color_to_int(color: str) -> int:
    """Convert a #rrggbb color string to a 24-bit integer."""
    if not isinstance(color, str) or not _COLOR_PATTERN.match(color):
        raise WrenchParamsError(f"Color must be #rrggbb, got {color!r}")
    return int(color[1:], 16)


def _require_scale(value: float, name: str) -> None:
    """Ensure a scale factor lies within the allowed range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WrenchParamsError(f"{name} must be a number")
    if not SCALE_FACTOR_MIN <= float(value) <= SCALE_FACTOR_MAX:
        raise WrenchParamsError(
            f"{name} must be within [{SCALE_FACTOR_MIN}, {SCALE_FACTOR_MAX}]"
        )


def _require_bool(value: bool, name: str) -> None:
    """Ensure a value is a bool."""
    if not isinstance(value, bool):
        raise WrenchParamsError(f"{name} must be a bool")


@dataclass(frozen=True)
class DataParams:
    """Data source selection."""

    # Title shown above the view
    label: str = DATA_LABEL
    # Wrench topic name
    topic: str | None = DATA_TOPIC
    # Whether the view is visible
    visible: bool = DATA_VISIBLE
    # Reference frame the sensor pose is expressed in
    fixed_frame: str = DATA_FIXED_FRAME


@dataclass(frozen=True)
class DisplayParams:
    """Glyph and scene display options."""

    show_force: bool = DISPLAY_SHOW_FORCE
    show_torque: bool = DISPLAY_SHOW_TORQUE
    force_scale_factor: float = DISPLAY_FORCE_SCALE_FACTOR
    torque_scale_factor: float = DISPLAY_TORQUE_SCALE_FACTOR
    force_color: str = DISPLAY_FORCE_COLOR
    torque_color: str = DISPLAY_TORQUE_COLOR
    grid_visible: bool = DISPLAY_GRID_VISIBLE
    axes_visible: bool = DISPLAY_AXES_VISIBLE


@dataclass(frozen=True)
class WrenchParams:
    """Complete configuration tree for the wrench view."""

    data: DataParams
    display: DisplayParams

    @classmethod
    def defaults(cls) -> WrenchParams:
        """Return the default parameter tree."""
        return cls(data=DataParams(), display=DisplayParams())

    @classmethod
    def from_nested_dict(cls, state: Mapping[str, Any] | None) -> WrenchParams:
        """Restore parameters from a possibly partial nested dict.

        Missing namespaces and fields take their defaults. Unknown keys are
        ignored so that state saved by other versions still loads.
        """
        if state is None:
            state = {}
        if not isinstance(state, Mapping):
            raise WrenchParamsError("state must be a mapping")

        params: WrenchParams = cls(
            data=_namespace_from_dict(DataParams, state.get("data"), "data"),
            display=_namespace_from_dict(
                DisplayParams, state.get("display"), "display"
            ),
        )
        params.validate()
        return params

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        if not isinstance(self.data.label, str):
            raise WrenchParamsError("data.label must be a str")
        if self.data.topic is not None and not isinstance(self.data.topic, str):
            raise WrenchParamsError("data.topic must be a str or None")
        _require_bool(self.data.visible, "data.visible")
        if not isinstance(self.data.fixed_frame, str) or not self.data.fixed_frame:
            raise WrenchParamsError("data.fixed_frame must be set")

        _require_bool(self.display.show_force, "display.show_force")
        _require_bool(self.display.show_torque, "display.show_torque")
        _require_scale(self.display.force_scale_factor, "display.force_scale_factor")
        _require_scale(
            self.display.torque_scale_factor, "display.torque_scale_factor"
        )
        color_to_int(self.display.force_color)
        color_to_int(self.display.torque_color)
        _require_bool(self.display.grid_visible, "display.grid_visible")
        _require_bool(self.display.axes_visible, "display.axes_visible")

    def replace(self, **namespace_overrides: Any) -> WrenchParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation suitable for saving."""
        return _dataclass_to_dict(self)


def _namespace_from_dict(cls: Any, values: Any, scope: str) -> Any:
    """Build one parameter namespace from a partial mapping."""
    if values is None:
        return cls()
    if not isinstance(values, Mapping):
        raise WrenchParamsError(f"{scope} must be a mapping")
    known: set[str] = {field.name for field in fields(cls)}
    return cls(**{key: value for key, value in values.items() if key in known})


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
