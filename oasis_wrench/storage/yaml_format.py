################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML serialization of wrench view state."""

from __future__ import annotations

from typing import Any

import yaml

from oasis_wrench.config.wrench_params import WrenchParams
from oasis_wrench.config.wrench_params import WrenchParamsError


# Schema version written into every state file
STATE_VERSION: int = 1


class WrenchYamlError(Exception):
    """Raised when wrench view YAML is invalid."""


def dumps_yaml(params: WrenchParams) -> str:
    """Serialize view parameters to deterministic YAML."""
    data: dict[str, Any] = {"version": STATE_VERSION}
    data.update(params.as_nested_dict())
    return yaml.safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_yaml(text: str) -> WrenchParams:
    """Parse view parameters from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WrenchYamlError("Malformed YAML") from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise WrenchYamlError("YAML root must be a mapping")

    version: Any = loaded.pop("version", STATE_VERSION)
    if version != STATE_VERSION:
        raise WrenchYamlError(f"Unsupported state version: {version}")

    try:
        return WrenchParams.from_nested_dict(loaded)
    except WrenchParamsError as exc:
        raise WrenchYamlError(str(exc)) from exc
