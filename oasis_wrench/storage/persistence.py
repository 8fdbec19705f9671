################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Saving and restoring wrench views between sessions.

A view is stored as its parameter tree only. Frames, the latest wrench and
the topic lists are rebuilt from live messages after a restore.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from oasis_wrench.config.wrench_params import WrenchParams
from oasis_wrench.storage.yaml_format import WrenchYamlError
from oasis_wrench.storage.yaml_format import dumps_yaml
from oasis_wrench.storage.yaml_format import loads_yaml
from oasis_wrench.tf.resolution_service import TfResolutionService
from oasis_wrench.wrench.wrench_view import WrenchView


_LOG: logging.Logger = logging.getLogger(__name__)

YAML_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})


class WrenchPersistenceError(Exception):
    """Raised when a view state file cannot be written or read."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    return Path(path).suffix.lower() in YAML_SUFFIXES


def save_params(path: str | os.PathLike[str], params: WrenchParams) -> None:
    """Write view parameters to path, replacing any previous file.

    The file is written next to its destination and moved into place, so a
    reader sees either the old state or the new state. The partial file is
    removed if writing fails.
    """
    state_path: Path = _state_path(path)
    text: str = dumps_yaml(params)

    tmp_path: Path | None = None
    try:
        state_path.parent.mkdir(parents=True, exist_ok=True)
        fd: int
        tmp_name: str
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{state_path.name}.", suffix=".tmp", dir=state_path.parent
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, state_path)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise WrenchPersistenceError(f"Cannot save view state to {state_path}") from exc

    _LOG.debug("Saved view state to %s", state_path)


def load_params(
    path: str | os.PathLike[str], *, missing_ok: bool = False
) -> WrenchParams:
    """Read view parameters from path.

    With missing_ok, a file that does not exist yet yields the defaults, as
    for a view opened for the first time.
    """
    state_path: Path = _state_path(path)

    try:
        text: str = state_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if not missing_ok:
            raise WrenchPersistenceError(f"No view state at {state_path}") from exc
        _LOG.info("No view state at %s, using defaults", state_path)
        return WrenchParams.defaults()
    except OSError as exc:
        raise WrenchPersistenceError(f"Cannot read view state {state_path}") from exc

    try:
        return loads_yaml(text)
    except WrenchYamlError as exc:
        raise WrenchPersistenceError(f"Invalid view state in {state_path}") from exc


def save_view(path: str | os.PathLike[str], view: WrenchView) -> None:
    """Persist the restorable state of a view."""
    save_params(path, view.params)


def load_view(
    path: str | os.PathLike[str],
    service: TfResolutionService | None = None,
    *,
    missing_ok: bool = False,
) -> WrenchView:
    """Rebuild a view from a state file, optionally sharing a TF service."""
    return WrenchView(load_params(path, missing_ok=missing_ok), service)


def _state_path(path: str | os.PathLike[str]) -> Path:
    state_path: Path = Path(path)
    if state_path.suffix.lower() not in YAML_SUFFIXES:
        raise WrenchPersistenceError(
            f"View state path must end with .yaml or .yml: {state_path}"
        )
    return state_path
