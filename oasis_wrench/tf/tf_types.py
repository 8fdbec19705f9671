################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Value types for the TF frame graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from typing import Sequence

from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.math_utils.validation import coerce_translation
from oasis_wrench.math_utils.validation import quaternion_from_xyzw


@dataclass(frozen=True)
class TransformUpdate:
    """Single parent-to-child transform observation.

    Attributes:
        child_frame_id: Frame whose pose is described
        parent_frame_id: Frame the pose is expressed in
        transform: Transform mapping child coordinates into the parent frame
        t_ns: Message timestamp in nanoseconds
    """

    child_frame_id: str
    parent_frame_id: str
    transform: Transform
    t_ns: int

    @staticmethod
    def from_components(
        child_frame_id: str,
        parent_frame_id: str,
        translation: Sequence[float],
        rotation_xyzw: Sequence[float],
        t_ns: int,
    ) -> "TransformUpdate":
        """Create an update from raw message components."""
        transform: Transform = Transform(
            coerce_translation(translation), quaternion_from_xyzw(rotation_xyzw)
        )
        return TransformUpdate(
            child_frame_id=child_frame_id,
            parent_frame_id=parent_frame_id,
            transform=transform,
            t_ns=int(t_ns),
        )


@dataclass(frozen=True)
class FrameNode:
    """Node of the frame graph.

    Attributes:
        frame_id: Frame identifier
        parent_frame_id: Parent frame identifier, None for a root
        transform: Parent-to-child transform, identity for a root
        t_ns: Timestamp of the last write in nanoseconds
    """

    frame_id: str
    parent_frame_id: str | None
    transform: Transform
    t_ns: int

    @property
    def is_root(self) -> bool:
        """Return True when no inbound edge is known for this frame."""
        return self.parent_frame_id is None


class FrameLookup(Protocol):
    """Read access to a frame graph, as needed by path search and composition."""

    def get(self, frame_id: str) -> FrameNode | None:
        ...

    def children(self, frame_id: str) -> Sequence[str]:
        ...
