################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Compose the transforms along a frame path into one transform."""

from __future__ import annotations

import logging
from typing import Sequence

from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.tf.tf_types import FrameLookup
from oasis_wrench.tf.tf_types import FrameNode


_LOG: logging.Logger = logging.getLogger(__name__)


def edge_transform(
    graph: FrameLookup, from_frame: str, to_frame: str
) -> Transform | None:
    """Return the transform for one step of a path.

    Stepping from a parent to its child yields the child's stored transform.
    Stepping from a child to its parent yields the inverse of the child's
    stored transform. Returns None when the graph has no such edge.
    """
    to_node: FrameNode | None = graph.get(to_frame)
    if to_node is not None and to_node.parent_frame_id == from_frame:
        return to_node.transform

    from_node: FrameNode | None = graph.get(from_frame)
    if from_node is not None and from_node.parent_frame_id == to_frame:
        return from_node.transform.inverse()

    return None


def resolve(graph: FrameLookup, path: Sequence[str]) -> Transform | None:
    """Compose the edge transforms along path, source first.

    The result maps coordinates in the last frame of the path into the first
    frame of the path. Paths shorter than two frames resolve to the identity.
    """
    if len(path) < 2:
        return Transform.identity()

    result: Transform = Transform.identity()
    for from_frame, to_frame in zip(path[:-1], path[1:]):
        edge: Transform | None = edge_transform(graph, from_frame, to_frame)
        if edge is None:
            _LOG.debug("Missing transform between %s and %s", from_frame, to_frame)
            return None
        result = result * edge

    return result.normalized()
