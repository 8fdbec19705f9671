################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Breadth-first path search over the frame graph."""

from __future__ import annotations

from collections import deque
from typing import Deque
from typing import Iterator

from oasis_wrench.tf.tf_types import FrameLookup
from oasis_wrench.tf.tf_types import FrameNode


def find_path(graph: FrameLookup, source: str, target: str) -> list[str]:
    """Return the frame IDs connecting source to target, inclusive.

    Edges are followed in both directions. An empty list means the frames
    are not connected, including when either frame was never seen.
    """
    if source == target:
        return [source]

    queue: Deque[str] = deque([source])
    predecessors: dict[str, str | None] = {source: None}

    while queue:
        frame: str = queue.popleft()
        if frame == target:
            return _backtrack(predecessors, target)

        for neighbor in neighbors(graph, frame):
            if neighbor not in predecessors:
                predecessors[neighbor] = frame
                queue.append(neighbor)

    return []


def neighbors(graph: FrameLookup, frame_id: str) -> Iterator[str]:
    """Yield the children of a frame, then its parent if it has one."""
    yield from graph.children(frame_id)

    node: FrameNode | None = graph.get(frame_id)
    if node is not None and node.parent_frame_id is not None:
        yield node.parent_frame_id


def _backtrack(predecessors: dict[str, str | None], target: str) -> list[str]:
    path: list[str] = []
    frame: str | None = target
    while frame is not None:
        path.append(frame)
        frame = predecessors[frame]
    path.reverse()
    return path
