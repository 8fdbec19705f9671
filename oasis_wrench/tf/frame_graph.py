################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Frame graph store built from streamed TF updates.

The store is a forest by assumption only. Every update is accepted: the
child node is overwritten (last write wins, no timestamp ordering check)
and an unseen parent is inserted as a root with the identity transform.
Nodes are never removed.

Reassigning a parent is accepted as-is, so an inconsistent stream can form
a cycle. Path search still terminates on such a graph but the path it finds
is not guaranteed to be meaningful.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable
from typing import Mapping

from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.tf.tf_types import FrameNode
from oasis_wrench.tf.tf_types import TransformUpdate


_LOG: logging.Logger = logging.getLogger(__name__)


class FrameGraphSnapshot:
    """Immutable point-in-time view of a frame graph."""

    def __init__(
        self,
        nodes: Mapping[str, FrameNode],
        children: Mapping[str, tuple[str, ...]],
    ) -> None:
        self._nodes: dict[str, FrameNode] = dict(nodes)
        self._children: dict[str, tuple[str, ...]] = dict(children)

    def get(self, frame_id: str) -> FrameNode | None:
        return self._nodes.get(frame_id)

    def children(self, frame_id: str) -> tuple[str, ...]:
        return self._children.get(frame_id, ())

    def all_frame_ids(self) -> set[str]:
        return set(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, frame_id: object) -> bool:
        return frame_id in self._nodes


class FrameGraph:
    """Mutable mapping of frame ID to FrameNode with a child index.

    All public methods take a single lock, so updates may be applied from
    one thread while another thread takes snapshots for resolution.
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._lock: threading.Lock = threading.Lock()
        self._nodes: dict[str, FrameNode] = {}

        # Parent frame ID -> child frame IDs in first-seen order
        self._children: dict[str, dict[str, None]] = {}

    def apply_updates(self, batch: Iterable[TransformUpdate]) -> None:
        """Upsert each update of the batch in input order."""
        with self._lock:
            for update in batch:
                self._upsert(update)

    def apply_update(self, update: TransformUpdate) -> None:
        """Upsert a single update."""
        with self._lock:
            self._upsert(update)

    def get(self, frame_id: str) -> FrameNode | None:
        """Return the node for a frame, or None if it was never seen."""
        with self._lock:
            return self._nodes.get(frame_id)

    def children(self, frame_id: str) -> tuple[str, ...]:
        """Return the IDs of frames whose parent is frame_id."""
        with self._lock:
            return tuple(self._children.get(frame_id, ()))

    def all_frame_ids(self) -> set[str]:
        """Return every frame ID seen so far."""
        with self._lock:
            return set(self._nodes)

    def snapshot(self) -> FrameGraphSnapshot:
        """Return an immutable copy of the current graph."""
        with self._lock:
            return FrameGraphSnapshot(
                self._nodes,
                {
                    parent: tuple(children)
                    for parent, children in self._children.items()
                },
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __contains__(self, frame_id: object) -> bool:
        with self._lock:
            return frame_id in self._nodes

    def _upsert(self, update: TransformUpdate) -> None:
        child: str = update.child_frame_id
        parent: str = update.parent_frame_id

        previous: FrameNode | None = self._nodes.get(child)
        if (
            previous is not None
            and previous.parent_frame_id is not None
            and previous.parent_frame_id != parent
        ):
            _LOG.debug(
                "Frame %s reparented from %s to %s",
                child,
                previous.parent_frame_id,
                parent,
            )
            siblings: dict[str, None] | None = self._children.get(
                previous.parent_frame_id
            )
            if siblings is not None:
                siblings.pop(child, None)

        self._nodes[child] = FrameNode(
            frame_id=child,
            parent_frame_id=parent,
            transform=update.transform,
            t_ns=update.t_ns,
        )
        self._children.setdefault(parent, {})[child] = None

        if parent not in self._nodes:
            self._nodes[parent] = FrameNode(
                frame_id=parent,
                parent_frame_id=None,
                transform=Transform.identity(),
                t_ns=update.t_ns,
            )
