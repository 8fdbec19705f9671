################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Frame-to-frame transform lookup over a live frame graph."""

from __future__ import annotations

import logging
from typing import Iterable

from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.tf import path_resolver
from oasis_wrench.tf import transform_composer
from oasis_wrench.tf.frame_graph import FrameGraph
from oasis_wrench.tf.frame_graph import FrameGraphSnapshot
from oasis_wrench.tf.tf_types import FrameNode
from oasis_wrench.tf.tf_types import TransformUpdate


_LOG: logging.Logger = logging.getLogger(__name__)


class TfResolutionService:
    """Accept TF update batches and answer frame-to-frame queries.

    A query returns None while the two frames are not connected. Callers
    are expected to retry on a later tick, as the graph converges while
    more updates arrive.
    """

    def __init__(self, graph: FrameGraph | None = None) -> None:
        """Initialize the service around an existing or empty graph."""
        self._graph: FrameGraph = graph if graph is not None else FrameGraph()

    @property
    def graph(self) -> FrameGraph:
        """Return the underlying frame graph."""
        return self._graph

    def apply_updates(self, batch: Iterable[TransformUpdate]) -> None:
        """Apply a batch of TF updates in order."""
        self._graph.apply_updates(batch)

    def get(self, frame_id: str) -> FrameNode | None:
        """Return the node for a frame, or None if it was never seen."""
        return self._graph.get(frame_id)

    def all_frame_ids(self) -> set[str]:
        """Return every frame ID seen so far."""
        return self._graph.all_frame_ids()

    def find_path(self, source_frame: str, target_frame: str) -> list[str]:
        """Return the frame path from source to target, empty if unconnected."""
        if source_frame == target_frame:
            return [source_frame]
        return path_resolver.find_path(
            self._graph.snapshot(), source_frame, target_frame
        )

    def resolve(self, source_frame: str, target_frame: str) -> Transform | None:
        """Return the pose of target_frame expressed in source_frame.

        The returned transform maps target_frame coordinates into
        source_frame. Returns None when no path connects the frames or when
        a path edge cannot be resolved.
        """
        if source_frame == target_frame:
            return Transform.identity()

        snapshot: FrameGraphSnapshot = self._graph.snapshot()
        path: list[str] = path_resolver.find_path(
            snapshot, source_frame, target_frame
        )
        if not path:
            _LOG.debug("No path from %s to %s", source_frame, target_frame)
            return None

        return transform_composer.resolve(snapshot, path)
