################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for breadth-first frame path search."""

from __future__ import annotations

from oasis_wrench.tf.frame_graph import FrameGraph
from oasis_wrench.tf.path_resolver import find_path
from oasis_wrench.tf.path_resolver import neighbors
from oasis_wrench.tf.tf_types import TransformUpdate


def _graph(*edges: tuple[str, str]) -> FrameGraph:
    """Return a graph with identity edges given as (child, parent) pairs."""
    graph: FrameGraph = FrameGraph()
    graph.apply_updates(
        [
            TransformUpdate.from_components(
                child, parent, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 1.0], 0
            )
            for child, parent in edges
        ]
    )
    return graph


def test_same_frame_without_graph() -> None:
    """Return a single-element path even for unknown frames."""
    assert find_path(FrameGraph(), "x", "x") == ["x"]


def test_parent_to_child() -> None:
    """Follow an edge in its stored direction."""
    graph: FrameGraph = _graph(("sensor", "world"))
    assert find_path(graph, "world", "sensor") == ["world", "sensor"]


def test_child_to_parent() -> None:
    """Follow an edge against its stored direction."""
    graph: FrameGraph = _graph(("sensor", "world"))
    assert find_path(graph, "sensor", "world") == ["sensor", "world"]


def test_path_through_common_ancestor() -> None:
    """Climb to a shared ancestor and descend to the target."""
    graph: FrameGraph = _graph(
        ("base_link", "world"),
        ("arm", "base_link"),
        ("ft_sensor", "arm"),
        ("camera", "base_link"),
    )
    assert find_path(graph, "camera", "ft_sensor") == [
        "camera",
        "base_link",
        "arm",
        "ft_sensor",
    ]


def test_unknown_frame_has_no_path() -> None:
    """Return an empty path when a frame was never seen."""
    graph: FrameGraph = _graph(("sensor", "world"))
    assert find_path(graph, "x", "world") == []
    assert find_path(graph, "world", "x") == []


def test_disjoint_trees_have_no_path() -> None:
    """Return an empty path across disconnected components."""
    graph: FrameGraph = _graph(("p", "q"), ("r", "s"))
    assert find_path(graph, "q", "s") == []


def test_cycle_terminates() -> None:
    """Terminate on a graph corrupted into a cycle."""
    graph: FrameGraph = _graph(("b", "a"), ("c", "b"), ("a", "c"))
    path: list[str] = find_path(graph, "a", "c")
    assert path[0] == "a"
    assert path[-1] == "c"
    assert find_path(graph, "a", "unknown") == []


def test_neighbors_lists_children_then_parent() -> None:
    """Treat the directed tree as undirected."""
    graph: FrameGraph = _graph(("b", "a"), ("c", "b"), ("d", "b"))
    assert list(neighbors(graph, "b")) == ["c", "d", "a"]
    assert list(neighbors(graph, "a")) == ["b"]
