################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the wrench view state."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pytest

from oasis_wrench.config.wrench_params import WrenchParamsError
from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.wrench.wrench_glyph import WrenchGlyphs
from oasis_wrench.wrench.wrench_types import WrenchSample
from oasis_wrench.wrench.wrench_view import MessageEvent
from oasis_wrench.wrench.wrench_view import TopicInfo
from oasis_wrench.wrench.wrench_view import WrenchView


TOPICS: list[TopicInfo] = [
    TopicInfo("/tf", "tf2_msgs/msg/TFMessage"),
    TopicInfo("/tf_static", "tf2_msgs/msg/TFMessage"),
    TopicInfo("/ft/wrench", "geometry_msgs/msg/WrenchStamped"),
    TopicInfo("/ft/raw", "geometry_msgs/WrenchStamped"),
    TopicInfo("/imu", "sensor_msgs/msg/Imu"),
]


def _tf_msg(*edges: tuple[str, str, list[float], list[float]]) -> dict[str, Any]:
    """Return a decoded TFMessage from (child, parent, xyz, xyzw) tuples."""
    return {
        "transforms": [
            {
                "header": {"frame_id": parent, "stamp": {"sec": 1, "nanosec": 0}},
                "child_frame_id": child,
                "transform": {
                    "translation": dict(zip("xyz", xyz)),
                    "rotation": dict(zip("xyzw", xyzw)),
                },
            }
            for child, parent, xyz, xyzw in edges
        ]
    }


def _wrench_msg(frame_id: str, force: list[float]) -> dict[str, Any]:
    """Return a decoded WrenchStamped with zero torque."""
    return {
        "header": {"frame_id": frame_id, "stamp": {"sec": 1, "nanosec": 0}},
        "wrench": {
            "force": dict(zip("xyz", force)),
            "torque": {"x": 0.0, "y": 0.0, "z": 0.0},
        },
    }


def _ready_view() -> WrenchView:
    """Return a view that has seen a sensor frame and one wrench."""
    view: WrenchView = WrenchView()
    view.select_topics(TOPICS)
    view.handle_messages(
        [
            MessageEvent(
                "/tf",
                _tf_msg(("sensor", "world", [1.0, 0.0, 0.0], [0.0, 0.0, 0.0, 1.0])),
            ),
            MessageEvent("/ft/wrench", _wrench_msg("sensor", [0.0, 0.0, 10.0])),
        ]
    )
    return view


def test_defaults() -> None:
    """Start with default parameters and only the fixed frame."""
    view: WrenchView = WrenchView()
    assert view.params.data.fixed_frame == "world"
    assert view.params.data.topic is None
    assert view.available_frames() == ["world"]
    assert view.sensor_pose() is None
    assert view.glyphs() is None
    assert view.wrench_in_fixed_frame() is None


def test_select_topics_picks_first_wrench_topic() -> None:
    """Classify topics and select the first wrench topic."""
    view: WrenchView = WrenchView()
    view.select_topics(TOPICS)
    assert view.tf_topics == {"/tf", "/tf_static"}
    assert view.wrench_topics == ["/ft/wrench", "/ft/raw"]
    assert view.params.data.topic == "/ft/wrench"


def test_select_topics_keeps_chosen_topic() -> None:
    """Keep a topic that was already chosen."""
    view: WrenchView = WrenchView()
    view.set_topic("/ft/raw")
    view.select_topics(TOPICS)
    assert view.params.data.topic == "/ft/raw"


def test_ros1_tf_topic_is_tracked() -> None:
    """Track TF from a ROS 1 recording with nsec stamps."""
    view: WrenchView = WrenchView()
    view.select_topics(
        [
            TopicInfo("/tf", "tf/tfMessage"),
            TopicInfo("/netft_data", "geometry_msgs/WrenchStamped"),
        ]
    )
    assert view.tf_topics == {"/tf"}
    assert view.params.data.topic == "/netft_data"

    tf_msg: dict[str, Any] = _tf_msg(
        ("sensor", "world", [0.0, 2.0, 0.0], [0.0, 0.0, 0.0, 1.0])
    )
    tf_msg["transforms"][0]["header"]["stamp"] = {"sec": 1, "nsec": 5}
    view.handle_messages(
        [
            MessageEvent("/tf", tf_msg),
            MessageEvent("/netft_data", _wrench_msg("sensor", [1.0, 0.0, 0.0])),
        ]
    )
    pose: Transform | None = view.sensor_pose()
    assert pose is not None
    assert np.allclose(pose.translation, [0.0, 2.0, 0.0])


def test_sensor_pose_in_fixed_frame() -> None:
    """Resolve the sensor pose once TF and a wrench have arrived."""
    view: WrenchView = _ready_view()
    assert view.sensor_frame_id == "sensor"
    pose: Transform | None = view.sensor_pose()
    assert pose is not None
    assert np.allclose(pose.translation, [1.0, 0.0, 0.0])
    assert view.available_frames() == ["sensor", "world"]

    glyphs: WrenchGlyphs | None = view.glyphs()
    assert glyphs is not None
    assert glyphs.force.length == pytest.approx(10.0)


def test_sensor_pose_unresolved_until_connected() -> None:
    """Return None while the sensor is not connected to the fixed frame."""
    view: WrenchView = WrenchView()
    view.select_topics(TOPICS)
    view.handle_messages(
        [
            MessageEvent(
                "/tf",
                _tf_msg(("sensor", "tool", [0.0, 0.0, 0.1], [0.0, 0.0, 0.0, 1.0])),
            ),
            MessageEvent("/ft/wrench", _wrench_msg("sensor", [1.0, 0.0, 0.0])),
        ]
    )
    assert view.sensor_pose() is None
    assert view.available_frames() == ["sensor", "tool", "world"]

    view.handle_messages(
        [
            MessageEvent(
                "/tf_static",
                _tf_msg(("tool", "world", [0.0, 0.0, 1.0], [0.0, 0.0, 0.0, 1.0])),
            )
        ]
    )
    pose: Transform | None = view.sensor_pose()
    assert pose is not None
    assert np.allclose(pose.translation, [0.0, 0.0, 1.1])


def test_sensor_in_fixed_frame_is_identity() -> None:
    """Place a sensor publishing in the fixed frame at the identity."""
    view: WrenchView = _ready_view()
    view.set_fixed_frame("sensor")
    pose: Transform | None = view.sensor_pose()
    assert pose is not None
    assert pose.almost_equal(Transform.identity())


def test_wrench_in_fixed_frame_without_tf() -> None:
    """Draw a wrench published in the fixed frame before any TF arrives."""
    view: WrenchView = WrenchView()
    view.select_topics([TopicInfo("/w", "geometry_msgs/msg/WrenchStamped")])
    view.handle_messages([MessageEvent("/w", _wrench_msg("world", [1.0, 0.0, 0.0]))])
    pose: Transform | None = view.sensor_pose()
    assert pose is not None
    assert pose.almost_equal(Transform.identity())
    assert view.glyphs() is not None


def test_wrench_in_fixed_frame() -> None:
    """Rotate the latest wrench into the fixed frame."""
    view: WrenchView = WrenchView()
    view.select_topics(TOPICS)
    view.handle_messages(
        [
            MessageEvent(
                "/tf",
                _tf_msg(
                    (
                        "sensor",
                        "world",
                        [1.0, 0.0, 0.0],
                        [0.0, 0.0, np.sqrt(0.5), np.sqrt(0.5)],
                    )
                ),
            ),
            MessageEvent("/ft/wrench", _wrench_msg("sensor", [2.0, 0.0, 0.0])),
        ]
    )
    sample: WrenchSample | None = view.wrench_in_fixed_frame()
    assert sample is not None
    assert sample.frame_id == "world"
    assert np.allclose(sample.force_n, [0.0, 2.0, 0.0])


def test_unselected_wrench_topic_ignored() -> None:
    """Ignore wrench messages on other topics."""
    view: WrenchView = WrenchView()
    view.select_topics(TOPICS)
    view.handle_messages([MessageEvent("/ft/raw", _wrench_msg("raw", [1.0, 0.0, 0.0]))])
    assert view.wrench is None


def test_malformed_messages_skipped(caplog: pytest.LogCaptureFixture) -> None:
    """Skip malformed messages and keep processing the tick."""
    view: WrenchView = WrenchView()
    view.select_topics(TOPICS)
    with caplog.at_level(logging.WARNING):
        view.handle_messages(
            [
                MessageEvent("/tf", {"transforms": [{"child_frame_id": "x"}]}),
                MessageEvent("/ft/wrench", {"header": {}}),
                MessageEvent(
                    "/tf",
                    _tf_msg(("b", "a", [0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 1.0])),
                ),
            ]
        )
    assert "Skipping TF message" in caplog.text
    assert "Skipping wrench message" in caplog.text
    assert view.wrench is None
    assert view.service.all_frame_ids() == {"a", "b"}


def test_set_topic_clears_sample() -> None:
    """Forget the previous sample when the topic changes."""
    view: WrenchView = _ready_view()
    view.set_topic("/ft/wrench")
    assert view.wrench is not None
    view.set_topic("/ft/raw")
    assert view.wrench is None
    assert view.sensor_frame_id is None


def test_state_restores_view() -> None:
    """Restore a view from its saved state."""
    view: WrenchView = _ready_view()
    view.set_fixed_frame("sensor")
    restored: WrenchView = WrenchView.from_state(view.state())
    assert restored.params == view.params


def test_invalid_fixed_frame_rejected() -> None:
    """Reject an empty fixed frame."""
    view: WrenchView = WrenchView()
    with pytest.raises(WrenchParamsError):
        view.set_fixed_frame("")
    assert view.params.data.fixed_frame == "world"
