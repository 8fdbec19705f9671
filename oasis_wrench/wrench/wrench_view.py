################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""View state for drawing a wrench sensor against a fixed frame.

WrenchView consumes the messages delivered on each render tick, keeps the
frame graph current and answers what the renderer needs: the sensor pose in
the fixed frame, the glyphs for the latest wrench and the frames a user may
pick as the fixed frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import replace
from typing import Any
from typing import Iterable
from typing import Mapping

from oasis_wrench.config.wrench_params import WrenchParams
from oasis_wrench.math_utils.transform import Transform
from oasis_wrench.tf.resolution_service import TfResolutionService
from oasis_wrench.tf.tf_conversions import TfConversionError
from oasis_wrench.tf.tf_conversions import is_tf_schema
from oasis_wrench.tf.tf_conversions import is_wrench_schema
from oasis_wrench.tf.tf_conversions import updates_from_tf_message
from oasis_wrench.tf.tf_types import TransformUpdate
from oasis_wrench.wrench.wrench_glyph import WrenchGlyphs
from oasis_wrench.wrench.wrench_glyph import build_wrench_glyphs
from oasis_wrench.wrench.wrench_types import WrenchSample
from oasis_wrench.wrench.wrench_types import WrenchTypesError
from oasis_wrench.wrench.wrench_types import wrench_from_msg


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopicInfo:
    """Advertised topic and its message schema."""

    name: str
    schema_name: str


@dataclass(frozen=True)
class MessageEvent:
    """Message received on a topic during a render tick."""

    topic: str
    message: Any


class WrenchView:
    """Track TF and wrench messages for one wrench visualization."""

    def __init__(
        self,
        params: WrenchParams | None = None,
        service: TfResolutionService | None = None,
    ) -> None:
        """Initialize the view with validated parameters."""
        if params is None:
            params = WrenchParams.defaults()
        params.validate()
        self._params: WrenchParams = params
        self._service: TfResolutionService = (
            service if service is not None else TfResolutionService()
        )
        self._tf_topics: set[str] = set()
        self._wrench_topics: list[str] = []
        self._wrench: WrenchSample | None = None
        self._sensor_frame_id: str | None = None

    @classmethod
    def from_state(cls, state: Mapping[str, Any] | None) -> WrenchView:
        """Create a view from previously saved state."""
        return cls(WrenchParams.from_nested_dict(state))

    @property
    def params(self) -> WrenchParams:
        return self._params

    @property
    def service(self) -> TfResolutionService:
        return self._service

    @property
    def wrench(self) -> WrenchSample | None:
        """Return the latest wrench sample on the selected topic."""
        return self._wrench

    @property
    def sensor_frame_id(self) -> str | None:
        """Return the frame of the latest wrench sample."""
        return self._sensor_frame_id

    @property
    def wrench_topics(self) -> list[str]:
        return list(self._wrench_topics)

    @property
    def tf_topics(self) -> set[str]:
        return set(self._tf_topics)

    def state(self) -> dict[str, Any]:
        """Return the view state as a restorable nested dict."""
        return self._params.as_nested_dict()

    def set_params(self, params: WrenchParams) -> None:
        """Replace the view parameters after validating them."""
        params.validate()
        self._params = params

    def set_fixed_frame(self, fixed_frame: str) -> None:
        """Select the frame the sensor pose is expressed in."""
        self.set_params(
            self._params.replace(
                data=replace(self._params.data, fixed_frame=fixed_frame)
            )
        )

    def set_topic(self, topic: str | None) -> None:
        """Select the wrench topic and forget the previous sample."""
        if topic != self._params.data.topic:
            self._wrench = None
            self._sensor_frame_id = None
        self.set_params(
            self._params.replace(data=replace(self._params.data, topic=topic))
        )

    def select_topics(self, topics: Iterable[TopicInfo]) -> None:
        """Classify advertised topics and pick a wrench topic if none is set."""
        tf_topics: set[str] = set()
        wrench_topics: list[str] = []
        for topic in topics:
            if is_tf_schema(topic.schema_name):
                tf_topics.add(topic.name)
            elif is_wrench_schema(topic.schema_name):
                wrench_topics.append(topic.name)

        self._tf_topics = tf_topics
        self._wrench_topics = wrench_topics

        if self._params.data.topic is None and wrench_topics:
            _LOG.info("Selecting wrench topic %s", wrench_topics[0])
            self.set_topic(wrench_topics[0])

    def handle_messages(self, events: Iterable[MessageEvent]) -> None:
        """Process the messages of one render tick.

        TF messages are gathered into one batch and applied after the loop,
        in arrival order. Malformed messages are skipped.
        """
        batch: list[TransformUpdate] = []
        for event in events:
            if event.topic in self._tf_topics:
                try:
                    batch.extend(updates_from_tf_message(event.message))
                except TfConversionError as exc:
                    _LOG.warning("Skipping TF message on %s, %s", event.topic, exc)

            if event.topic == self._params.data.topic:
                try:
                    sample: WrenchSample = wrench_from_msg(event.message)
                except (TfConversionError, WrenchTypesError) as exc:
                    _LOG.warning(
                        "Skipping wrench message on %s, %s", event.topic, exc
                    )
                    continue
                self._wrench = sample
                self._sensor_frame_id = sample.frame_id

        if batch:
            self._service.apply_updates(batch)

    def available_frames(self) -> list[str]:
        """Return the sorted frames selectable as the fixed frame."""
        frames: set[str] = self._service.all_frame_ids()
        frames.add(self._params.data.fixed_frame)
        if self._sensor_frame_id:
            frames.add(self._sensor_frame_id)
        return sorted(frames)

    def sensor_pose(self) -> Transform | None:
        """Return the sensor frame pose expressed in the fixed frame.

        A sensor publishing in the fixed frame itself sits at the identity.
        Returns None when no wrench has been received or when the frames are
        not yet connected.
        """
        if not self._sensor_frame_id:
            return None
        return self._service.resolve(
            self._params.data.fixed_frame, self._sensor_frame_id
        )

    def wrench_in_fixed_frame(self) -> WrenchSample | None:
        """Return the latest wrench rotated into the fixed frame."""
        if self._wrench is None:
            return None

        fixed_frame: str = self._params.data.fixed_frame
        pose: Transform | None = self._service.resolve(
            fixed_frame, self._wrench.frame_id
        )
        if pose is None:
            return None
        return self._wrench.expressed_in(pose, fixed_frame)

    def glyphs(self) -> WrenchGlyphs | None:
        """Return the glyphs for the latest wrench, drawn in the sensor frame."""
        if self._wrench is None:
            return None
        return build_wrench_glyphs(self._wrench, self._params.display)
