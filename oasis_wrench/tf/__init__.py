################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""TF frame graph, path search and transform resolution."""

from __future__ import annotations

from oasis_wrench.tf.frame_graph import FrameGraph
from oasis_wrench.tf.frame_graph import FrameGraphSnapshot
from oasis_wrench.tf.resolution_service import TfResolutionService
from oasis_wrench.tf.tf_types import FrameNode
from oasis_wrench.tf.tf_types import TransformUpdate


__all__ = [
    "FrameGraph",
    "FrameGraphSnapshot",
    "FrameNode",
    "TfResolutionService",
    "TransformUpdate",
]
