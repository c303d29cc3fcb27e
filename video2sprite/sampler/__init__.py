"""
Frame sampling from video sources.
"""

from .sampler import (
    DEFAULT_DIRECT_FRAME_COUNT,
    DEFAULT_FRAME_TIMEOUT,
    MAX_MANUAL_FRAMES,
    FrameSampler,
    SampleConfig,
    SampleMode,
    plan_timestamps,
    sample,
)
from .source import FrameSource, VideoFileSource

__all__ = [
    "DEFAULT_DIRECT_FRAME_COUNT",
    "DEFAULT_FRAME_TIMEOUT",
    "MAX_MANUAL_FRAMES",
    "FrameSampler",
    "FrameSource",
    "SampleConfig",
    "SampleMode",
    "VideoFileSource",
    "plan_timestamps",
    "sample",
]
