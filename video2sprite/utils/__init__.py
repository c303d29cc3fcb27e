"""Utilities for video2sprite."""

from video2sprite.utils.errors import (
    ConfigurationError,
    DecodeError,
    EmptyCompositionError,
    EmptySampleError,
    FrameSizeError,
    FrameTimeoutError,
    NoSelectionError,
    OutputError,
    SamplingCancelledError,
    SourceOpenError,
    Video2SpriteError,
)
from video2sprite.utils.helpers import (
    format_duration,
    format_size,
    format_timestamp,
    parse_index_ranges,
)
from video2sprite.utils.logger import get_logger, log_performance, setup_logger

__all__ = [
    # Errors
    "ConfigurationError",
    "DecodeError",
    "EmptyCompositionError",
    "EmptySampleError",
    "FrameSizeError",
    "FrameTimeoutError",
    "NoSelectionError",
    "OutputError",
    "SamplingCancelledError",
    "SourceOpenError",
    "Video2SpriteError",
    # Helpers
    "format_duration",
    "format_size",
    "format_timestamp",
    "parse_index_ranges",
    # Logging
    "get_logger",
    "log_performance",
    "setup_logger",
]
