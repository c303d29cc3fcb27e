"""
Custom exceptions for video2sprite.

This module defines the exception hierarchy used throughout the application.
Per-frame decode failures are recovered inside the sampler; every other
error kind here is fatal to the operation that raised it.
"""

from typing import Optional


class Video2SpriteError(Exception):
    """Base exception for all video2sprite errors."""

    pass


class ConfigurationError(Video2SpriteError):
    """Configuration is invalid or missing."""

    pass


class SourceOpenError(Video2SpriteError):
    """Frame source could not be opened."""

    pass


class DecodeError(Video2SpriteError):
    """Frame source failed to produce a frame at a timestamp."""

    def __init__(self, message: str, time: Optional[float] = None):
        """
        Initialize decode error.

        Args:
            message: Error message
            time: Timestamp in seconds that failed to decode
        """
        super().__init__(message)
        self.time = time


class FrameTimeoutError(DecodeError):
    """Frame decode exceeded the per-frame timeout."""

    def __init__(self, message: str, time: float, timeout: float):
        """
        Initialize timeout error.

        Args:
            message: Error message
            time: Timestamp in seconds that timed out
            timeout: Timeout value in seconds
        """
        super().__init__(message, time=time)
        self.timeout = timeout


class EmptySampleError(Video2SpriteError):
    """No frame survived sampling."""

    def __init__(self, message: str, attempted: int = 0):
        super().__init__(message)
        self.attempted = attempted


class SamplingCancelledError(Video2SpriteError):
    """Sampling was cancelled between frames."""

    pass


class NoSelectionError(Video2SpriteError):
    """Selection was confirmed with no frame chosen."""

    pass


class EmptyCompositionError(Video2SpriteError):
    """Composer was given zero frames."""

    pass


class FrameSizeError(Video2SpriteError):
    """Frame dimensions do not match the sprite cell size."""

    pass


class OutputError(Video2SpriteError):
    """Sprite sheet or manifest could not be written."""

    pass
