"""Data models for video2sprite."""

from video2sprite.models.buffer import PixelBuffer
from video2sprite.models.frames import SELECTION_MODE_MANUAL, SampledFrame, SpriteManifest
from video2sprite.models.results import SpriteResult

__all__ = [
    "PixelBuffer",
    "SELECTION_MODE_MANUAL",
    "SampledFrame",
    "SpriteManifest",
    "SpriteResult",
]
