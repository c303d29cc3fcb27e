"""
video2sprite

Turns sampled video frames into sprite sheets for game and animation
engines, with optional per-frame background removal.
"""

__version__ = "2.0.0"

from video2sprite.models import PixelBuffer, SampledFrame, SpriteManifest
from video2sprite.utils import (
    ConfigurationError,
    DecodeError,
    EmptyCompositionError,
    EmptySampleError,
    NoSelectionError,
    Video2SpriteError,
    get_logger,
    setup_logger,
)

__all__ = [
    "__version__",
    # Models
    "PixelBuffer",
    "SampledFrame",
    "SpriteManifest",
    # Utils
    "ConfigurationError",
    "DecodeError",
    "EmptyCompositionError",
    "EmptySampleError",
    "NoSelectionError",
    "Video2SpriteError",
    "get_logger",
    "setup_logger",
]
