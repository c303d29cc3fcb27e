"""
Sprite sheet composition and output.
"""

from .composer import SpriteComposer, compose, grid_layout
from .writer import DEFAULT_MANIFEST_NAME, DEFAULT_SHEET_NAME, SpriteWriter, buffer_to_image

__all__ = [
    "DEFAULT_MANIFEST_NAME",
    "DEFAULT_SHEET_NAME",
    "SpriteComposer",
    "SpriteWriter",
    "buffer_to_image",
    "compose",
    "grid_layout",
]
