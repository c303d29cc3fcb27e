"""
Sprite sheet composition.

Lays same-sized frames out on a near-square grid inside one RGBA buffer.
"""

import math
from typing import Optional, Sequence

from ..matte import MatteConfig
from ..models import PixelBuffer, SpriteManifest
from ..utils import EmptyCompositionError, FrameSizeError, get_logger

logger = get_logger(__name__)


def grid_layout(frame_count: int) -> tuple[int, int]:
    """
    Calculate sprite sheet grid dimensions.

    Args:
        frame_count: Number of frames to place

    Returns:
        (columns, rows) with columns = ceil(sqrt(n)), rows = ceil(n / columns)
    """
    if frame_count <= 0:
        raise EmptyCompositionError("Cannot lay out a sprite sheet with no frames")
    columns = math.ceil(math.sqrt(frame_count))
    rows = math.ceil(frame_count / columns)
    return columns, rows


class SpriteComposer:
    """Composes frames into a sprite sheet and its manifest."""

    def __init__(self, frame_width: int, frame_height: int):
        """
        Initialize composer.

        Args:
            frame_width: Cell width in pixels
            frame_height: Cell height in pixels
        """
        if frame_width <= 0 or frame_height <= 0:
            raise FrameSizeError(f"Cell size must be positive, got {frame_width}x{frame_height}")
        self.frame_width = frame_width
        self.frame_height = frame_height

    def compose(
        self,
        frames: Sequence[PixelBuffer],
        quality: float = 0.9,
        matte: Optional[MatteConfig] = None,
    ) -> tuple[PixelBuffer, SpriteManifest]:
        """
        Place frames on the grid.

        Frame i goes to cell (i % columns, i // columns); unused trailing
        cells stay fully transparent.

        Args:
            frames: Frames of exactly frame_width x frame_height
            quality: Encoder quality hint recorded in the manifest
            matte: Matte that was applied to the frames, if any

        Returns:
            (sprite sheet, manifest)

        Raises:
            EmptyCompositionError: If frames is empty
            FrameSizeError: If a frame has the wrong dimensions
        """
        if not frames:
            raise EmptyCompositionError("Cannot compose a sprite sheet from zero frames")

        for index, frame in enumerate(frames):
            if frame.size != (self.frame_width, self.frame_height):
                raise FrameSizeError(
                    f"Frame {index} is {frame.width}x{frame.height}, "
                    f"expected {self.frame_width}x{self.frame_height}"
                )

        columns, rows = grid_layout(len(frames))
        sheet = PixelBuffer.blank(columns * self.frame_width, rows * self.frame_height)
        canvas = sheet.as_array()

        for index, frame in enumerate(frames):
            x = (index % columns) * self.frame_width
            y = (index // columns) * self.frame_height
            canvas[y : y + self.frame_height, x : x + self.frame_width] = frame.as_array()

        manifest = SpriteManifest(
            frame_width=self.frame_width,
            frame_height=self.frame_height,
            columns=columns,
            rows=rows,
            total_frames=len(frames),
            matte_applied=matte is not None,
            matte_kind=matte.kind.value if matte is not None else None,
            quality=quality,
        )

        logger.info(
            f"Composed {len(frames)} frame(s) into {columns}x{rows} grid "
            f"({sheet.width}x{sheet.height}px)"
        )
        return sheet, manifest


def compose(
    frames: Sequence[PixelBuffer],
    frame_width: int,
    frame_height: int,
    quality: float = 0.9,
    matte: Optional[MatteConfig] = None,
) -> tuple[PixelBuffer, SpriteManifest]:
    """
    Convenience function to compose a sprite sheet.

    Args:
        frames: Frames to place
        frame_width: Cell width
        frame_height: Cell height
        quality: Encoder quality hint
        matte: Matte applied to the frames, if any

    Returns:
        (sprite sheet, manifest)
    """
    return SpriteComposer(frame_width, frame_height).compose(frames, quality, matte)
