"""
Data models for sampled frames and sprite sheet manifests.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from video2sprite.models.buffer import PixelBuffer

SELECTION_MODE_MANUAL = "manual"


@dataclass(eq=False)
class SampledFrame:
    """A decoded frame and the source time it was taken at."""

    buffer: PixelBuffer
    source_time: float

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


@dataclass(frozen=True)
class SpriteManifest:
    """Describes how to slice a composed sprite sheet back into frames."""

    frame_width: int
    frame_height: int
    columns: int
    rows: int
    total_frames: int
    matte_applied: bool = False
    matte_kind: Optional[str] = None
    quality: float = 0.9

    @property
    def sheet_width(self) -> int:
        """Get sprite sheet width in pixels."""
        return self.columns * self.frame_width

    @property
    def sheet_height(self) -> int:
        """Get sprite sheet height in pixels."""
        return self.rows * self.frame_height

    def cell_origin(self, index: int) -> tuple[int, int]:
        """
        Get the top-left pixel of a frame's cell.

        Args:
            index: 0-based frame index

        Returns:
            (x, y) pixel origin
        """
        if not 0 <= index < self.total_frames:
            raise IndexError(f"Frame index {index} out of range 0..{self.total_frames - 1}")
        return (index % self.columns) * self.frame_width, (index // self.columns) * self.frame_height

    def to_dict(
        self,
        spritesheet: str = "spritesheet.png",
        frame_interval: Optional[int] = None,
        selection_mode: Optional[str] = None,
        generated_at: Optional[datetime] = None,
        version: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Render the JSON manifest written next to the sprite sheet.

        Args:
            spritesheet: File name of the sheet image
            frame_interval: Sampling interval in ms (direct mode only)
            selection_mode: "manual" when frames were hand-picked
            generated_at: Generation time (now if None)
            version: Producer version (package version if None)

        Returns:
            JSON-serializable dictionary with camelCase keys
        """
        if version is None:
            from video2sprite import __version__

            version = __version__
        stamp = generated_at or datetime.now(timezone.utc)

        data: dict[str, Any] = {
            "spritesheet": spritesheet,
            "frameWidth": self.frame_width,
            "frameHeight": self.frame_height,
            "totalFrames": self.total_frames,
            "columns": self.columns,
            "rows": self.rows,
        }
        if frame_interval is not None:
            data["frameInterval"] = frame_interval
        data["backgroundRemoved"] = self.matte_applied
        if self.matte_applied and self.matte_kind:
            data["backgroundMethod"] = self.matte_kind
        data["quality"] = self.quality
        data["generatedAt"] = stamp.isoformat()
        data["version"] = version
        if selection_mode is not None:
            data["selectionMode"] = selection_mode
        return data
