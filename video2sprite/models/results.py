"""
Data models for written sprite outputs.
"""

from dataclasses import dataclass
from pathlib import Path

from video2sprite.models.frames import SpriteManifest


@dataclass
class SpriteResult:
    """Result of writing a sprite sheet and its manifest to disk."""

    sheet_path: Path
    manifest_path: Path
    manifest: SpriteManifest
    sheet_size: int
    manifest_size: int

    @property
    def total_size(self) -> int:
        """Get combined size in bytes."""
        return self.sheet_size + self.manifest_size

    @property
    def size_mb(self) -> float:
        """Get total size in megabytes."""
        return self.total_size / (1024 * 1024)

    @property
    def resolution(self) -> str:
        """Get sheet resolution as string."""
        return f"{self.manifest.sheet_width}x{self.manifest.sheet_height}"
