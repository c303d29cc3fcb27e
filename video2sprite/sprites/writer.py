"""
Sprite sheet persistence.

Writes the composed sheet as PNG and the manifest as JSON.
"""

import json
from pathlib import Path
from typing import Any, Optional

from PIL import Image

from ..models import PixelBuffer, SpriteManifest, SpriteResult
from ..utils import OutputError, get_logger

logger = get_logger(__name__)

DEFAULT_SHEET_NAME = "spritesheet.png"
DEFAULT_MANIFEST_NAME = "sprite-config.json"


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Convert a PixelBuffer to a Pillow RGBA image."""
    return Image.frombytes("RGBA", (buffer.width, buffer.height), bytes(buffer.pixels))


class SpriteWriter:
    """Writes sprite sheets and manifests to an output directory."""

    def __init__(
        self,
        output_dir: Path,
        sheet_name: str = DEFAULT_SHEET_NAME,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
    ):
        """
        Initialize sprite writer.

        Args:
            output_dir: Output directory (created if missing)
            sheet_name: Sprite sheet file name
            manifest_name: Manifest file name
        """
        self.output_dir = output_dir
        self.sheet_name = sheet_name
        self.manifest_name = manifest_name
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        sheet: PixelBuffer,
        manifest: SpriteManifest,
        manifest_fields: Optional[dict[str, Any]] = None,
    ) -> SpriteResult:
        """
        Write the sheet and its manifest.

        Args:
            sheet: Composed sprite sheet
            manifest: Sheet layout
            manifest_fields: Extra SpriteManifest.to_dict keyword arguments
                (frame_interval, selection_mode, ...)

        Returns:
            SpriteResult with paths and sizes

        Raises:
            OutputError: If a file cannot be written
        """
        sheet_path = self.output_dir / self.sheet_name
        manifest_path = self.output_dir / self.manifest_name

        data = manifest.to_dict(spritesheet=self.sheet_name, **(manifest_fields or {}))

        try:
            buffer_to_image(sheet).save(sheet_path, format="PNG", optimize=True)
            manifest_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise OutputError(f"Failed to write sprite output to {self.output_dir}: {e}") from e

        result = SpriteResult(
            sheet_path=sheet_path,
            manifest_path=manifest_path,
            manifest=manifest,
            sheet_size=sheet_path.stat().st_size,
            manifest_size=manifest_path.stat().st_size,
        )
        logger.info(f"Wrote {sheet_path.name} ({result.resolution}) and {manifest_path.name}")
        return result

    def write_preview(self, buffer: PixelBuffer, name: str = "preview.png") -> Path:
        """
        Write a single frame as PNG.

        Args:
            buffer: Frame pixels
            name: File name

        Returns:
            Path to the written image
        """
        path = self.output_dir / name
        try:
            buffer_to_image(buffer).save(path, format="PNG")
        except OSError as e:
            raise OutputError(f"Failed to write preview {path}: {e}") from e
        logger.debug(f"Wrote preview {path}")
        return path
