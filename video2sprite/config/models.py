"""
Configuration models using Pydantic.

Ranges mirror the sliders of the settings form; values outside them are
rejected here, at the boundary.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ..matte import MatteConfig, MatteKind, build_matte_config
from ..sampler import SampleConfig, SampleMode


class SamplingSettings(BaseModel):
    """Frame sampling configuration."""

    frame_width: int = Field(default=64, ge=8, le=1024, description="Frame width in pixels")
    frame_height: int = Field(default=64, ge=8, le=1024, description="Frame height in pixels")
    interval_ms: int = Field(
        default=100, ge=10, le=10000, description="Milliseconds between sampled frames"
    )
    frame_count: int = Field(
        default=64, ge=1, le=400, description="Frame target for direct mode"
    )
    frame_timeout: float = Field(
        default=5.0, gt=0, le=60, description="Per-frame decode timeout in seconds"
    )
    quality: float = Field(default=0.9, ge=0.1, le=1.0, description="Output encoder quality hint")


class MatteSettings(BaseModel):
    """Background removal configuration."""

    enabled: bool = Field(default=True, description="Remove frame backgrounds")
    method: str = Field(default="smart", description="Algorithm: edge, color, smart, greenscreen")
    edge_px: int = Field(default=5, ge=1, le=20, description="Border region width in pixels")
    brightness_threshold: int = Field(
        default=50, ge=10, le=100, description="Edge brightness threshold"
    )
    color_threshold: int = Field(default=60, ge=10, le=150, description="Colour similarity")
    screen_type: Literal["auto", "green", "blue"] = Field(
        default="auto", description="Chroma screen colour"
    )
    chroma_threshold: int = Field(default=40, ge=20, le=100, description="Chroma threshold")

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Validate algorithm name."""
        valid_methods = [kind.value for kind in MatteKind]
        if v.lower() not in valid_methods:
            raise ValueError(f"method must be one of {valid_methods}")
        return v.lower()

    def to_matte_config(self) -> MatteConfig | None:
        """Build the matte configuration, or None when disabled."""
        if not self.enabled:
            return None
        return build_matte_config(
            self.method,
            edge_px=self.edge_px,
            brightness_threshold=self.brightness_threshold,
            color_threshold=self.color_threshold,
            screen=self.screen_type,
            chroma_threshold=self.chroma_threshold,
        )


class OutputSettings(BaseModel):
    """Output configuration."""

    spritesheet_name: str = Field(default="spritesheet.png", description="Sprite sheet file name")
    manifest_name: str = Field(default="sprite-config.json", description="Manifest file name")

    @field_validator("spritesheet_name")
    @classmethod
    def validate_spritesheet_name(cls, v: str) -> str:
        """Validate sheet file name."""
        if not v.lower().endswith(".png"):
            raise ValueError("spritesheet_name must end with .png")
        return v


class Video2SpriteConfig(BaseModel):
    """Main configuration."""

    sampling: SamplingSettings = Field(default_factory=SamplingSettings)
    matte: MatteSettings = Field(default_factory=MatteSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    def to_sample_config(self, mode: SampleMode = SampleMode.DIRECT) -> SampleConfig:
        """
        Build the runtime sampling configuration.

        Args:
            mode: Sampling policy

        Returns:
            SampleConfig for one run
        """
        return SampleConfig(
            frame_width=self.sampling.frame_width,
            frame_height=self.sampling.frame_height,
            interval_ms=self.sampling.interval_ms,
            mode=mode,
            frame_count=self.sampling.frame_count,
            quality=self.sampling.quality,
            matte=self.matte.to_matte_config(),
            frame_timeout=self.sampling.frame_timeout,
        )
