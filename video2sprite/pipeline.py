"""
End-to-end sprite generation workflows.

Direct mode composes every sampled frame; manual mode hands the samples to
a FrameSelectionState and composes whatever the user confirms.
"""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from . import matte
from .models import SELECTION_MODE_MANUAL, PixelBuffer, SpriteManifest
from .sampler import FrameSampler, FrameSource, SampleConfig, SampleMode
from .selection import FrameSelectionState
from .sprites import SpriteComposer
from .utils import ConfigurationError, FrameTimeoutError, get_logger, log_performance

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class SpriteOutput:
    """A composed sprite sheet ready to be persisted."""

    sheet: PixelBuffer
    manifest: SpriteManifest
    manifest_fields: dict[str, Any] = field(default_factory=dict)

    def manifest_dict(self, spritesheet: str = "spritesheet.png") -> dict[str, Any]:
        """Render the JSON manifest for this output."""
        return self.manifest.to_dict(spritesheet=spritesheet, **self.manifest_fields)


@log_performance()
async def generate_direct(
    source: FrameSource,
    config: SampleConfig,
    cancel_event: Optional[asyncio.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> SpriteOutput:
    """
    Sample at a fixed interval and compose every frame.

    Args:
        source: Frame source
        config: Sampling configuration (mode is forced to direct)
        cancel_event: Optional cooperative cancellation flag
        progress_callback: Progress callback (done, total)

    Returns:
        SpriteOutput whose manifest records the frame interval
    """
    if config.mode != SampleMode.DIRECT:
        config = replace(config, mode=SampleMode.DIRECT)

    frames = await FrameSampler(source).sample(config, cancel_event, progress_callback)

    composer = SpriteComposer(config.frame_width, config.frame_height)
    sheet, manifest = composer.compose(
        [frame.buffer for frame in frames], quality=config.quality, matte=config.matte
    )
    return SpriteOutput(sheet, manifest, {"frame_interval": config.interval_ms})


@log_performance()
async def sample_for_selection(
    source: FrameSource,
    config: SampleConfig,
    cancel_event: Optional[asyncio.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> FrameSelectionState:
    """
    Sample evenly spaced frames and open them for selection.

    Args:
        source: Frame source
        config: Sampling configuration (mode is forced to manual)
        cancel_event: Optional cooperative cancellation flag
        progress_callback: Progress callback (done, total)

    Returns:
        Visible selection state with nothing chosen
    """
    if config.mode != SampleMode.MANUAL:
        config = replace(config, mode=SampleMode.MANUAL)

    frames = await FrameSampler(source).sample(config, cancel_event, progress_callback)
    return FrameSelectionState.show(frames)


@log_performance()
def compose_selection(
    state: FrameSelectionState, config: SampleConfig
) -> tuple[SpriteOutput, FrameSelectionState]:
    """
    Confirm the selection and compose the chosen frames.

    Args:
        state: Selection with at least one chosen frame
        config: Configuration the frames were sampled with

    Returns:
        (SpriteOutput marked as manual selection, cleared selection state)

    Raises:
        NoSelectionError: If nothing is selected
    """
    selected, cleared = state.confirm()

    composer = SpriteComposer(config.frame_width, config.frame_height)
    sheet, manifest = composer.compose(
        [frame.buffer for frame in selected], quality=config.quality, matte=config.matte
    )
    return SpriteOutput(sheet, manifest, {"selection_mode": SELECTION_MODE_MANUAL}), cleared


async def preview_matte(
    source: FrameSource, config: SampleConfig, time: float = 0.0
) -> tuple[PixelBuffer, PixelBuffer]:
    """
    Decode one frame and matte a copy of it.

    Args:
        source: Frame source
        config: Frame size and matte to preview
        time: Timestamp to preview in seconds

    Returns:
        (original frame, matted frame)

    Raises:
        ConfigurationError: If config has no matte
        DecodeError: If the frame cannot be decoded
        FrameTimeoutError: If decoding exceeds config.frame_timeout
    """
    if config.matte is None:
        raise ConfigurationError("Background removal is disabled, nothing to preview")

    try:
        original = await asyncio.wait_for(
            source.decode_at(time, config.frame_width, config.frame_height),
            timeout=config.frame_timeout,
        )
    except asyncio.TimeoutError:
        raise FrameTimeoutError(
            f"Frame at {time:.3f}s took longer than {config.frame_timeout}s",
            time=time,
            timeout=config.frame_timeout,
        ) from None
    matted = original.copy()
    matte.apply(matted, config.matte)
    logger.info(f"Previewed {config.matte.kind.value} matte at {time:.2f}s")
    return original, matted
