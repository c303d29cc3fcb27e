"""
Frame sampling at a fixed cadence.

Drives a FrameSource one decode at a time, optionally matting each decoded
frame, and tolerates individual frame failures.
"""

import asyncio
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .. import matte
from ..matte import MatteConfig
from ..models import SampledFrame
from ..utils import (
    ConfigurationError,
    DecodeError,
    EmptySampleError,
    SamplingCancelledError,
    get_logger,
)
from .source import FrameSource

logger = get_logger(__name__)

MAX_MANUAL_FRAMES = 200
# Legacy default grid (8x8); applied whatever the caller's grid settings.
DEFAULT_DIRECT_FRAME_COUNT = 64
DEFAULT_FRAME_TIMEOUT = 5.0


class SampleMode(str, Enum):
    """Sampling policy."""

    DIRECT = "direct"  # Fixed interval, compose everything
    MANUAL = "manual"  # Evenly spaced, curated by the user


@dataclass(frozen=True)
class SampleConfig:
    """Configuration for one sampling run."""

    frame_width: int
    frame_height: int
    interval_ms: int
    mode: SampleMode = SampleMode.DIRECT
    frame_count: Optional[int] = None  # Direct-mode frame target
    quality: float = 0.9  # Encoder hint, passed through to the manifest
    matte: Optional[MatteConfig] = None
    frame_timeout: float = DEFAULT_FRAME_TIMEOUT

    def __post_init__(self) -> None:
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise ConfigurationError(
                f"Frame size must be positive, got {self.frame_width}x{self.frame_height}"
            )
        if self.interval_ms <= 0:
            raise ConfigurationError(f"Frame interval must be positive, got {self.interval_ms}ms")
        if self.frame_count is not None and self.frame_count <= 0:
            raise ConfigurationError(f"Frame count must be positive, got {self.frame_count}")
        if self.frame_timeout <= 0:
            raise ConfigurationError(f"Frame timeout must be positive, got {self.frame_timeout}s")

    @property
    def target_frames(self) -> int:
        """Get the direct-mode frame target."""
        return self.frame_count if self.frame_count is not None else DEFAULT_DIRECT_FRAME_COUNT


def plan_timestamps(duration: float, config: SampleConfig) -> list[float]:
    """
    Compute the strictly increasing timestamps to sample.

    Manual mode spreads min(floor(duration*1000/interval), 200) frames evenly
    over the duration. Direct mode steps by the interval until the frame
    target is reached or the duration is passed.

    Args:
        duration: Source duration in seconds
        config: Sampling configuration

    Returns:
        Timestamps in seconds, all below duration
    """
    if duration <= 0:
        return []

    if config.mode == SampleMode.MANUAL:
        count = min(math.floor(duration * 1000 / config.interval_ms), MAX_MANUAL_FRAMES)
        return [i * duration / count for i in range(count)]

    timestamps: list[float] = []
    for i in range(config.target_frames):
        time = i * config.interval_ms / 1000
        if time >= duration:
            logger.debug(f"Reached end of source at frame {i}")
            break
        timestamps.append(time)
    return timestamps


class FrameSampler:
    """
    Samples frames from a source according to a SampleConfig.

    Decodes are strictly sequential. A decode that fails or exceeds the
    per-frame timeout is skipped; only a run where nothing decoded fails.
    """

    def __init__(self, source: FrameSource):
        """
        Initialize frame sampler.

        Args:
            source: Frame source to drive
        """
        self.source = source

    async def sample(
        self,
        config: SampleConfig,
        cancel_event: Optional[asyncio.Event] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> list[SampledFrame]:
        """
        Sample frames from the source.

        Args:
            config: Sampling configuration
            cancel_event: Checked between frames; when set, sampling stops
            progress_callback: Called with (done, total) after each timestamp

        Returns:
            Successfully decoded frames in timestamp order

        Raises:
            SamplingCancelledError: If cancel_event was set
            EmptySampleError: If no frame could be decoded
        """
        duration = self.source.duration()
        timestamps = plan_timestamps(duration, config)
        total = len(timestamps)

        logger.info(
            f"Sampling {total} frame(s) ({config.frame_width}x{config.frame_height}) "
            f"in {config.mode.value} mode from {duration:.2f}s source"
        )

        frames: list[SampledFrame] = []
        skipped = 0

        for done, time in enumerate(timestamps, start=1):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Sampling cancelled after {len(frames)} frame(s)")
                frames.clear()
                raise SamplingCancelledError("Sampling was cancelled")

            frame = await self._sample_one(time, config)
            if frame is None:
                skipped += 1
            else:
                frames.append(frame)

            if progress_callback:
                progress_callback(done, total)

        if not frames:
            raise EmptySampleError(
                f"No frames could be decoded ({total} attempted)", attempted=total
            )

        if skipped:
            logger.warning(f"Skipped {skipped} of {total} frame(s) that failed to decode")
        logger.info(f"Sampled {len(frames)} frame(s)")
        return frames

    async def _sample_one(self, time: float, config: SampleConfig) -> Optional[SampledFrame]:
        """Decode and matte one frame, or return None if it must be skipped."""
        try:
            buffer = await asyncio.wait_for(
                self.source.decode_at(time, config.frame_width, config.frame_height),
                timeout=config.frame_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Frame extraction timeout at {time:.3f}s ({config.frame_timeout}s)")
            return None
        except DecodeError as e:
            logger.warning(f"Failed to extract frame at {time:.3f}s: {e}")
            return None

        if buffer.size != (config.frame_width, config.frame_height):
            logger.warning(
                f"Frame at {time:.3f}s decoded as {buffer.width}x{buffer.height}, "
                f"expected {config.frame_width}x{config.frame_height}"
            )
            return None

        if config.matte is not None:
            matte.apply(buffer, config.matte)

        return SampledFrame(buffer=buffer, source_time=time)


async def sample(
    source: FrameSource,
    config: SampleConfig,
    cancel_event: Optional[asyncio.Event] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> list[SampledFrame]:
    """
    Convenience function to sample frames from a source.

    Args:
        source: Frame source
        config: Sampling configuration
        cancel_event: Optional cooperative cancellation flag
        progress_callback: Progress callback (done, total)

    Returns:
        Sampled frames
    """
    sampler = FrameSampler(source)
    return await sampler.sample(config, cancel_event, progress_callback)
