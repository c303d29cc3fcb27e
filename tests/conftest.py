"""
Shared fixtures and fake frame sources.
"""

import asyncio
from typing import Callable, Iterable, Optional

import pytest

from video2sprite.models import PixelBuffer
from video2sprite.sampler import FrameSource
from video2sprite.utils import DecodeError


def time_color(time: float) -> tuple[int, int, int, int]:
    """Colour a fake frame so its source time can be read back from pixels."""
    return int(round(time * 10)) % 256, 80, 40, 255


class FakeFrameSource(FrameSource):
    """In-memory frame source with scriptable failures and delays."""

    def __init__(
        self,
        duration: float = 10.0,
        fail_times: Iterable[float] = (),
        fail_all: bool = False,
        slow_times: Iterable[float] = (),
        delay: float = 0.5,
        color_for: Optional[Callable[[float], tuple[int, int, int, int]]] = None,
        wrong_size: bool = False,
    ):
        self._duration = duration
        self.fail_times = {round(t, 6) for t in fail_times}
        self.fail_all = fail_all
        self.slow_times = {round(t, 6) for t in slow_times}
        self.delay = delay
        self.color_for = color_for or time_color
        self.wrong_size = wrong_size
        self.calls: list[float] = []
        self.closed = False

    def duration(self) -> float:
        return self._duration

    async def decode_at(self, time: float, width: int, height: int) -> PixelBuffer:
        self.calls.append(time)
        key = round(time, 6)
        if key in self.slow_times:
            await asyncio.sleep(self.delay)
        if self.fail_all or key in self.fail_times:
            raise DecodeError(f"Could not read frame at {time:.3f}s", time=time)
        if self.wrong_size:
            width += 1
        return PixelBuffer.filled(width, height, self.color_for(time))

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeFrameSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@pytest.fixture
def fake_source():
    """Ten-second fake source."""
    return FakeFrameSource(duration=10.0)
