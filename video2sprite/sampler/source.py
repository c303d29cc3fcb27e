"""
Frame sources: seek-and-decode providers the sampler drives.

A frame source exposes one seek cursor. Callers issue one decode at a time
and may abandon a decode after a timeout; the source discards the late
result.
"""

import asyncio
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from ..models import PixelBuffer
from ..utils import DecodeError, SourceOpenError, get_logger

logger = get_logger(__name__)


class FrameSource(ABC):
    """Seek-and-decode provider of RGBA frames."""

    @abstractmethod
    def duration(self) -> float:
        """Get source duration in seconds."""

    @abstractmethod
    async def decode_at(self, time: float, width: int, height: int) -> PixelBuffer:
        """
        Decode the frame shown at a timestamp, scaled to width x height.

        Raises:
            DecodeError: If no frame can be produced at this time
        """

    def close(self) -> None:
        """Release any resources held by the source."""


class VideoFileSource(FrameSource):
    """
    Frame source backed by an OpenCV video capture.

    Blocking reads run in a worker thread. A lock serialises access to the
    capture so a decode abandoned by a timeout completes before the next
    seek starts.
    """

    def __init__(self, video_path: str | Path) -> None:
        self.video_path = str(video_path)
        self._cap = cv2.VideoCapture(self.video_path)
        if not self._cap.isOpened():
            raise SourceOpenError(f"Cannot open video: {video_path}")
        self._lock = threading.Lock()

        self.fps = self._cap.get(cv2.CAP_PROP_FPS) or 30.0
        self.frame_count = int(self._cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self.source_width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.source_height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self._duration = self.frame_count / self.fps if self.fps > 0 else 0.0

        logger.info(
            f"Opened {Path(self.video_path).name}: {self.source_width}x{self.source_height} "
            f"{self.fps:.1f}fps {self._duration:.2f}s"
        )

    def __enter__(self) -> "VideoFileSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._cap is not None:
            with self._lock:
                self._cap.release()
                self._cap = None

    def duration(self) -> float:
        return self._duration

    async def decode_at(self, time: float, width: int, height: int) -> PixelBuffer:
        return await asyncio.to_thread(self._decode_blocking, time, width, height)

    def _read_at(self, time: float) -> Optional[np.ndarray]:
        """Seek by milliseconds, falling back to the nearest frame index."""
        self._cap.set(cv2.CAP_PROP_POS_MSEC, time * 1000.0)
        ret, frame = self._cap.read()
        if ret:
            return frame

        idx = max(0, min(int(time * self.fps), self.frame_count - 1))
        self._cap.set(cv2.CAP_PROP_POS_FRAMES, idx)
        ret, frame = self._cap.read()
        return frame if ret else None

    def _decode_blocking(self, time: float, width: int, height: int) -> PixelBuffer:
        try:
            with self._lock:
                if self._cap is None:
                    raise DecodeError("Video source is closed", time=time)
                frame = self._read_at(time)

            if frame is None:
                raise DecodeError(f"Could not read frame at {time:.3f}s", time=time)

            return self._to_buffer(frame, width, height)
        except cv2.error as e:
            raise DecodeError(f"OpenCV failed on frame at {time:.3f}s: {e}", time=time) from e

    @staticmethod
    def _to_buffer(frame: np.ndarray, width: int, height: int) -> PixelBuffer:
        """Convert a BGR frame to an RGBA buffer of the requested size."""
        rgba = cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)
        if rgba.shape[1] != width or rgba.shape[0] != height:
            rgba = cv2.resize(rgba, (width, height), interpolation=cv2.INTER_AREA)
        return PixelBuffer.from_array(rgba)
