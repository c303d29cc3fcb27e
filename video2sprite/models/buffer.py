"""
Raw RGBA pixel buffer.

PixelBuffer is the container every pipeline stage hands to the next one:
row-major RGBA bytes with explicit dimensions.
"""

from dataclasses import dataclass, field

import numpy as np

CHANNELS = 4


@dataclass(eq=False)
class PixelBuffer:
    """Row-major RGBA pixels (R, G, B, A per pixel)."""

    width: int
    height: int
    pixels: bytearray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {self.width}x{self.height}")
        if not isinstance(self.pixels, bytearray):
            self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise ValueError(
                f"Buffer of {self.width}x{self.height} needs {expected} bytes, "
                f"got {len(self.pixels)}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelBuffer":
        """Create a fully transparent buffer."""
        return cls(width, height, bytearray(width * height * CHANNELS))

    @classmethod
    def filled(cls, width: int, height: int, rgba: tuple[int, int, int, int]) -> "PixelBuffer":
        """Create a buffer with every pixel set to one colour."""
        return cls(width, height, bytearray(bytes(rgba) * (width * height)))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Create a buffer from an (height, width, 4) uint8 array.

        Args:
            array: RGBA image array

        Returns:
            PixelBuffer owning a copy of the array data
        """
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (h, w, 4) array, got shape {array.shape}")
        height, width = array.shape[:2]
        data = np.ascontiguousarray(array, dtype=np.uint8)
        return cls(width, height, bytearray(data.tobytes()))

    @property
    def size(self) -> tuple[int, int]:
        """Get (width, height)."""
        return self.width, self.height

    def as_array(self) -> np.ndarray:
        """
        Get a writable (height, width, 4) view over the pixel bytes.

        Writes through the view mutate this buffer.
        """
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    def alpha(self) -> np.ndarray:
        """Get a writable (height, width) view of the alpha channel."""
        return self.as_array()[:, :, 3]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Get the RGBA value at (x, y)."""
        idx = (y * self.width + x) * CHANNELS
        r, g, b, a = self.pixels[idx : idx + CHANNELS]
        return r, g, b, a

    def copy(self) -> "PixelBuffer":
        """Get an independent copy of this buffer."""
        return PixelBuffer(self.width, self.height, bytearray(self.pixels))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.pixels == other.pixels
        )
