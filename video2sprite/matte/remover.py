"""
Background removal (matting) algorithms.

Every algorithm rewrites the alpha channel of a PixelBuffer in place and
leaves RGB untouched. Thresholds arrive from user-tunable sliders and are
clamped into their domain instead of being rejected.

The threshold multipliers (1.2, 0.7, 0.5, 1.5, 0.3) are empirical constants
that reproduce the established visual behaviour.
"""

import math
from typing import Callable

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..models import PixelBuffer
from ..utils import get_logger
from .config import ChromaKeyMatte, ColorKeyMatte, EdgeMatte, MatteConfig, ScreenType, SmartMatte

logger = get_logger(__name__)

MAX_CHANNEL = 255
MAX_RGB_DISTANCE = math.sqrt(3 * MAX_CHANNEL**2)  # ~441.67
CORNER_SAMPLE_MAX = 10
MORPHOLOGY_KERNEL = 2
MORPHOLOGY_RATIO = 0.6
CHROMA_MIN_LEVEL = 100


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _border_mask(width: int, height: int, edge_px: int) -> np.ndarray:
    """Boolean (height, width) mask of pixels within edge_px of any border."""
    ys, xs = np.ogrid[:height, :width]
    return (xs < edge_px) | (xs >= width - edge_px) | (ys < edge_px) | (ys >= height - edge_px)


def _edge_px(buffer: PixelBuffer, edge_px: float) -> int:
    return int(_clamp(edge_px, 0, min(buffer.width, buffer.height)))


def estimate_background_color(buffer: PixelBuffer) -> tuple[int, int, int]:
    """
    Estimate the backdrop colour from the four image corners.

    Samples square corner regions of side min(10, width/10) (at least one
    pixel) and averages their RGB, rounding each channel half-up.

    Args:
        buffer: Source pixels

    Returns:
        (r, g, b) background estimate
    """
    rgba = buffer.as_array()
    width, height = buffer.width, buffer.height
    side = max(1, min(CORNER_SAMPLE_MAX, width // 10))

    corners = [
        (0, 0),
        (width - side, 0),
        (0, height - side),
        (width - side, height - side),
    ]
    samples = [
        rgba[max(0, y) : max(0, y) + side, max(0, x) : max(0, x) + side, :3].reshape(-1, 3)
        for x, y in corners
    ]
    stacked = np.concatenate(samples).astype(np.int64)
    totals = stacked.sum(axis=0)
    count = len(stacked)
    r, g, b = (int(math.floor(total / count + 0.5)) for total in totals)
    return r, g, b


def _color_distance(rgba: np.ndarray, color: tuple[int, int, int]) -> np.ndarray:
    """Euclidean RGB distance of every pixel to color."""
    diff = rgba[:, :, :3].astype(np.float64) - np.asarray(color, dtype=np.float64)
    return np.sqrt((diff * diff).sum(axis=2))


def remove_by_edge(buffer: PixelBuffer, config: EdgeMatte) -> None:
    """
    Clear near-white and near-black pixels inside the border region.

    Args:
        buffer: Pixels to matte in place
        config: Edge parameters
    """
    rgba = buffer.as_array()
    alpha = rgba[:, :, 3]
    edge_px = _edge_px(buffer, config.edge_px)
    threshold = _clamp(config.brightness_threshold, 0, MAX_CHANNEL)

    border = _border_mask(buffer.width, buffer.height, edge_px)
    brightness = rgba[:, :, :3].sum(axis=2, dtype=np.int32) / 3.0

    clear = border & ((brightness > MAX_CHANNEL - threshold) | (brightness < threshold))
    soft = threshold * 1.5
    fade = border & ~clear & ((brightness > MAX_CHANNEL - soft) | (brightness < soft))

    alpha[fade] = np.floor(alpha[fade] * 0.3).astype(np.uint8)
    alpha[clear] = 0


def remove_by_color(buffer: PixelBuffer, config: ColorKeyMatte) -> None:
    """
    Clear pixels close to the estimated background colour.

    Pixels between 1x and 1.5x the threshold get a linear alpha ramp that
    never raises existing opacity.

    Args:
        buffer: Pixels to matte in place
        config: Colour key parameters
    """
    rgba = buffer.as_array()
    alpha = rgba[:, :, 3]
    threshold = _clamp(config.color_threshold, 0, MAX_RGB_DISTANCE)

    background = estimate_background_color(buffer)
    distance = _color_distance(rgba, background)
    logger.debug(f"Colour key background {background}, threshold {threshold}")

    clear = distance < threshold
    ramp_zone = ~clear & (distance < threshold * 1.5)
    if ramp_zone.any():
        ramp = np.clip((distance[ramp_zone] - threshold) / (threshold * 0.5), 0.0, 1.0)
        ramped = np.floor(ramp * MAX_CHANNEL).astype(np.uint8)
        alpha[ramp_zone] = np.minimum(alpha[ramp_zone], ramped)
    alpha[clear] = 0


def remove_smart(buffer: PixelBuffer, config: SmartMatte) -> None:
    """
    Combined matte: border colour pass, whole-image colour pass, cleanup.

    Args:
        buffer: Pixels to matte in place
        config: Smart parameters
    """
    rgba = buffer.as_array()
    alpha = rgba[:, :, 3]
    edge_px = _edge_px(buffer, config.edge_px)
    threshold = _clamp(config.color_threshold, 0, MAX_RGB_DISTANCE)

    background = estimate_background_color(buffer)
    distance = _color_distance(rgba, background)
    logger.debug(f"Smart matte background {background}, threshold {threshold}")

    # Pass 1: border region, loose tolerance
    border = _border_mask(buffer.width, buffer.height, edge_px)
    alpha[border & (distance < threshold * 1.2)] = 0

    # Pass 2: whole image, tight tolerance
    alpha[distance < threshold * 0.7] = 0

    # Pass 3
    morphology_clean(alpha)


def morphology_clean(alpha: np.ndarray, kernel: int = MORPHOLOGY_KERNEL) -> None:
    """
    Close small opaque islands inside transparent regions.

    Reads neighbourhoods from a snapshot taken before any write; pixels
    closer than kernel to the border are left alone.

    Args:
        alpha: Writable (height, width) alpha plane
        kernel: Neighbourhood radius
    """
    height, width = alpha.shape
    size = 2 * kernel + 1
    if height < size or width < size:
        return

    snapshot = alpha.copy()
    transparent = (snapshot == 0).astype(np.int32)
    counts = sliding_window_view(transparent, (size, size)).sum(axis=(2, 3))

    interior = snapshot[kernel : height - kernel, kernel : width - kernel]
    close = (interior != 0) & (counts > size * size * MORPHOLOGY_RATIO)
    alpha[kernel : height - kernel, kernel : width - kernel][close] = 0


def remove_chroma(buffer: PixelBuffer, config: ChromaKeyMatte) -> None:
    """
    Clear green or blue screen pixels.

    Args:
        buffer: Pixels to matte in place
        config: Chroma key parameters
    """
    rgba = buffer.as_array()
    alpha = rgba[:, :, 3]
    threshold = _clamp(config.chroma_threshold, 0, MAX_CHANNEL)

    rgb = rgba[:, :, :3].astype(np.int16)
    r, g, b = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]

    if config.screen == ScreenType.GREEN:
        chroma = (g > r + threshold) & (g > b + threshold) & (g > CHROMA_MIN_LEVEL)
    elif config.screen == ScreenType.BLUE:
        chroma = (b > r + threshold) & (b > g + threshold) & (b > CHROMA_MIN_LEVEL)
    else:
        high = rgb.max(axis=2)
        low = rgb.min(axis=2)
        dominant = ((g == high) & (g > CHROMA_MIN_LEVEL)) | ((b == high) & (b > CHROMA_MIN_LEVEL))
        chroma = (high - low > threshold) & dominant

    alpha[chroma] = 0


_ALGORITHMS: dict[type, Callable[..., None]] = {
    EdgeMatte: remove_by_edge,
    ColorKeyMatte: remove_by_color,
    SmartMatte: remove_smart,
    ChromaKeyMatte: remove_chroma,
}


def apply(buffer: PixelBuffer, config: MatteConfig) -> None:
    """
    Remove the background of a buffer in place.

    Args:
        buffer: Pixels to matte; only the alpha channel changes
        config: Algorithm variant and its thresholds

    Raises:
        TypeError: If config is not a known matte configuration
    """
    algorithm = _ALGORITHMS.get(type(config))
    if algorithm is None:
        raise TypeError(f"Unsupported matte configuration: {config!r}")
    algorithm(buffer, config)
