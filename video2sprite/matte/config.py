"""
Matte algorithm configurations.

Each background-removal algorithm has its own immutable parameter set; the
variant type selects the algorithm.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class MatteKind(str, Enum):
    """Background removal algorithm names."""

    EDGE = "edge"
    COLOR = "color"
    SMART = "smart"
    GREENSCREEN = "greenscreen"


class ScreenType(str, Enum):
    """Chroma screen colour."""

    AUTO = "auto"
    GREEN = "green"
    BLUE = "blue"


@dataclass(frozen=True)
class EdgeMatte:
    """Remove near-white or near-black backdrop visible at the frame border."""

    edge_px: int = 5  # Border region width in pixels
    brightness_threshold: int = 50  # Distance from 0/255 counted as backdrop

    kind = MatteKind.EDGE


@dataclass(frozen=True)
class ColorKeyMatte:
    """Remove pixels close to the corner-sampled background colour."""

    color_threshold: int = 60  # Euclidean RGB distance

    kind = MatteKind.COLOR


@dataclass(frozen=True)
class SmartMatte:
    """Border pass, whole-image pass and morphological cleanup."""

    edge_px: int = 5
    color_threshold: int = 60

    kind = MatteKind.SMART


@dataclass(frozen=True)
class ChromaKeyMatte:
    """Remove green or blue screen pixels."""

    screen: ScreenType = ScreenType.AUTO
    chroma_threshold: int = 40

    kind = MatteKind.GREENSCREEN


MatteConfig = Union[EdgeMatte, ColorKeyMatte, SmartMatte, ChromaKeyMatte]

_CONFIG_TYPES: dict[MatteKind, type] = {
    MatteKind.EDGE: EdgeMatte,
    MatteKind.COLOR: ColorKeyMatte,
    MatteKind.SMART: SmartMatte,
    MatteKind.GREENSCREEN: ChromaKeyMatte,
}


def build_matte_config(kind: Union[MatteKind, str], **params: Any) -> MatteConfig:
    """
    Build a matte configuration from an algorithm name.

    Parameters the algorithm does not use are ignored, so one flat settings
    mapping can feed any algorithm.

    Args:
        kind: Algorithm name (edge, color, smart, greenscreen)
        **params: Threshold values by field name

    Returns:
        Matte configuration variant

    Raises:
        ValueError: If the algorithm name is unknown
    """
    try:
        matte_kind = MatteKind(kind.lower() if isinstance(kind, str) else kind)
    except ValueError:
        valid = ", ".join(k.value for k in MatteKind)
        raise ValueError(f"Unknown matte method '{kind}'. Valid methods: {valid}") from None

    config_type = _CONFIG_TYPES[matte_kind]
    fields = config_type.__dataclass_fields__
    accepted = {name: value for name, value in params.items() if name in fields and value is not None}
    if "screen" in accepted and not isinstance(accepted["screen"], ScreenType):
        accepted["screen"] = ScreenType(str(accepted["screen"]).lower())
    return config_type(**accepted)
