"""
Background removal for sampled frames.
"""

from .config import (
    ChromaKeyMatte,
    ColorKeyMatte,
    EdgeMatte,
    MatteConfig,
    MatteKind,
    ScreenType,
    SmartMatte,
    build_matte_config,
)
from .remover import apply, estimate_background_color, morphology_clean

__all__ = [
    "ChromaKeyMatte",
    "ColorKeyMatte",
    "EdgeMatte",
    "MatteConfig",
    "MatteKind",
    "ScreenType",
    "SmartMatte",
    "apply",
    "build_matte_config",
    "estimate_background_color",
    "morphology_clean",
]
