"""
Manual curation of sampled frames.
"""

from .state import SHORTCUTS, FrameSelectionState, apply_command

__all__ = [
    "SHORTCUTS",
    "FrameSelectionState",
    "apply_command",
]
