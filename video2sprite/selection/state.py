"""
Frame selection state.

FrameSelectionState is an immutable value: every transition returns a new
state, so callers own the current selection explicitly.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from ..models import SampledFrame
from ..utils import NoSelectionError, get_logger, parse_index_ranges

logger = get_logger(__name__)


@dataclass(frozen=True)
class FrameSelectionState:
    """Sampled frames plus the set of chosen frame indices."""

    frames: tuple[SampledFrame, ...] = ()
    chosen: frozenset[int] = field(default_factory=frozenset)
    visible: bool = False

    @classmethod
    def show(cls, frames: Sequence[SampledFrame]) -> "FrameSelectionState":
        """
        Load a new frame sequence with nothing selected.

        Args:
            frames: Sampled frames to choose from

        Returns:
            Visible selection state
        """
        logger.info(f"Showing {len(frames)} frame(s) for selection")
        return cls(frames=tuple(frames), chosen=frozenset(), visible=True)

    @classmethod
    def reset(cls) -> "FrameSelectionState":
        """Get an empty, hidden state."""
        return cls()

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def selected_count(self) -> int:
        return len(self.chosen)

    @property
    def can_confirm(self) -> bool:
        """Whether confirm() would succeed."""
        return bool(self.chosen)

    def is_selected(self, index: int) -> bool:
        return index in self.chosen

    def selected_indices(self) -> list[int]:
        """Get chosen indices in ascending order."""
        return sorted(self.chosen)

    def selected_frames(self) -> list[SampledFrame]:
        """Get chosen frames in ascending index order."""
        return [self.frames[i] for i in self.selected_indices()]

    def _with(self, chosen: frozenset[int]) -> "FrameSelectionState":
        if chosen == self.chosen:
            return self
        return replace(self, chosen=chosen)

    def toggle(self, index: int) -> "FrameSelectionState":
        """
        Flip membership of one frame.

        Indices outside the frame sequence leave the state unchanged.
        """
        if not 0 <= index < self.frame_count:
            logger.debug(f"Ignoring toggle of frame {index} (have {self.frame_count})")
            return self
        return self._with(self.chosen ^ {index})

    def select_all(self) -> "FrameSelectionState":
        return self._with(frozenset(range(self.frame_count)))

    def deselect_all(self) -> "FrameSelectionState":
        return self._with(frozenset())

    def invert(self) -> "FrameSelectionState":
        """Select exactly the frames that are not selected."""
        return self._with(frozenset(range(self.frame_count)) - self.chosen)

    def handle_shortcut(
        self, key: str, ctrl: bool = False, meta: bool = False
    ) -> "FrameSelectionState":
        """
        Apply a keyboard bulk operation.

        Ctrl/Cmd+A selects all, +D deselects all, +I inverts. Keys are
        ignored while the selection is hidden or without a modifier.

        Args:
            key: Key name
            ctrl: Control held
            meta: Command/meta held

        Returns:
            Resulting state
        """
        if not self.visible or not (ctrl or meta):
            return self

        action = SHORTCUTS.get(key.lower())
        if action is None:
            return self
        return action(self)

    def confirm(self) -> tuple[list[SampledFrame], "FrameSelectionState"]:
        """
        Take the chosen frames and clear the selection.

        Returns:
            (chosen frames in ascending index order, cleared hidden state)

        Raises:
            NoSelectionError: If nothing is selected
        """
        if not self.chosen:
            raise NoSelectionError("Select at least one frame")

        selected = self.selected_frames()
        logger.info(f"Confirmed {len(selected)} of {self.frame_count} frame(s)")
        return selected, FrameSelectionState.reset()


SHORTCUTS = {
    "a": FrameSelectionState.select_all,
    "d": FrameSelectionState.deselect_all,
    "i": FrameSelectionState.invert,
}


def apply_command(
    state: FrameSelectionState, command: str
) -> tuple[FrameSelectionState, Optional[str]]:
    """
    Apply a text command from the interactive selector.

    Commands: "a" (all), "d" (none), "i" (invert), or 1-based indices and
    ranges such as "1,3-5" which toggle each listed frame.

    Args:
        state: Current state
        command: Command text

    Returns:
        (new state, error message or None)
    """
    text = command.strip().lower()
    if text in SHORTCUTS:
        return SHORTCUTS[text](state), None

    try:
        indices = parse_index_ranges(text, state.frame_count)
    except ValueError:
        return state, f"Unrecognised command: {command.strip()}"

    for index in indices:
        state = state.toggle(index)
    return state, None
