"""
Tests for frame selection state.
"""

import pytest

from video2sprite.models import PixelBuffer, SampledFrame
from video2sprite.selection import FrameSelectionState, apply_command
from video2sprite.utils import NoSelectionError


# === Fixtures ===


def make_frames(count: int) -> list[SampledFrame]:
    return [
        SampledFrame(PixelBuffer.filled(4, 4, (i, 0, 0, 255)), source_time=i * 0.1)
        for i in range(count)
    ]


@pytest.fixture
def state():
    return FrameSelectionState.show(make_frames(5))


@pytest.fixture
def empty_state():
    return FrameSelectionState.show([])


# === Lifecycle ===


def test_show_starts_visible_with_nothing_chosen(state):
    assert state.visible is True
    assert state.frame_count == 5
    assert state.selected_count == 0
    assert state.can_confirm is False


def test_show_clears_previous_selection(state):
    selected = state.select_all()

    reloaded = FrameSelectionState.show(selected.frames)

    assert reloaded.selected_count == 0


def test_reset_is_empty_and_hidden(state):
    reset = FrameSelectionState.reset()

    assert reset.frames == ()
    assert reset.chosen == frozenset()
    assert reset.visible is False


def test_transitions_do_not_mutate(state):
    state.toggle(1)
    state.select_all()

    assert state.selected_count == 0


# === Transitions ===


def test_toggle_flips_membership(state):
    once = state.toggle(2)
    twice = once.toggle(2)

    assert once.chosen == {2}
    assert twice.chosen == frozenset()


def test_toggle_out_of_range_is_ignored(state):
    assert state.toggle(5) == state
    assert state.toggle(-1) == state


def test_select_all(state):
    assert state.toggle(1).select_all().chosen == {0, 1, 2, 3, 4}


def test_deselect_all(state):
    assert state.toggle(1).toggle(3).deselect_all().chosen == frozenset()


def test_invert(state):
    assert state.toggle(0).toggle(3).invert().chosen == {1, 2, 4}


@pytest.mark.parametrize("chosen", [(), (0,), (1, 3), (0, 1, 2, 3, 4)])
def test_invert_twice_is_identity(state, chosen):
    current = state
    for index in chosen:
        current = current.toggle(index)

    assert current.invert().invert() == current


@pytest.mark.parametrize("chosen", [(), (2,), (0, 4)])
def test_select_all_then_deselect_all_is_empty(state, chosen):
    current = state
    for index in chosen:
        current = current.toggle(index)

    assert current.select_all().deselect_all().chosen == frozenset()


def test_bulk_operations_are_idempotent(state):
    assert state.select_all().select_all() == state.select_all()
    assert state.deselect_all().deselect_all() == state.deselect_all()


def test_operations_on_empty_frames_are_noops(empty_state):
    assert empty_state.toggle(0) == empty_state
    assert empty_state.select_all() == empty_state
    assert empty_state.deselect_all() == empty_state
    assert empty_state.invert() == empty_state


def test_chosen_indices_stay_in_range(state):
    current = state.toggle(4).invert().toggle(9).select_all().invert().toggle(0)

    assert all(0 <= i < current.frame_count for i in current.chosen)


# === Keyboard shortcuts ===


def test_shortcuts_with_modifier(state):
    assert state.handle_shortcut("a", ctrl=True).chosen == {0, 1, 2, 3, 4}
    assert state.select_all().handle_shortcut("d", meta=True).chosen == frozenset()
    assert state.toggle(0).handle_shortcut("I", ctrl=True).chosen == {1, 2, 3, 4}


def test_shortcuts_need_modifier(state):
    assert state.handle_shortcut("a") == state


def test_shortcuts_ignored_when_hidden():
    hidden = FrameSelectionState(frames=tuple(make_frames(3)), visible=False)

    assert hidden.handle_shortcut("a", ctrl=True) == hidden


def test_unknown_shortcut_is_ignored(state):
    assert state.handle_shortcut("z", ctrl=True) == state


# === Confirm ===


def test_confirm_returns_sorted_frames_and_clears(state):
    current = state.toggle(3).toggle(0).toggle(2)

    selected, cleared = current.confirm()

    assert [f.source_time for f in selected] == [0.0, pytest.approx(0.2), pytest.approx(0.3)]
    assert selected[0] is state.frames[0]
    assert cleared.visible is False
    assert cleared.frames == ()


def test_confirm_without_selection_fails(state):
    with pytest.raises(NoSelectionError):
        state.confirm()


# === Text commands ===


def test_apply_command_bulk_keys(state):
    selected, error = apply_command(state, "a")
    assert error is None
    assert selected.chosen == {0, 1, 2, 3, 4}

    inverted, _ = apply_command(selected.toggle(0), " i ")
    assert inverted.chosen == {0}

    cleared, _ = apply_command(selected, "d")
    assert cleared.chosen == frozenset()


def test_apply_command_toggles_one_based_ranges(state):
    updated, error = apply_command(state, "1, 3-4 9")

    assert error is None
    assert updated.chosen == {0, 2, 3}


def test_apply_command_reports_garbage(state):
    updated, error = apply_command(state, "everything")

    assert updated == state
    assert "Unrecognised command" in error


def test_apply_command_huge_range_selects_every_frame(state):
    updated, error = apply_command(state, "1-9999999999")

    assert error is None
    assert updated.chosen == {0, 1, 2, 3, 4}
