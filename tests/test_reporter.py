"""Tests for console reporting and progress."""

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from video2sprite.models import PixelBuffer, SampledFrame, SpriteManifest, SpriteResult
from video2sprite.selection import FrameSelectionState
from video2sprite.ui import SamplingProgress, SummaryReporter


@pytest.fixture
def mock_console():
    """Create mock console with string IO."""
    string_io = StringIO()
    console = Console(file=string_io, force_terminal=False, width=120)
    return console, string_io


@pytest.fixture
def sprite_result(tmp_path):
    manifest = SpriteManifest(
        frame_width=64,
        frame_height=64,
        columns=3,
        rows=2,
        total_frames=5,
        matte_applied=True,
        matte_kind="edge",
    )
    return SpriteResult(
        sheet_path=tmp_path / "spritesheet.png",
        manifest_path=tmp_path / "sprite-config.json",
        manifest=manifest,
        sheet_size=2048,
        manifest_size=512,
    )


def test_sprite_result_properties(sprite_result):
    assert sprite_result.resolution == "192x128"
    assert sprite_result.total_size == 2560
    assert sprite_result.size_mb == pytest.approx(2560 / (1024 * 1024))


def test_display_result(mock_console, sprite_result):
    console, output = mock_console

    SummaryReporter(console).display_result(sprite_result)

    text = output.getvalue()
    assert "Sprite Sheet Complete" in text
    assert "192x128" in text
    assert "3 x 2" in text
    assert "edge" in text
    assert "2.5 KB" in text


def test_display_result_without_matte(mock_console, tmp_path):
    console, output = mock_console
    result = SpriteResult(
        sheet_path=Path(tmp_path / "a.png"),
        manifest_path=Path(tmp_path / "a.json"),
        manifest=SpriteManifest(8, 8, 1, 1, 1),
        sheet_size=10,
        manifest_size=10,
    )

    SummaryReporter(console).display_result(result)

    assert "off" in output.getvalue()


def test_display_frames_marks_selection(mock_console):
    console, output = mock_console
    frames = [SampledFrame(PixelBuffer.blank(2, 2), source_time=t) for t in (0.0, 0.5, 61.25)]
    state = FrameSelectionState.show(frames).toggle(1)

    SummaryReporter(console).display_frames(frames, state)

    text = output.getvalue()
    assert "Sampled Frames" in text
    assert "1:01.25" in text
    assert "✓" in text
    assert "Selected: 1 of 3 frame(s)" in text


def test_sampling_progress_tracks_updates(mock_console):
    console, _ = mock_console

    with SamplingProgress(console=console) as progress:
        progress.update(3, 10)
        progress.update(10, 10)

    assert progress.completed == 10
    assert progress.total == 10
