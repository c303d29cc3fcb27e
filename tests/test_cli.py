"""
Tests for the command-line interface.
"""

import importlib
import json

import pytest
from typer.testing import CliRunner

from conftest import FakeFrameSource

from video2sprite import __version__
from video2sprite.cli import app
from video2sprite.config import manager as config_manager_module

runner = CliRunner()
cli_module = importlib.import_module("video2sprite.cli.main")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the CLI away from the user's real config files."""
    monkeypatch.setattr(config_manager_module, "_config_manager", None)
    monkeypatch.setattr(
        config_manager_module.ConfigManager,
        "DEFAULT_CONFIG_LOCATIONS",
        [tmp_path / "no-config.yaml"],
    )


@pytest.fixture
def opened_sources():
    return []


@pytest.fixture
def video_file(tmp_path, monkeypatch, opened_sources):
    """An input path backed by a two-second fake source."""
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"not really a video")

    def open_source(input_path):
        source = FakeFrameSource(duration=2.0)
        opened_sources.append(source)
        return source

    monkeypatch.setattr(cli_module, "VideoFileSource", open_source)
    return path


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_generate_writes_outputs(video_file, opened_sources, tmp_path):
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app,
        [
            "generate",
            str(video_file),
            "-o",
            str(out_dir),
            "--width",
            "16",
            "--height",
            "16",
            "--interval",
            "500",
            "--no-matte",
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads((out_dir / "sprite-config.json").read_text())
    assert data["totalFrames"] == 4
    assert data["frameWidth"] == 16
    assert data["frameInterval"] == 500
    assert data["backgroundRemoved"] is False
    assert (out_dir / "spritesheet.png").exists()
    assert opened_sources[0].closed


def test_generate_rejects_out_of_range_option(video_file, tmp_path):
    result = runner.invoke(app, ["generate", str(video_file), "--width", "2"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_generate_rejects_unknown_method(video_file):
    result = runner.invoke(app, ["generate", str(video_file), "--method", "magic"])

    assert result.exit_code == 1


def test_generate_missing_input(tmp_path):
    result = runner.invoke(app, ["generate", str(tmp_path / "missing.mp4")])

    assert result.exit_code != 0


def test_select_confirms_chosen_frames(video_file, tmp_path):
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app,
        ["select", str(video_file), "-o", str(out_dir), "--interval", "500", "--no-matte"],
        input="1-2\ndone\n",
    )

    assert result.exit_code == 0, result.output
    data = json.loads((out_dir / "sprite-config.json").read_text())
    assert data["totalFrames"] == 2
    assert data["selectionMode"] == "manual"


def test_select_quit_writes_nothing(video_file, tmp_path):
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["select", str(video_file), "-o", str(out_dir)], input="quit\n"
    )

    assert result.exit_code == 0
    assert not (out_dir / "spritesheet.png").exists()


def test_preview_writes_image(video_file, tmp_path):
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["preview", str(video_file), "-o", str(out_dir), "--method", "edge"]
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "preview.png").exists()


def test_config_init(tmp_path):
    path = tmp_path / "v2s.yaml"

    result = runner.invoke(app, ["config", "init", "--output", str(path)])
    assert result.exit_code == 0
    assert path.exists()

    again = runner.invoke(app, ["config", "init", "--output", str(path)])
    assert again.exit_code == 1
    assert "already exists" in again.output


def test_config_show():
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    assert "frame_width" in result.output


def test_config_unknown_action():
    result = runner.invoke(app, ["config", "bogus"])

    assert result.exit_code == 1
