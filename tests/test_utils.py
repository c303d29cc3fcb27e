"""Tests for helpers, errors and logging setup."""

import logging

import pytest

from video2sprite.utils import (
    DecodeError,
    EmptySampleError,
    FrameTimeoutError,
    Video2SpriteError,
    format_duration,
    format_size,
    format_timestamp,
    log_performance,
    parse_index_ranges,
    setup_logger,
)


# === Helpers ===


@pytest.mark.parametrize(
    "size,expected",
    [(0, "0.0 B"), (1536, "1.5 KB"), (5 * 1024 * 1024, "5.0 MB")],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


def test_format_duration():
    assert format_duration(65) == "1:05"
    assert format_duration(9.9) == "0:09"


def test_format_timestamp():
    assert format_timestamp(1.5) == "0:01.50"
    assert format_timestamp(3725.25) == "1:02:05.25"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1", [0]),
        ("1,3-5", [0, 2, 3, 4]),
        ("5-3", [2, 3, 4]),
        ("2 2", [1, 1]),
        ("0, 11, 4", [3]),
        ("", []),
    ],
)
def test_parse_index_ranges(text, expected):
    assert parse_index_ranges(text, 10) == expected


@pytest.mark.parametrize("text", ["x", "1-", "a-b", "1,,two"])
def test_parse_index_ranges_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_index_ranges(text, 10)


# === Errors ===


def test_error_hierarchy():
    timeout = FrameTimeoutError("slow", time=1.5, timeout=5.0)

    assert isinstance(timeout, DecodeError)
    assert isinstance(timeout, Video2SpriteError)
    assert timeout.time == 1.5
    assert timeout.timeout == 5.0
    assert EmptySampleError("none", attempted=12).attempted == 12


# === Logging ===


def test_setup_logger_file_output(tmp_path):
    log_file = tmp_path / "logs" / "run.log"

    logger = setup_logger("video2sprite.test", level="DEBUG", log_file=log_file)
    logger.debug("hello file")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    assert "hello file" in log_file.read_text()

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_logger_replaces_handlers():
    setup_logger("video2sprite.repeat")
    logger = setup_logger("video2sprite.repeat", verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    logger.handlers.clear()


def test_log_performance_sync():
    @log_performance()
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"


@pytest.mark.asyncio
async def test_log_performance_async_reraises():
    @log_performance()
    async def broken():
        raise DecodeError("bad frame")

    with pytest.raises(DecodeError):
        await broken()


def test_parse_index_ranges_clamps_huge_range():
    assert parse_index_ranges("1-9999999999", 5) == [0, 1, 2, 3, 4]
    assert parse_index_ranges("9999999999-3", 5) == [2, 3, 4]
