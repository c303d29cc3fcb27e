"""
Helper functions for video2sprite.

This module contains formatting utilities used by the CLI and reporters.
"""


def format_size(bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    size = float(bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def format_duration(seconds: float) -> str:
    """
    Format duration as M:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "1:05")
    """
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def format_timestamp(seconds: float) -> str:
    """Format seconds as M:SS.ss or H:MM:SS.ss."""
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = seconds % 60
    if h > 0:
        return f"{h}:{m:02d}:{s:05.2f}"
    return f"{m}:{s:05.2f}"


def parse_index_ranges(text: str, upper: int) -> list[int]:
    """
    Parse a 1-based index expression such as "1,3-5 8" into 0-based indices.

    Indices outside 1..upper are dropped.

    Args:
        text: Index expression
        upper: Highest valid 1-based index

    Returns:
        0-based indices in the order given

    Raises:
        ValueError: If a token is not a number or range
    """
    indices: list[int] = []
    for token in text.replace(",", " ").split():
        if "-" in token:
            start_str, end_str = token.split("-", 1)
            start, end = int(start_str), int(end_str)
            if start > end:
                start, end = end, start
            candidates = range(max(start, 1), min(end, upper) + 1)
        else:
            candidates = range(int(token), int(token) + 1)
        indices.extend(i - 1 for i in candidates if 1 <= i <= upper)
    return indices
