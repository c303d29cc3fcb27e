"""Command-line interface for video2sprite."""

from .main import app, main

__all__ = ["app", "main"]
