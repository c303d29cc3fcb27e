"""Allow running as ``python -m video2sprite``."""

from video2sprite.cli import main

main()
