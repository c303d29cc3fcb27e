"""
Progress tracking for frame sampling.

Wraps a Rich progress bar behind the (done, total) callback the sampler
reports through.
"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from ..utils import get_logger

logger = get_logger(__name__)


class SamplingProgress:
    """
    Rich progress bar fed by FrameSampler progress callbacks.

    Use as a context manager and pass ``update`` as the progress callback.
    """

    def __init__(self, description: str = "Extracting frames", console: Optional[Console] = None):
        """
        Initialize sampling progress.

        Args:
            description: Label shown next to the bar
            console: Rich console (creates new if not provided)
        """
        self.description = description
        self.console = console or Console()
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold cyan]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._task_id: Optional[TaskID] = None
        self.completed = 0
        self.total = 0

    def __enter__(self) -> "SamplingProgress":
        self._progress.start()
        self._task_id = self._progress.add_task(self.description, total=None)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._progress.stop()

    def update(self, done: int, total: int) -> None:
        """
        Record sampler progress.

        Args:
            done: Timestamps processed so far
            total: Timestamps planned
        """
        self.completed = done
        self.total = total
        if self._task_id is not None:
            self._progress.update(self._task_id, completed=done, total=total)
