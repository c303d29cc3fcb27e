"""
Summary reporting for sprite generation results.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..models import SampledFrame, SpriteResult
from ..selection import FrameSelectionState
from ..utils import format_size, format_timestamp, get_logger

logger = get_logger(__name__)


class SummaryReporter:
    """Console output for sampled frames and written sprite sheets."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize summary reporter.

        Args:
            console: Rich console instance (creates new if not provided)
        """
        self.console = console or Console()

    def display_result(self, result: SpriteResult) -> None:
        """
        Display the written sprite sheet and manifest.

        Args:
            result: Written sprite output
        """
        manifest = result.manifest

        self.console.print()
        self.console.rule("[bold green]Sprite Sheet Complete", style="green")
        self.console.print()

        table = Table(show_header=True)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Sprite sheet", str(result.sheet_path))
        table.add_row("Manifest", str(result.manifest_path))
        table.add_row("Resolution", result.resolution)
        table.add_row("Frame size", f"{manifest.frame_width}x{manifest.frame_height}")
        table.add_row("Grid", f"{manifest.columns} x {manifest.rows}")
        table.add_row("Frames", str(manifest.total_frames))
        table.add_row(
            "Background removal",
            manifest.matte_kind if manifest.matte_applied and manifest.matte_kind else "off",
        )
        table.add_row("Size", format_size(result.total_size))
        self.console.print(table)
        self.console.print()

    def display_frames(self, frames: Sequence[SampledFrame], state: FrameSelectionState) -> None:
        """
        Display sampled frames with their selection marks.

        Args:
            frames: Frames to list
            state: Current selection
        """
        table = Table(show_header=True, title="Sampled Frames")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Time", style="white")
        table.add_column("Selected", justify="center")

        for index, frame in enumerate(frames):
            mark = "[green]✓[/green]" if state.is_selected(index) else "[dim]·[/dim]"
            table.add_row(str(index + 1), format_timestamp(frame.source_time), mark)

        self.console.print(table)
        self.console.print(
            f"[bold]Selected:[/bold] {state.selected_count} of {state.frame_count} frame(s)"
        )
