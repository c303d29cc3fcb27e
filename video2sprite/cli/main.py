"""
CLI interface for video2sprite.

This module provides the command-line interface using Typer and Rich.
"""

import asyncio
import sys
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from ..config import Video2SpriteConfig, get_config_manager
from ..pipeline import (
    SpriteOutput,
    compose_selection,
    generate_direct,
    preview_matte,
    sample_for_selection,
)
from ..sampler import SampleConfig, SampleMode, VideoFileSource
from ..selection import FrameSelectionState, apply_command
from ..sprites import SpriteWriter
from ..ui import SamplingProgress, SummaryReporter
from ..utils import (
    ConfigurationError,
    EmptySampleError,
    NoSelectionError,
    SourceOpenError,
    Video2SpriteError,
    format_duration,
    get_logger,
    setup_logger,
)

app = typer.Typer(
    name="video2sprite",
    help="Convert video clips into sprite sheets with optional background removal",
    add_completion=False,
)

console = Console()

logger = get_logger(__name__)


def _load_config(
    config_file: Optional[Path],
    width: Optional[int],
    height: Optional[int],
    interval: Optional[int],
    frames: Optional[int],
    method: Optional[str],
    no_matte: bool,
    quality: Optional[float],
) -> Video2SpriteConfig:
    """Load configuration and apply command-line overrides."""
    config_manager = get_config_manager()
    config = config_manager.load(config_file) if config_file else config_manager.config

    overrides = {
        "frame_width": width,
        "frame_height": height,
        "interval_ms": interval,
        "frame_count": frames,
        "quality": quality,
    }
    sampling = config.sampling.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    matte_overrides: dict[str, object] = {}
    if method is not None:
        matte_overrides["method"] = method
    if no_matte:
        matte_overrides["enabled"] = False
    matte = config.matte.model_copy(update=matte_overrides)

    try:
        # Overrides obey the same ranges as the config file
        return Video2SpriteConfig.model_validate(
            {
                "sampling": sampling.model_dump(),
                "matte": matte.model_dump(),
                "output": config.output.model_dump(),
            }
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid option: {e}") from e


def _setup(verbose: bool, log_file: Optional[Path]) -> None:
    setup_logger(
        level="DEBUG" if verbose else "INFO",
        log_file=log_file,
        verbose=verbose,
        console=console,
    )


def _write_output(output: SpriteOutput, config: Video2SpriteConfig, output_dir: Path) -> None:
    writer = SpriteWriter(
        output_dir,
        sheet_name=config.output.spritesheet_name,
        manifest_name=config.output.manifest_name,
    )
    result = writer.write(output.sheet, output.manifest, output.manifest_fields)
    SummaryReporter(console).display_result(result)


def _run(workflow: Callable[[], None], verbose: bool) -> None:
    """Run a workflow and map failures to exit codes."""
    try:
        workflow()
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Cancelled by user[/yellow]")
        sys.exit(130)
    except SourceOpenError as e:
        console.print(f"\n[bold red]✗ Could not open video:[/bold red] {e}")
        sys.exit(1)
    except EmptySampleError as e:
        console.print(f"\n[bold red]✗ No frames could be extracted:[/bold red] {e}")
        sys.exit(1)
    except NoSelectionError:
        console.print("\n[bold red]✗ No frames selected[/bold red]")
        sys.exit(1)
    except ConfigurationError as e:
        console.print(f"\n[bold red]✗ Configuration error:[/bold red] {e}")
        sys.exit(1)
    except Video2SpriteError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def generate(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Input video file"
    ),
    output_dir: Path = typer.Option(Path("output"), "--output", "-o", help="Output directory"),
    width: Optional[int] = typer.Option(None, "--width", "-W", help="Frame width in pixels"),
    height: Optional[int] = typer.Option(None, "--height", "-H", help="Frame height in pixels"),
    interval: Optional[int] = typer.Option(None, "--interval", "-i", help="Frame interval in ms"),
    frames: Optional[int] = typer.Option(None, "--frames", "-n", help="Number of frames to sample"),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="Background removal: edge, color, smart, greenscreen"
    ),
    no_matte: bool = typer.Option(False, "--no-matte", help="Keep frame backgrounds"),
    quality: Optional[float] = typer.Option(None, "--quality", "-q", help="Output quality 0.1-1.0"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Custom configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[Path] = typer.Option(None, "--log", help="Log file path"),
) -> None:
    """
    Sample frames at a fixed interval and pack all of them into a sprite sheet.
    """
    _setup(verbose, log_file)

    def workflow() -> None:
        config = _load_config(config_file, width, height, interval, frames, method, no_matte, quality)
        sample_config = config.to_sample_config(SampleMode.DIRECT)

        with VideoFileSource(input_file) as source:
            console.print(
                f"[cyan]🎬 {input_file.name}[/cyan] ({format_duration(source.duration())})"
            )
            with SamplingProgress(console=console) as progress:
                output = asyncio.run(
                    generate_direct(source, sample_config, progress_callback=progress.update)
                )
        _write_output(output, config, output_dir)

    _run(workflow, verbose)


def _interactive_select(state: FrameSelectionState) -> Optional[FrameSelectionState]:
    """Let the user curate frames; returns None if they quit."""
    reporter = SummaryReporter(console)
    frames = state.frames
    console.print(
        "[dim]Commands: numbers or ranges (1,3-5) toggle, a = all, d = none, "
        "i = invert, done = confirm, quit = abort[/dim]"
    )

    while True:
        reporter.display_frames(frames, state)
        command = Prompt.ask("[yellow]Selection[/yellow]", default="done")
        text = command.strip().lower()

        if text in ("q", "quit"):
            return None
        if text == "done":
            if state.can_confirm:
                return state
            console.print("[yellow]⚠ Select at least one frame[/yellow]")
            continue

        state, error = apply_command(state, text)
        if error:
            console.print(f"[red]✗[/red] {error}")


@app.command()
def select(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Input video file"
    ),
    output_dir: Path = typer.Option(Path("output"), "--output", "-o", help="Output directory"),
    width: Optional[int] = typer.Option(None, "--width", "-W", help="Frame width in pixels"),
    height: Optional[int] = typer.Option(None, "--height", "-H", help="Frame height in pixels"),
    interval: Optional[int] = typer.Option(None, "--interval", "-i", help="Frame interval in ms"),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="Background removal: edge, color, smart, greenscreen"
    ),
    no_matte: bool = typer.Option(False, "--no-matte", help="Keep frame backgrounds"),
    quality: Optional[float] = typer.Option(None, "--quality", "-q", help="Output quality 0.1-1.0"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Custom configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[Path] = typer.Option(None, "--log", help="Log file path"),
) -> None:
    """
    Sample evenly spaced frames, pick the ones to keep, and pack them.
    """
    _setup(verbose, log_file)

    def workflow() -> None:
        config = _load_config(config_file, width, height, interval, None, method, no_matte, quality)
        sample_config: SampleConfig = config.to_sample_config(SampleMode.MANUAL)

        with VideoFileSource(input_file) as source:
            with SamplingProgress(console=console) as progress:
                state = asyncio.run(
                    sample_for_selection(source, sample_config, progress_callback=progress.update)
                )

        chosen = _interactive_select(state)
        if chosen is None:
            console.print("[yellow]Selection cancelled[/yellow]")
            return

        output, _ = compose_selection(chosen, sample_config)
        _write_output(output, config, output_dir)

    _run(workflow, verbose)


@app.command()
def preview(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Input video file"
    ),
    output_dir: Path = typer.Option(Path("output"), "--output", "-o", help="Output directory"),
    time: float = typer.Option(0.0, "--time", "-t", help="Timestamp to preview in seconds"),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="Background removal: edge, color, smart, greenscreen"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Custom configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """
    Write one frame with the background removed, to tune thresholds.
    """
    _setup(verbose, None)

    def workflow() -> None:
        config = _load_config(config_file, None, None, None, None, method, False, None)
        sample_config = config.to_sample_config()

        with VideoFileSource(input_file) as source:
            _, matted = asyncio.run(preview_matte(source, sample_config, time))

        path = SpriteWriter(output_dir).write_preview(matted)
        console.print(f"[green]✓[/green] Preview written to {path} ({config.matte.method})")

    _run(workflow, verbose)


@app.command("config")
def config_command(
    action: str = typer.Argument(..., help="Action: init, show"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file for 'init' action"
    ),
) -> None:
    """
    Manage configuration files.

    Actions:
    - init: Create a default configuration file
    - show: Display current configuration
    """
    config_manager = get_config_manager()

    if action == "init":
        output_path = output or Path(".video2sprite.yaml")
        try:
            config_manager.init_default_config(output_path)
            console.print(f"[green]✓[/green] Created config file: {output_path}")
        except ConfigurationError as e:
            console.print(f"[red]✗ Error:[/red] {e}")
            sys.exit(1)

    elif action == "show":
        config = config_manager.config

        console.print()
        console.print(Panel("[bold cyan]Current Configuration[/bold cyan]", border_style="cyan"))
        console.print()

        for title, section in (
            ("Sampling", config.sampling),
            ("Background Removal", config.matte),
            ("Output", config.output),
        ):
            table = Table(title=title, show_header=True)
            table.add_column("Setting", style="cyan")
            table.add_column("Value", style="white")
            for key, value in section.model_dump().items():
                table.add_row(key, str(value))
            console.print(table)
            console.print()

    else:
        console.print(f"[red]✗ Unknown action:[/red] {action}")
        console.print("Valid actions: init, show")
        sys.exit(1)


@app.command("version")
def version_command() -> None:
    """
    Display version information.
    """
    from .. import __version__

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]video2sprite[/bold cyan]\n[dim]Version {__version__}[/dim]",
            border_style="cyan",
        )
    )
    console.print()


def main() -> None:
    """
    Main entry point for CLI.
    """
    app()


if __name__ == "__main__":
    main()
