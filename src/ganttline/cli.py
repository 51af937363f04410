"""Command-line interface for ganttline."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .backends import HtmlBackend
from .engine import build_scene
from .exceptions import GanttlineError
from .grid import build_grid
from .layout import layout_rows
from .loader import load_data_view
from .logger import setup_logger
from .models import TemporalDomain, ViewportSize
from .normalizer import ColumnSchema, normalize_tasks
from .scale import TemporalScale
from .tooltip import format_date
from .unified_config import UnifiedConfig, discover_config, load_unified_config

app = typer.Typer(
    name="ganttline",
    help="Render task tables as scrollable Gantt timelines",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=summary, 2=row details, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: ganttline_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for ganttline commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD CLI option, exiting with an error when malformed."""
    if date_str is None:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(f"Error: Invalid {option_name} format. Use YYYY-MM-DD", err=True)
        raise typer.Exit(1) from None


def _load_config(data_file: Path) -> UnifiedConfig:
    """Load the discovered config, or defaults when none exists."""
    config_path = discover_config(data_file)
    if config_path is None:
        return UnifiedConfig()
    try:
        return load_unified_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def render(  # noqa: PLR0913 - CLI command needs multiple options
    file: Annotated[Path, typer.Argument(help="Path to the task table (.csv, .yaml)")],
    *,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output HTML file")] = None,
    width: Annotated[float, typer.Option("--width", help="Viewport width in pixels", min=1)] = 1200,
    height: Annotated[
        float, typer.Option("--height", help="Viewport height in pixels", min=1)
    ] = 600,
    today: Annotated[
        str | None,
        typer.Option("--today", help="Date of the today marker (YYYY-MM-DD). Defaults to today"),
    ] = None,
    plot_width: Annotated[
        float | None,
        typer.Option("--plot-width", help="Full timeline width in pixels. Overrides config", min=1),
    ] = None,
    title: Annotated[str, typer.Option("--title", "-t", help="HTML document title")] = "Timeline",
) -> None:
    """Render the timeline as a self-contained HTML page."""
    parsed_today = _parse_date_option(today, "today")
    config = _load_config(file)

    # CLI overrides config
    if plot_width is not None:
        config.layout = config.layout.model_copy(update={"plot_width": plot_width})

    try:
        data_view = load_data_view(file, config.columns)
    except GanttlineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    scene = build_scene(
        data_view, ViewportSize(width=width, height=height), config=config, today=parsed_today
    )
    document = HtmlBackend(config.tooltip, title=title).render(scene)

    if output:
        output.write_text(document, encoding="utf-8")
        typer.echo(f"Timeline written to {output}")
    else:
        typer.echo(document)


@app.command()
def rows(
    file: Annotated[Path, typer.Argument(help="Path to the task table (.csv, .yaml)")],
    *,
    today: Annotated[
        str | None,
        typer.Option("--today", help="Reference date when no task has dates (YYYY-MM-DD)"),
    ] = None,
) -> None:
    """Print the row order and bar geometry without rendering."""
    parsed_today = _parse_date_option(today, "today") or date.today()  # noqa: DTZ011
    config = _load_config(file)

    try:
        data_view = load_data_view(file, config.columns)
    except GanttlineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    tasks = normalize_tasks(ColumnSchema.resolve(data_view))
    if not tasks:
        typer.echo("No tasks.")
        return

    domain = TemporalDomain.from_tasks(tasks, parsed_today)
    scale = TemporalScale(domain=domain, width=config.layout.plot_width)
    grid = build_grid(scale, parsed_today)
    typer.echo(
        f"Domain: {domain.start.isoformat()} .. {domain.end.isoformat()} "
        f"({len(grid.years)} years, {len(grid.months)} months)"
    )
    typer.echo(
        f"{'Row':>4}  {'Index':>5}  {'Start':<10}  {'End':<10}  {'X':>8}  {'Width':>8}  Task"
    )
    for row in layout_rows(tasks, scale, config.layout):
        bar = row.actual_bar
        x = f"{bar.x:.1f}" if bar else "-"
        bar_width = f"{bar.width:.1f}" if bar else "-"
        typer.echo(
            f"{row.row:>4}  {row.index:>5}  {format_date(row.task.actual_start) or '-':<10}  "
            f"{format_date(row.task.actual_end) or '-':<10}  {x:>8}  {bar_width:>8}  "
            f"{row.task.label}"
        )


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
