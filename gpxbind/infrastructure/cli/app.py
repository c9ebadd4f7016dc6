"""gpxbind CLI - inspect, validate and rewrite GPX documents."""

from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from gpxbind import __version__
from gpxbind.binding import GPXError
from gpxbind.config import get_logger, setup_loguru_logger
from gpxbind.domain.entities import GPX
from gpxbind.infrastructure.document import read_gpx, write_gpx

VERSION = __version__

console = Console(width=100)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"gpxbind v{VERSION} - read, inspect and rewrite GPX documents",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

ExistingFile = Annotated[
    Path,
    typer.Argument(exists=True, dir_okay=False, readable=True, help="GPX file"),
]


def _load(path: Path) -> GPX:
    """Read a document, turning binding failures into a clean exit."""
    try:
        return read_gpx(path)
    except GPXError as e:
        console.print(f"[red]✗[/red] {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(1) from e


def _summary_table(gpx: GPX) -> Table:
    table = Table(title=f"Created by {escape(gpx.creator)} (GPX {escape(gpx.version)})")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Segments", justify="right")
    table.add_column("Points", justify="right", style="green")

    for track in gpx.tracks:
        table.add_row(
            "track",
            escape(track.name or "-"),
            str(len(track.segments)),
            str(sum(1 for _ in track.points())),
        )
    for route in gpx.routes:
        table.add_row("route", escape(route.name or "-"), "-", str(len(route.points)))
    if gpx.waypoints:
        table.add_row("waypoints", "-", "-", str(len(gpx.waypoints)))
    return table


@app.command(name="info", rich_help_panel="📍 Documents")
def info_command(path: ExistingFile) -> None:
    """Show tracks, routes and waypoints contained in a GPX file."""
    gpx = _load(path)
    console.print(_summary_table(gpx))
    if gpx.metadata and gpx.metadata.name:
        console.print(f"[dim]Metadata name:[/dim] {escape(gpx.metadata.name)}")


@app.command(name="validate", rich_help_panel="📍 Documents")
def validate_command(path: ExistingFile) -> None:
    """Check that a GPX file parses into a complete document."""
    _load(path)
    console.print(f"[green]✓[/green] {escape(str(path))} is valid")


@app.command(name="normalize", rich_help_panel="📍 Documents")
def normalize_command(
    source: ExistingFile,
    target: Annotated[Path, typer.Argument(dir_okay=False, help="Output file")],
    indent: Annotated[
        int | None,
        typer.Option("--indent", "-i", min=0, help="Spaces per level, 0 for none"),
    ] = None,
) -> None:
    """Parse a GPX file and write it back in canonical form."""
    gpx = _load(source)
    write_gpx(gpx, target, indent=indent)
    console.print(
        f"[green]✓[/green] Wrote {escape(str(target))}: "
        f"{len(gpx.tracks)} tracks, {len(gpx.routes)} routes, "
        f"{len(gpx.waypoints)} waypoints"
    )


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold bright_blue]gpxbind[/bold bright_blue] [dim]v{VERSION}[/dim]")


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize gpxbind CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
