"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import WorkingTimeConfig, get_default_config_path
from ..domain.dates import parse_instant
from ..domain.exceptions import ConfigurationGapError, WorkingTimeError
from ..domain.working_time import WorkingTime

app = typer.Typer(
    name="workingtime",
    help="Working hours aware date arithmetic",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./workingtime.yaml")
]
NowOption = Annotated[
    Optional[str],
    typer.Option("--now", help="Reference instant (YYYY-MM-DD HH:MM). Defaults to the current time.")
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logging.")
]


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


def _load_engine(config_file: Optional[Path], now: Optional[str], verbose: bool) -> WorkingTime:
    """
    Load configuration and build the engine.

    Args:
        config_file: Explicit config path, or None for the default lookup
        now: Reference instant string, or None for the current time
        verbose: Route debug logging through rich

    Returns:
        WorkingTime instance
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )

    config_path = config_file or get_default_config_path()
    config = WorkingTimeConfig.load_from_yaml(config_path)
    return WorkingTime(config, now)


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def check(
    when: Annotated[Optional[str], typer.Argument(help="Instant to check (YYYY-MM-DD HH:MM). Defaults to --now.")] = None,
    config_file: ConfigOption = None,
    now: NowOption = None,
    verbose: VerboseOption = False,
):
    """
    Classify an instant as working or non-working.

    Examples:

        workingtime check "2016-10-27 10:00"
    """
    try:
        engine = _load_engine(config_file, now, verbose)

        instant = engine.date_time if when is None else parse_instant(when)
        try:
            window = str(engine.working_window(instant))
        except ConfigurationGapError:
            window = "[dim]none[/dim]"

        table = Table(
            title=instant.format("dddd, YYYY-MM-DD HH:mm"),
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Check", style="bold yellow")
        table.add_column("Result")

        table.add_row("Holiday", _yes_no(engine.is_holiday(when)))
        table.add_row("Weekend", _yes_no(engine.is_weekend(when)))
        table.add_row("Working date", _yes_no(engine.is_working_date(when)))
        table.add_row("Working time", _yes_no(engine.is_working_time(instant)))
        table.add_row("Window", window)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, WorkingTimeError, ValueError) as e:
        _fail(e)


@app.command(name="next")
def next_(
    when: Annotated[Optional[str], typer.Argument(help="Instant to start from (YYYY-MM-DD HH:MM). Defaults to --now.")] = None,
    config_file: ConfigOption = None,
    now: NowOption = None,
    verbose: VerboseOption = False,
):
    """
    Show the next working day and the next working instant.
    """
    try:
        engine = _load_engine(config_file, now, verbose)

        next_time = engine.next_working_time(when)

        console.print()
        console.print(f"  Next working day:       [bold]{engine.next_working_day(when).format('YYYY-MM-DD')}[/bold]")
        if next_time is None:
            console.print("  Next working time:      [green]already working[/green]")
        else:
            console.print(f"  Next working time:      [bold]{next_time.format('YYYY-MM-DD HH:mm')}[/bold]")
        console.print(f"  Next working day start: [bold]{engine.next_working_day_start(when).format('YYYY-MM-DD HH:mm')}[/bold]")
        console.print(f"  Next working day end:   [bold]{engine.next_working_day_end(when).format('YYYY-MM-DD HH:mm')}[/bold]")
        console.print()

    except (FileNotFoundError, WorkingTimeError, ValueError) as e:
        _fail(e)


@app.command()
def add(
    minutes: Annotated[int, typer.Argument(help="Working minutes to add")],
    start: Annotated[Optional[str], typer.Option("--from", help="Start instant (YYYY-MM-DD HH:MM). Defaults to --now.")] = None,
    config_file: ConfigOption = None,
    now: NowOption = None,
    verbose: VerboseOption = False,
):
    """
    Add working minutes to an instant, skipping nights, weekends and holidays.

    Examples:

        workingtime add 540 --from "2016-10-27 09:00"
    """
    try:
        engine = _load_engine(config_file, now, verbose)
        result = engine.modify(minutes, start)
        console.print(result)

    except (FileNotFoundError, WorkingTimeError, ValueError) as e:
        _fail(e)


@app.command()
def between(
    start: Annotated[str, typer.Argument(help="Start (YYYY-MM-DD HH:MM:SS)")],
    end: Annotated[str, typer.Argument(help="End (YYYY-MM-DD HH:MM:SS)")],
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Count working minutes between two instants.

    Examples:

        workingtime between "2016-10-27 17:30:00" "2016-10-28 10:00:00"
    """
    try:
        engine = _load_engine(config_file, None, verbose)
        minutes = engine.calculating_working_time(start, end)
        console.print(f"{minutes}")

    except (FileNotFoundError, WorkingTimeError, ValueError) as e:
        _fail(e)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]workingtime[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
