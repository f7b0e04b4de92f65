"""
Main CLI application using Typer.
"""

from datetime import date, time, timedelta
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..services.calendar_service import CalendarService

app = typer.Typer(
    name="meetingcalendar",
    help="Inspect meetings, free time and conflicts of a single-timezone calendar",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./calendar.yaml")
]


def _load_service(config_file: Optional[Path]) -> tuple[AppConfig, CalendarService]:
    """Load the configuration and book its meetings, exiting on error."""
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
        return config, CalendarService.from_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _parse_date(value: str) -> date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        console.print(f"[red]Could not parse date '{value}' (expected YYYY-MM-DD): {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _parse_time(value: str) -> time:
    try:
        parsed = pendulum.parse(value, exact=True)
    except ValueError as e:
        console.print(f"[red]Could not parse time '{value}' (expected HH:MM): {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not isinstance(parsed, time):
        console.print(f"[red]Expected a time of day (HH:MM), got '{value}'[/red]")
        raise typer.Exit(1)
    return parsed


@app.command()
def meetings(
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
):
    """
    List the meetings of a day.
    """
    target = _parse_date(day)
    config, service = _load_service(config_file)

    day_meetings = service.meetings(target)
    if not day_meetings:
        console.print(f"[yellow]No meetings on {target.isoformat()}.[/yellow]")
        return

    table = Table(
        title=f"Meetings on {target.isoformat()} ({config.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold yellow")
    table.add_column("End")
    table.add_column("Subject")
    table.add_column("Minutes", justify="right", style="dim")

    for meeting in day_meetings:
        table.add_row(
            meeting.start_time.strftime("%H:%M"),
            meeting.end_time.strftime("%H:%M"),
            meeting.subject,
            str(meeting.interval.duration_minutes())
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def slots(
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    min_duration: Annotated[Optional[int], typer.Option("--min-duration", "-m", help="Minimum slot length in minutes")] = None,
):
    """
    Show the free time ranges of a day.
    """
    target = _parse_date(day)
    config, service = _load_service(config_file)

    minimum = min_duration if min_duration is not None else config.defaults.min_slot_minutes
    free = service.free_slots(target, min_duration_minutes=minimum)

    if not free:
        console.print(f"[yellow]⚠ No free time on {target.isoformat()}.[/yellow]")
        return

    console.print(f"[bold green]✓ {len(free)} free slot(s) on {target.isoformat()}:[/bold green]\n")
    for slot in free:
        console.print(f"  {slot.in_timezone(config.timezone)} ({slot.duration_minutes()} Min.)")
    console.print()


@app.command()
def check(
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    start: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    config_file: ConfigOption = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
):
    """
    Check whether a proposed meeting fits into the calendar.

    Exits with status 1 if it overlaps an existing meeting.
    """
    target = _parse_date(day)
    start_time = _parse_time(start)
    config, service = _load_service(config_file)

    minutes = duration if duration is not None else config.defaults.duration_minutes
    if minutes < 0:
        console.print("[bold red]Error:[/bold red] duration must not be negative")
        raise typer.Exit(1)

    conflicts = service.find_conflicts(target, start_time, timedelta(minutes=minutes))

    if not conflicts:
        console.print(
            f"[green]✓ {target.isoformat()} {start_time.strftime('%H:%M')} "
            f"for {minutes} Min. is free[/green]"
        )
        return

    console.print(f"[bold red]✗ Conflicts with {len(conflicts)} meeting(s):[/bold red]")
    for meeting in conflicts:
        console.print(f"  {meeting.format_display()}")
    raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingcalendar[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
