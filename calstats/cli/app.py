"""
Main CLI application using Typer.
"""

import sys
from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..adapters.csv_report import CsvReportWriter
from ..adapters.google_authenticator import GoogleAuthenticator
from ..adapters.google_calendar_client import GoogleCalendarClient
from ..adapters.ignore_list import load_ignore_patterns
from ..adapters.mock_calendar_client import MockCalendarClient
from ..config import AppConfig
from ..domain.aggregator import SlotAggregator
from ..domain.classifier import ClassifierSettings, EventClassifier
from ..domain.exceptions import CalstatsError, ConfigError
from ..domain.models import WindowPolicy
from ..domain.patterns import PatternMatcher
from ..domain.slot_generator import SlotGenerator
from ..services.calendar_stats import CalendarStatsService, WindowSettings

app = typer.Typer(
    name="calstats",
    help="Meeting load statistics for Google calendars",
    add_completion=False
)

# stdout carries the CSV report only
console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./calstats.yaml")
]
StartOption = Annotated[
    Optional[str],
    typer.Option("--start", help="Window start (YYYY/MM/DD HH:mm:ss). Defaults to today 07:00")
]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", help="Window length in hours (elapsed_hours policy)")
]
DaysOption = Annotated[
    Optional[int],
    typer.Option("--days", help="Number of working days (business_days policy)")
]
PolicyOption = Annotated[
    Optional[WindowPolicy],
    typer.Option("--policy", help="How weekends count toward the window length")
]


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _window_settings(
    config: AppConfig,
    *,
    start: Optional[str],
    duration: Optional[int],
    days: Optional[int],
    policy: Optional[WindowPolicy],
) -> WindowSettings:
    """
    Merge CLI flags over the configured window.

    Without an explicit policy, passing only --days selects business_days and
    passing --duration selects elapsed_hours.
    """
    if policy is None:
        if days is not None and duration is None:
            policy = WindowPolicy.BUSINESS_DAYS
        elif duration is not None:
            policy = WindowPolicy.ELAPSED_HOURS
        else:
            policy = config.window.policy

    for name, value in (("--duration", duration), ("--days", days)):
        if value is not None and value <= 0:
            raise ConfigError(f"{name} must be greater than zero, got {value}")

    return WindowSettings(
        start=start,
        start_hour=config.window.start_hour,
        policy=policy,
        duration_hours=duration if duration is not None else config.window.duration_hours,
        days=days if days is not None else config.window.days,
    )


def _load_patterns(config: AppConfig, ignorelist: Optional[Path]) -> PatternMatcher:
    """Load the ignore list; only an explicitly requested file must exist."""
    path = ignorelist or config.ignorelist

    if ignorelist is None and not path.exists():
        console.print(f"[dim]No ignore list at {path}, no events ignored by title.[/dim]")
        return PatternMatcher()

    return load_ignore_patterns(path)


@app.command()
def report(
    calendars: Annotated[Optional[List[str]], typer.Argument(help="Calendar ids (email addresses). Defaults to the configured calendars.")] = None,
    config_file: ConfigOption = None,
    ignorelist: Annotated[Optional[Path], typer.Option("--ignorelist", help="File with one title regex per line")] = None,
    start: StartOption = None,
    duration: DurationOption = None,
    days: DaysOption = None,
    policy: PolicyOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Print every slot and its events to stderr.")] = False,
    mock: Annotated[bool, typer.Option("--mock", help="Use mock data and skip authentication.")] = False,
):
    """
    Write a CSV summary of meeting load per calendar to stdout.

    Examples:

        # Configured calendars, default window (7 x 24 hours from today 07:00)
        calstats report

        # Explicit calendars and window
        calstats report alice@example.com bob@example.com --start "2024/11/25 07:00:00"

        # Seven working days, with slot trace
        calstats report alice@example.com --days 7 -v

        # Use mock data (for testing without Google credentials)
        calstats report mock.user@example.com --mock
    """
    try:
        config = AppConfig.load(config_file)

        calendar_ids = list(calendars or config.calendars)
        if not calendar_ids:
            raise ConfigError("No calendars given on the command line or in the config file.")

        window = _window_settings(config, start=start, duration=duration, days=days, policy=policy)
        patterns = _load_patterns(config, ignorelist)

        if mock:
            console.print("[yellow]⚠  MOCK MODE: using test data[/yellow]")
            client = MockCalendarClient()
        else:
            authenticator = GoogleAuthenticator(
                credentials_file=config.credentials_file,
                token_file=config.get_token_file()
            )
            client = GoogleCalendarClient(access_token=authenticator.get_access_token())

        classifier = EventClassifier(
            ClassifierSettings(
                ignore_patterns=patterns,
                hiring_markers=tuple(config.hiring_markers),
            )
        )
        aggregator = SlotAggregator(
            classifier,
            workweek_hours=config.workday.workweek_hours,
            verbose=verbose,
            console=console,
        )
        service = CalendarStatsService(
            calendar_client=client,
            slot_generator=SlotGenerator(
                exclude_weekdays=config.exclude_days,
                slot_hours=config.workday.slot_hours,
            ),
            aggregator=aggregator,
            window=window,
        )

        writer = CsvReportWriter(sys.stdout)
        writer.write_header()

        for summary in service.summarize_all(calendar_ids):
            writer.write_summary(summary)

    except (CalstatsError, FileNotFoundError) as e:
        _fail(e)


@app.command()
def slots(
    timezone: Annotated[str, typer.Option("--timezone", "-z", help="IANA timezone of the calendar")] = "Europe/Berlin",
    config_file: ConfigOption = None,
    start: StartOption = None,
    duration: DurationOption = None,
    days: DaysOption = None,
    policy: PolicyOption = None,
):
    """
    Show the half-day slots of the reporting window.
    """
    try:
        config = AppConfig.load(config_file)
        window_settings = _window_settings(config, start=start, duration=duration, days=days, policy=policy)

        generator = SlotGenerator(
            exclude_weekdays=config.exclude_days,
            slot_hours=config.workday.slot_hours,
        )
        window = window_settings.build(generator, timezone)

    except (CalstatsError, FileNotFoundError) as e:
        _fail(e)

    table = Table(
        title=f"Slots ({window_settings.policy.value}, {timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Slot", style="bold yellow")
    table.add_column("Start", style="dim")
    table.add_column("End", style="dim")

    for slot in window.slots:
        table.add_row(
            slot.label,
            slot.start.format("YYYY-MM-DD HH:mm"),
            slot.end.format("YYYY-MM-DD HH:mm")
        )

    console.print()
    console.print(table)
    console.print(
        f"Events queried from {window.start.to_rfc3339_string()} "
        f"to {window.end.to_rfc3339_string()}\n"
    )


@app.command()
def test_auth(
    config_file: ConfigOption = None,
    force: Annotated[bool, typer.Option("--force", help="Force re-authentication")] = False,
):
    """
    Test Google Calendar authentication.
    """
    try:
        config = AppConfig.load(config_file)

        console.print("\n[bold]Testing Google Calendar authentication...[/bold]\n")

        authenticator = GoogleAuthenticator(
            credentials_file=config.credentials_file,
            token_file=config.get_token_file()
        )
        access_token = authenticator.get_access_token(force_refresh=force)

        client = GoogleCalendarClient(access_token=access_token)
        calendar = client.test_connection()

    except (CalstatsError, FileNotFoundError) as e:
        _fail(e)

    console.print(Panel.fit(
        f"[bold green]✓ Authentication successful![/bold green]\n\n"
        f"[bold]Calendar:[/bold] {escape(calendar.get('summary', 'N/A'))}\n"
        f"[bold]Id:[/bold] {escape(calendar.get('id', 'N/A'))}\n"
        f"[bold]Timezone:[/bold] {escape(calendar.get('timeZone', 'N/A'))}",
        title="✓ Connection test"
    ))
    console.print()


@app.command()
def clear_cache(config_file: ConfigOption = None):
    """
    Clear the authentication token cache.
    """
    try:
        config = AppConfig.load(config_file)
    except (CalstatsError, FileNotFoundError) as e:
        _fail(e)

    authenticator = GoogleAuthenticator(
        credentials_file=config.credentials_file,
        token_file=config.get_token_file()
    )
    authenticator.clear_cache()
    console.print("\n[green]✓ Token cache cleared.[/green]")
    console.print("You will need to re-authenticate on the next run.\n")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]calstats[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
