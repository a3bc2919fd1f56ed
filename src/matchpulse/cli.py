"""
MatchPulse CLI - Command Line Interface for match event statistics

Provides commands for:
- Team statistics and player performance from recorded event files
- Momentum of the latest events
- Replaying an event file through a live session
- Exporting match reports
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from matchpulse import __version__
from matchpulse.core.config import (
    generate_default_config,
    get_config,
    load_config,
    set_config,
    setup_logging,
)
from matchpulse.core.diagnostics import get_diagnostics
from matchpulse.core.loader import load_events
from matchpulse.core.models import MatchEvent, MatchState
from matchpulse.domains.momentum import compute_momentum, momentum_indicator
from matchpulse.domains.player_performance import (
    calculate_player_rating,
    compute_player_performance,
    top_performers,
)
from matchpulse.domains.team_stats import compute_team_statistics
from matchpulse.domains.timeline import filter_events_by_time_range
from matchpulse.export import build_match_report, export_report, export_to_json
from matchpulse.live.hub import MatchEventHub
from matchpulse.live.session import LiveMatchSession

app = typer.Typer(
    name="matchpulse",
    help="Live football match statistics from event streams",
    add_completion=False,
)
console = Console()

logger = logging.getLogger(__name__)

MOMENTUM_STYLES = {"success": "green", "info": "cyan", "warning": "yellow", "danger": "red"}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]MatchPulse[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (YAML, TOML or JSON)"
    ),
) -> None:
    """MatchPulse - live match statistics"""
    config = load_config(config_file)
    if verbose:
        config.logging.level = "DEBUG"
    set_config(config)
    setup_logging(config.logging)


# ============================================================================
# Helpers
# ============================================================================


def _load(events_path: Path) -> list[MatchEvent]:
    try:
        return load_events(events_path)
    except (ValueError, OSError) as e:
        console.print(f"[red]Error loading events:[/red] {e}")
        raise typer.Exit(1)


def _resolve_minute(events: list[MatchEvent], minute: Optional[int]) -> int:
    """Explicit minute, else the last minute seen in the file."""
    if minute is not None:
        return minute
    return max((e.minute for e in events), default=0)


def _filter(events: list[MatchEvent], time_range: str) -> list[MatchEvent]:
    try:
        return filter_events_by_time_range(events, time_range)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _momentum_panel(momentum: int) -> Panel:
    indicator = momentum_indicator(momentum)
    style = MOMENTUM_STYLES.get(indicator.variant, "white")
    return Panel(
        f"[bold {style}]{momentum:+d}[/bold {style}]  {indicator.text}",
        title="Momentum",
        expand=False,
    )


def _report_unrecognized() -> None:
    unknown = get_diagnostics().unrecognized_types
    if unknown:
        listed = ", ".join(f"{name} ({count})" for name, count in sorted(unknown.items()))
        console.print(f"[yellow]Unrecognized event types not counted:[/yellow] {listed}")


# ============================================================================
# Commands
# ============================================================================


@app.command()
def stats(
    events_path: Path = typer.Argument(
        ..., help="Event file (.json, .jsonl or .csv)", exists=True, dir_okay=False
    ),
    home: str = typer.Option(..., "--home", "-H", help="Home team id"),
    away: str = typer.Option(..., "--away", "-A", help="Away team id"),
    minute: Optional[int] = typer.Option(
        None, "--minute", "-m", help="Current match minute (defaults to the last event minute)"
    ),
    time_range: str = typer.Option(
        "all", "--range", "-r", help="Time range: all, first_half, second_half"
    ),
) -> None:
    """
    Show home/away team statistics for a recorded event stream.
    """
    events = _load(events_path)
    current_minute = _resolve_minute(events, minute)
    filtered = _filter(events, time_range)

    result = compute_team_statistics(filtered, home, away, current_minute, get_diagnostics())

    table = Table(title=f"Team Statistics ({time_range}, minute {current_minute})")
    table.add_column("Statistic", style="cyan")
    table.add_column(home, justify="right", style="green")
    table.add_column(away, justify="right", style="magenta")

    home_stats = result.home.to_dict()
    away_stats = result.away.to_dict()
    for key, home_value in home_stats.items():
        away_value = away_stats[key]
        if isinstance(home_value, float):
            table.add_row(key, f"{home_value:.1f}%", f"{away_value:.1f}%")
        else:
            table.add_row(key, str(home_value), str(away_value))

    console.print(table)
    console.print(_momentum_panel(compute_momentum(events, home)))
    _report_unrecognized()


@app.command()
def players(
    events_path: Path = typer.Argument(
        ..., help="Event file (.json, .jsonl or .csv)", exists=True, dir_okay=False
    ),
    minute: Optional[int] = typer.Option(None, "--minute", "-m", help="Current match minute"),
    time_range: str = typer.Option("all", "--range", "-r", help="all, first_half, second_half"),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-t",
        help="Only show the N highest rated players (0 = all; default from config)",
    ),
) -> None:
    """
    Show per-player performance.
    """
    events = _load(events_path)
    current_minute = _resolve_minute(events, minute)
    performances = compute_player_performance(_filter(events, time_range), current_minute)
    if top is None:
        top = get_config().statistics.top_performers
    if top > 0:
        performances = top_performers(performances, top)

    if not performances:
        console.print("[yellow]No player events found[/yellow]")
        return

    table = Table(title="Player Performance")
    table.add_column("Player", style="cyan")
    table.add_column("Team")
    for header in ("G", "A", "YC", "RC", "Sh", "Pa", "Tk", "Sv", "Min", "Rating"):
        table.add_column(header, justify="right")

    for p in performances:
        table.add_row(
            p.player_name,
            p.team_id,
            str(p.goals),
            str(p.assists),
            str(p.yellow_cards),
            str(p.red_cards),
            str(p.shots),
            str(p.passes),
            str(p.tackles),
            str(p.saves),
            str(p.minutes_played),
            f"{calculate_player_rating(p):.2f}",
        )

    console.print(table)


@app.command()
def momentum(
    events_path: Path = typer.Argument(
        ..., help="Event file (.json, .jsonl or .csv)", exists=True, dir_okay=False
    ),
    home: str = typer.Option(..., "--home", "-H", help="Home team id"),
) -> None:
    """
    Show the momentum of the most recent events.
    """
    events = _load(events_path)
    console.print(_momentum_panel(compute_momentum(events, home)))


@app.command()
def export(
    events_path: Path = typer.Argument(
        ..., help="Event file (.json, .jsonl or .csv)", exists=True, dir_okay=False
    ),
    output: Path = typer.Option(..., "--output", "-o", help="Output file (.json or .csv)"),
    home: str = typer.Option(..., "--home", "-H", help="Home team id"),
    away: str = typer.Option(..., "--away", "-A", help="Away team id"),
    minute: Optional[int] = typer.Option(None, "--minute", "-m", help="Current match minute"),
    time_range: str = typer.Option("all", "--range", "-r", help="all, first_half, second_half"),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="json or csv (default: from extension, else export.default_format)",
    ),
) -> None:
    """
    Export a full match report.
    """
    events = _load(events_path)
    try:
        report = build_match_report(
            events, home, away, _resolve_minute(events, minute), time_range
        )
        export_report(report, output, format, config=get_config().export)
    except ValueError as e:
        console.print(f"[red]Export failed:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Report written to[/green] {output}")


@app.command()
def replay(
    events_path: Path = typer.Argument(
        ..., help="Event file (.json, .jsonl or .csv)", exists=True, dir_okay=False
    ),
    home: str = typer.Option(..., "--home", "-H", help="Home team id"),
    away: str = typer.Option(..., "--away", "-A", help="Away team id"),
    match_id: str = typer.Option("replay", "--match-id", help="Match id used for the session"),
    as_json: bool = typer.Option(False, "--json", help="Print the final snapshot as JSON"),
) -> None:
    """
    Replay an event file through a live session, one event at a time.

    Prints the running score and momentum after every event.
    """
    events = _load(events_path)

    hub = MatchEventHub()
    session = LiveMatchSession(match_id, home, away, config=get_config().live)
    session.start(hub)

    trail = Table(title=f"Replay of {events_path.name}")
    trail.add_column("Min", justify="right")
    trail.add_column("Event", style="cyan")
    trail.add_column("Team")
    trail.add_column("Score", justify="center")
    trail.add_column("Momentum", justify="right")

    home_score = away_score = 0
    try:
        for event in events:
            if event.type == "goal":
                if event.team_id == home:
                    home_score += 1
                elif event.team_id == away:
                    away_score += 1
            hub.publish_state(
                MatchState(
                    match_id=match_id,
                    status="live",
                    current_minute=event.minute,
                    home_score=home_score,
                    away_score=away_score,
                    current_period="first_half" if event.is_first_half else "second_half",
                )
            )
            hub.publish_event(match_id, event)
            trail.add_row(
                str(event.minute),
                event.type,
                event.team_id,
                f"{home_score} - {away_score}",
                f"{session.momentum():+d}",
            )
    finally:
        session.stop()

    if as_json:
        console.print_json(export_to_json(session.snapshot(), include_metadata=False))
        return

    console.print(trail)
    console.print(_momentum_panel(session.momentum()))
    stats = session.get_session_stats()
    if stats["duplicate_events"]:
        console.print(f"[yellow]Duplicate event ids counted:[/yellow] {stats['duplicate_events']}")
    _report_unrecognized()


@app.command()
def config(
    path: Path = typer.Argument(Path("matchpulse.yaml"), help="Where to write the config"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """
    Write a default configuration file.
    """
    if path.exists() and not force:
        console.print(f"[red]{path} already exists[/red] (use --force to overwrite)")
        raise typer.Exit(1)
    try:
        generate_default_config(path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Wrote default config to[/green] {path}")


@app.command()
def info() -> None:
    """
    Display information about MatchPulse and the environment.
    """
    import platform as plat

    console.print(f"\n[bold blue]MatchPulse[/bold blue] v{__version__}\n")

    table = Table(show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Python", plat.python_version())
    table.add_row("Platform", plat.system())
    table.add_row("Architecture", plat.machine())
    console.print(table)


if __name__ == "__main__":
    app()
