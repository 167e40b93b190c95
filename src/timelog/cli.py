"""Command-line interface for the time log."""

from __future__ import annotations

import logging
import subprocess
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional

import typer

from .activity import Activities
from .commands import HELP_TEXT, Action, Command, TimeMode
from .config import TimelogSettings
from .models import Entry
from .store import CorruptLogError, Timelog, describe_day, describe_week

try:
    import readline
except ImportError:  # pragma: no cover - not available on Windows
    readline = None

logger = logging.getLogger(__name__)

app = typer.Typer(help="Log finished tasks and summarize work and slack time.")


@app.callback(no_args_is_help=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        path_type=Path,
        help="Location of the timelog file.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    ctx.obj = TimelogSettings.from_env(path=log_file)


def load_timelog(settings: TimelogSettings) -> Timelog:
    """Load the log, turning a corrupt file into a clean exit."""
    try:
        return Timelog.from_settings(settings)
    except CorruptLogError as exc:
        typer.echo(f"Error: {settings.path} is corrupt: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def parse_date_option(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter("expected YYYY-MM-DD", param_hint="--date") from exc


def select_entries(
    timelog: Timelog, mode: TimeMode, day: date, count: int = 1
) -> tuple[str, List[Entry]]:
    if mode is TimeMode.WEEK:
        if count > 1:
            heading = f"Work done in the {count} weeks up to {describe_week(day)}:"
        else:
            heading = f"Work done in {describe_week(day)}:"
        return heading, timelog.get_n_weeks(day, count)
    if count > 1:
        heading = f"Work done in the {count} days up to {describe_day(day)}:"
    else:
        heading = f"Work done on {describe_day(day)}:"
    return heading, timelog.get_n_days(day, count)


def render_report(timelog: Timelog, mode: TimeMode, day: date, count: int = 1) -> str:
    heading, entries = select_entries(timelog, mode, day, count)
    return f"{heading}\n{Activities.from_entries(entries)}"


def save_or_exit(timelog: Timelog) -> None:
    try:
        timelog.save()
    except OSError as exc:
        typer.echo(f"Error: failed to save {timelog.path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def add(
    ctx: typer.Context,
    task: List[str] = typer.Argument(..., help="Description of the task you just finished."),
) -> None:
    """Record that a task just ended."""
    timelog = load_timelog(ctx.obj)
    try:
        entry = timelog.add(" ".join(task))
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    save_or_exit(timelog)
    typer.echo(str(entry))


@app.command()
def day(
    ctx: typer.Context,
    date_: Optional[str] = typer.Option(
        None, "--date", help="Date (YYYY-MM-DD) to summarize. Defaults to today."
    ),
    days: int = typer.Option(
        1, "--days", "-n", min=1, help="Number of days up to --date to summarize."
    ),
) -> None:
    """Print the activities of a day, or of the last few days."""
    timelog = load_timelog(ctx.obj)
    target = parse_date_option(date_) or timelog.today()
    typer.echo(render_report(timelog, TimeMode.DAY, target, days), nl=False)


@app.command()
def week(
    ctx: typer.Context,
    date_: Optional[str] = typer.Option(
        None, "--date", help="Any date (YYYY-MM-DD) in the week to summarize."
    ),
    weeks: int = typer.Option(
        1, "--weeks", "-n", min=1, help="Number of ISO weeks up to --date to summarize."
    ),
) -> None:
    """Print the activities of an ISO week, or of the last few weeks."""
    timelog = load_timelog(ctx.obj)
    target = parse_date_option(date_) or timelog.today()
    typer.echo(render_report(timelog, TimeMode.WEEK, target, weeks), nl=False)


@app.command()
def history(
    ctx: typer.Context,
    whole_week: bool = typer.Option(False, "--week", help="Use this week instead of today."),
) -> None:
    """List the distinct tasks of today (or this week)."""
    timelog = load_timelog(ctx.obj)
    entries = timelog.get_this_week() if whole_week else timelog.get_today()
    for task in Timelog.get_history(entries):
        typer.echo(task)


def run_editor(settings: TimelogSettings) -> None:
    try:
        subprocess.run([settings.editor, str(settings.path)], check=False)
    except OSError as exc:
        typer.echo(f"Failed to run {settings.editor} on {settings.path}: {exc}", err=True)


@app.command()
def edit(ctx: typer.Context) -> None:
    """Open the timelog in $EDITOR."""
    run_editor(ctx.obj)
    # re-read so that a broken edit is reported right away
    load_timelog(ctx.obj)


def format_since_last(timelog: Timelog) -> str:
    since = timelog.since_last_entry()
    if since is None:
        return "no entries yet today"
    if since < timedelta(0):
        return "last entry is in the future"
    hours, minutes = divmod(int(since.total_seconds() // 60), 60)
    return f"{hours} h {minutes} min since last entry"


def _prime_history(entries: List[Entry]) -> None:
    if readline is None:
        return
    readline.clear_history()
    for task in Timelog.get_history(entries):
        readline.add_history(task)


@app.command()
def shell(ctx: typer.Context) -> None:
    """Interactive mode: show the report and read finished tasks."""
    settings: TimelogSettings = ctx.obj
    timelog = load_timelog(settings)
    mode = TimeMode.DAY
    count = 1
    show = True

    while True:
        if show:
            typer.echo("\033c", nl=False)
            heading, entries = select_entries(timelog, mode, timelog.today(), count)
            typer.echo(heading)
            typer.echo(str(Activities.from_entries(entries)))
            _prime_history(entries)
        show = True
        typer.echo(f"\n{format_since_last(timelog)}; type command (:h for help) or entry")

        try:
            line = input("> ")
        except KeyboardInterrupt:
            # like in a shell, ^C aborts the current input
            typer.echo()
            line = ""
        except EOFError:
            line = ":q"

        command = Command.parse(line)
        if command.action is Action.QUIT:
            break
        if command.action is Action.HELP:
            typer.echo(HELP_TEXT)
            show = False
        elif command.action is Action.EDIT:
            run_editor(settings)
            timelog = load_timelog(settings)
        elif command.action is Action.SWITCH_MODE:
            mode = command.mode or TimeMode.DAY
            count = command.count
        elif command.action is Action.ADD:
            try:
                timelog.add(command.text or "")
                timelog.save()
            except CorruptLogError as exc:
                typer.echo(f"Error: {exc}", err=True)
                raise typer.Exit(code=1) from exc
            except ValueError as exc:
                typer.echo(f"Error: {exc}", err=True)
                show = False
            except OSError as exc:
                typer.echo(f"Error: failed to save {settings.path}: {exc}", err=True)
                show = False
        elif command.action is Action.ERROR:
            typer.echo(f"Error: {command.text}")
            show = False


@app.command()
def web(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically launch the dashboard in your default browser.",
    ),
) -> None:
    """Serve the timelog reports as a local JSON dashboard."""
    from .server_runner import run_dashboard

    try:
        run_dashboard(host=host, port=port, settings=ctx.obj, open_browser=open_browser)
    except CorruptLogError as exc:
        typer.echo(f"Error: {ctx.obj.path} is corrupt: {exc}", err=True)
        raise typer.Exit(code=1) from exc
