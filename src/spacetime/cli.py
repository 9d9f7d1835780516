"""Command-line interface for spacetime."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional

import typer

from .config import DEFAULT_IDLE_THRESHOLD_SECONDS, TrackerSettings, parse_workspace_option
from .models import Granularity
from .paths import get_store_path
from .server_runner import run_dashboard

app = typer.Typer(help="Per-workspace coding time tracker.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    store_path: Optional[Path] = typer.Option(
        None, "--store", path_type=Path, help="Location of the workspace times JSON file."
    ),
    idle_minutes: float = typer.Option(
        DEFAULT_IDLE_THRESHOLD_SECONDS / 60,
        "--idle-minutes",
        help="Longest gap between events, in minutes, that counts as work.",
    ),
    workspace: List[str] = typer.Option(
        [],
        "--workspace",
        "-w",
        help="Workspace to track, as NAME=PATH or a folder path. Repeatable.",
    ),
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically launch the dashboard in your default browser.",
    ),
) -> None:
    """Start the activity endpoint and stats dashboard."""
    folders: dict[str, Path] = {}
    for value in workspace:
        try:
            name, folder = parse_workspace_option(value)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--workspace") from exc
        folders[name] = folder
    settings = TrackerSettings.from_options(idle_minutes=idle_minutes, workspaces=folders)
    run_dashboard(
        host=host,
        port=port,
        store_path=store_path or get_store_path(),
        settings=settings,
        open_browser=open_browser,
    )


@app.command()
def report(
    start: Optional[str] = typer.Option(
        None,
        "--start",
        help="First date (YYYY-MM-DD) to include. Defaults to a week before --end.",
    ),
    end: Optional[str] = typer.Option(
        None,
        "--end",
        help="Last date (YYYY-MM-DD) to include. Defaults to today.",
    ),
    granularity: Granularity = typer.Option(
        Granularity.DAILY, "--granularity", "-g", help="Bucket size for the breakdown."
    ),
    store_path: Optional[Path] = typer.Option(
        None, "--store", path_type=Path, help="Location of the workspace times JSON file."
    ),
) -> None:
    """Print workspace totals and a bucketed breakdown for a date range."""
    from .reporting import ReportPrinter
    from .store import JsonTimesStore, StoreReadError

    end_day = _parse_date_option(end, "--end") if end else date.today()
    start_day = (
        _parse_date_option(start, "--start") if start else end_day - timedelta(days=7)
    )
    printer = ReportPrinter(JsonTimesStore(store_path or get_store_path()))
    try:
        printer.print_report(start_day, end_day, granularity)
    except StoreReadError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _parse_date_option(value: str, hint: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter("Expected a date in YYYY-MM-DD format.", param_hint=hint) from exc
