#!/usr/bin/env python3
"""Divelog CLI for browsing and editing the dive log."""

import argparse

import questionary
from rich.console import Console
from rich.table import Table

from divelog.config import config
from divelog.dive import Dive, DiveRepository, DiveService
from divelog.dive.models import parse_date
from divelog.errors import DiveLogError, InvalidDiveError
from divelog.logging_config import setup_logging
from divelog.statistic import StatisticsService

console = Console()


def _dive_title(dive: Dive) -> str:
    return f"#{dive.id} {dive.date} {dive.location} ({dive.duration_in_minutes} min, {dive.max_depth_in_meters} m)"


def select_dive(dive_service: DiveService) -> Dive | None:
    """Prompt the user to select a dive from the log."""
    dives = dive_service.list_dives()
    if not dives:
        console.print("[red]No dives found.[/]")
        return None
    return questionary.select(
        "Select a dive:",
        choices=[questionary.Choice(title=_dive_title(d), value=d) for d in dives],
    ).ask()


def list_dives(dive_service: DiveService, dive_date: str = None, location: str = None):
    """Print the logged dives as a table."""
    dives = dive_service.list_dives(
        dive_date=parse_date(dive_date) if dive_date else None,
        location=location,
    )
    if not dives:
        console.print("[dim]No dives found.[/]")
        return

    table = Table(title="Dives")
    for header in ("ID", "Date", "Location", "Minutes", "Max depth (m)", "Conditions", "Safety stop"):
        table.add_column(header)
    for d in dives:
        table.add_row(
            str(d.id),
            d.date.isoformat(),
            d.location,
            str(d.duration_in_minutes),
            f"{d.max_depth_in_meters:g}",
            d.water_conditions,
            "yes" if d.performed_safety_stop else "no",
        )
    console.print(table)


def show_statistics(statistics_service: StatisticsService):
    """Print statistics over all dives."""
    statistic = statistics_service.get_dive_statistic()
    console.print(f"Dives: [bold]{statistic.total_number_of_dives}[/]")
    console.print(f"Time underwater: {statistic.total_time_underwater_in_minutes} min")
    if statistic.total_number_of_dives == 0:
        console.print("[dim]No dives logged yet.[/]")
        return
    console.print(f"Average dive: {statistic.average_time_underwater_in_minutes:.1f} min")
    console.print(f"Deepest: {statistic.max_depth_in_meters:g} m")
    console.print(f"Shallowest: {statistic.min_depth_in_meters:g} m")


def log_dive(dive_service: DiveService):
    """Prompt for a new dive and store it."""
    answers = questionary.form(
        date=questionary.text("Date (YYYY-MM-DD):"),
        location=questionary.text("Location:"),
        durationInMinutes=questionary.text("Duration (minutes):"),
        maxDepthInMeters=questionary.text("Max depth (meters):"),
        waterConditions=questionary.text("Water conditions:"),
        performedSafetyStop=questionary.confirm("Safety stop performed?"),
    ).ask()
    if not answers:
        console.print("[dim]Cancelled.[/]")
        return

    try:
        answers["durationInMinutes"] = int(answers["durationInMinutes"])
        answers["maxDepthInMeters"] = float(answers["maxDepthInMeters"])
    except ValueError:
        raise InvalidDiveError("Duration and depth must be numbers") from None

    dive = dive_service.create_dive(Dive.from_json(answers))
    console.print(f"[green]Logged dive #{dive.id}.[/]")


def delete_dive(dive_service: DiveService):
    """Delete a selected dive after confirmation."""
    dive = select_dive(dive_service)
    if not dive:
        return

    console.print(f"[yellow]Will delete {_dive_title(dive)}.[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    deleted = dive_service.delete_dive(dive.id)
    console.print(f"[green]Deleted dive #{deleted.id}.[/]")


def main(argv: list[str] = None):
    parser = argparse.ArgumentParser(description="Divelog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List logged dives")
    list_parser.add_argument("--date", help="Only dives on this date (YYYY-MM-DD)")
    list_parser.add_argument("--location", help="Only dives at this location")
    subparsers.add_parser("stats", help="Show dive statistics")
    subparsers.add_parser("log", help="Log a new dive")
    subparsers.add_parser("delete", help="Delete a dive")

    args = parser.parse_args(argv)

    setup_logging(config.log_level, config.log_file)
    repository = DiveRepository()
    dive_service = DiveService(repository)

    try:
        if args.command == "list":
            list_dives(dive_service, args.date, args.location)
        elif args.command == "stats":
            show_statistics(StatisticsService(repository))
        elif args.command == "log":
            log_dive(dive_service)
        elif args.command == "delete":
            delete_dive(dive_service)
    except DiveLogError as e:
        console.print(f"[red]{e}[/]")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
