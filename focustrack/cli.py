#!/usr/bin/env python3
"""
cli.py
-------------------
Command-line interface for focus tracker grids.

Commands:
    show    Render a tracker grid as a text table
    set     Set the rating/flag and/or remarks of one cell
    step    Advance one cell through its scale
    clear   Reset one cell
    maps    List the built-in symbol tables

Usage:
    focustrack --vault ~/notes show --config projects.yaml
    focustrack --vault ~/notes set projects/alpha.md 2024-01-05 --rating 3
    focustrack --vault ~/notes step projects/alpha.md 2024-01-05 --flag
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import locale
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple

# --- Third party imports ---
import click

# --- Local imports ---
from focustrack.core import constants
from focustrack.core.cli import MutationStats, TrackerStats
from focustrack.core.cli_decorators import focustrack_cli_group
from focustrack.core.logging_manager import handle_cli_error
from focustrack.core.paths import SETTINGS_FILE
from focustrack.dataclasses.configuration import (
    TrackerConfiguration,
    TrackerSettings,
    load_configuration,
)
from focustrack.store.vault import VaultStore
from focustrack.tracker import FocusTracker, TrackerGrid, sort_column_for_heading

ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _load_tracker(
    ctx: click.Context,
    config_file: Optional[str],
    options: Optional[str],
    today: date,
) -> Tuple[FocusTracker, List[str]]:
    """Build store, configuration and tracker from the command context."""
    logger = ctx.obj["logger"]
    vault = ctx.obj["vault"]
    settings = TrackerSettings.from_file(vault / SETTINGS_FILE.name, logger)

    text = options or ""
    if config_file:
        text = Path(config_file).read_text(encoding="utf-8")

    configuration, notices = load_configuration(text, today, settings, logger)
    store = VaultStore(vault, logger=logger)
    return FocusTracker(store, configuration, logger=logger), notices


def _echo_notices(notices: List[str]) -> None:
    for notice in notices:
        click.echo(f"⚠️  {notice}", err=True)


def render_table(grid: TrackerGrid) -> str:
    """Render a grid as aligned text."""
    if grid.is_empty:
        return grid.empty_message

    config = grid.configuration
    # Weekday row above the headings, blank over non-date columns
    header_rows = [
        [""] * (len(config.prefix_columns) + 1)
        + [cell.weekday.short for cell in grid.window]
        + [""] * len(config.postfix_columns),
        grid.headings,
    ]
    body_rows = []
    for row in grid.rows:
        body_rows.append(
            list(row.prefix_values)
            + [row.label]
            + [cell.display.symbol for cell in row.cells]
            + list(row.postfix_values)
        )

    # Mark the focal and today columns in the day-of-month row
    offset = len(config.prefix_columns) + 1
    for index, cell in enumerate(grid.window):
        marker = "*" if cell.is_today else ("^" if cell.is_focal else "")
        header_rows[1][offset + index] += marker

    all_rows = header_rows + body_rows
    widths = [max(len(str(r[i])) for r in all_rows) for i in range(len(all_rows[0]))]
    lines = [
        " ".join(str(value).ljust(widths[i]) for i, value in enumerate(r)).rstrip()
        for r in all_rows
    ]
    return "\n".join(lines)


@focustrack_cli_group("cli")
def cli(ctx: click.Context) -> None:
    """focustrack - Focus log grids for markdown notes."""
    # Row sorting collates with the user's locale
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        ctx.obj["logger"].log_debug("Collation locale unavailable", {"error": str(e)})


@cli.command()
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML/JSON file with tracker options")
@click.option("-o", "--options", help="Inline YAML/JSON tracker options")
@click.option("--focal-date", type=ISO_DATE, help="Center the window on this date")
@click.option("--today", type=ISO_DATE, help="Override the current date")
@click.option("--days-past", type=int, help="Days before the focal date")
@click.option("--days-future", type=int, help="Days after the focal date")
@click.option("--sort", "sort_by", help="Column heading or property to sort by")
@click.option("--descending/--ascending", default=None, help="Sort direction")
@click.pass_context
def show(
    ctx: click.Context,
    config_file: Optional[str],
    options: Optional[str],
    focal_date: Optional[datetime],
    today: Optional[datetime],
    days_past: Optional[int],
    days_future: Optional[int],
    sort_by: Optional[str],
    descending: Optional[bool],
) -> None:
    """Render a tracker grid."""
    stats = TrackerStats()
    current = _as_date(today) or date.today()
    try:
        tracker, notices = _load_tracker(ctx, config_file, options, current)
        configuration: TrackerConfiguration = tracker.configuration
        if focal_date is not None:
            configuration = configuration.with_focal_date(focal_date.date())
        if days_past is not None or days_future is not None:
            configuration = configuration.with_days(past=days_past, future=days_future)
        if sort_by:
            configuration = replace(
                configuration,
                sort_column=sort_column_for_heading(configuration, sort_by),
                sort_descending=False,
            )
        if descending is not None:
            configuration = replace(configuration, sort_descending=descending)
        tracker.configuration = configuration

        grid = tracker.build_grid(current)
    except Exception as e:
        handle_cli_error(ctx, e, "show", {"vault": str(ctx.obj["vault"])})
        return

    notices = notices + grid.notices
    stats.items_rendered = len(grid.rows)
    stats.cells_with_value = grid.marked_cells
    stats.notices = len(notices)

    _echo_notices(notices)
    click.echo(render_table(grid))
    ctx.obj["logger"].log_operation("show", stats.to_dict())
    if ctx.obj.get("verbose"):
        click.echo(stats.summary(), err=True)


def _finish_mutation(
    ctx: click.Context, tracker: FocusTracker, notices: List[str], result, path: str, day: str
) -> None:
    stats = MutationStats()
    _echo_notices(notices + tracker.notices)
    if result is None:
        stats.entries_rejected += 1
    else:
        stats.entries_written += 1
    ctx.obj["logger"].log_operation(
        ctx.info_name, {"path": path, "date": day, **stats.to_dict()}
    )
    if result is None:
        ctx.exit(1)
    entry = result[day]
    message = f"✅ {path} {day}: rating {entry.rating}"
    if entry.remarks:
        message += f" ({entry.remarks})"
    click.echo(message)
    if ctx.obj.get("verbose"):
        click.echo(stats.summary(), err=True)


@cli.command(name="set")
@click.argument("path")
@click.argument("day", type=ISO_DATE)
@click.option("-r", "--rating", type=int, help="Scale value (negative for flags, 0 to unset)")
@click.option("-m", "--remarks", help="Remarks text (blank removes them)")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def set_entry(
    ctx: click.Context,
    path: str,
    day: datetime,
    rating: Optional[int],
    remarks: Optional[str],
    config_file: Optional[str],
) -> None:
    """Set the rating/flag and/or remarks of one cell."""
    key = day.date().isoformat()
    tracker, notices = _load_tracker(ctx, config_file, None, date.today())
    result = tracker.update_entry(path, key, rating=rating, remarks=remarks)
    _finish_mutation(ctx, tracker, notices, result, path, key)


@cli.command()
@click.argument("path")
@click.argument("day", type=ISO_DATE)
@click.option("--direction", type=click.Choice(["up", "down"]), default="up", show_default=True)
@click.option("--flag", is_flag=True, help="Enter the flag scale from an unset cell")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def step(
    ctx: click.Context,
    path: str,
    day: datetime,
    direction: str,
    flag: bool,
    config_file: Optional[str],
) -> None:
    """Advance one cell through its scale; past the last level it clears."""
    key = day.date().isoformat()
    tracker, notices = _load_tracker(ctx, config_file, None, date.today())
    result = tracker.step_entry(path, key, 1 if direction == "up" else -1, flag=flag)
    _finish_mutation(ctx, tracker, notices, result, path, key)


@cli.command()
@click.argument("path")
@click.argument("day", type=ISO_DATE)
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def clear(ctx: click.Context, path: str, day: datetime, config_file: Optional[str]) -> None:
    """Reset one cell to unset and drop its remarks."""
    key = day.date().isoformat()
    tracker, notices = _load_tracker(ctx, config_file, None, date.today())
    result = tracker.clear_entry(path, key)
    _finish_mutation(ctx, tracker, notices, result, path, key)


@cli.command()
def maps() -> None:
    """List the built-in symbol tables."""
    click.echo("Rating maps:")
    for name, rating_map in constants.RATING_MAPS.items():
        default = " (default)" if name == constants.DEFAULT_RATING_MAP else ""
        levels = ", ".join(
            f"{symbol} {description}"
            for symbol, description in zip(rating_map.symbols, rating_map.descriptions)
        )
        click.echo(f"  {name}{default}: {levels}")
    click.echo("Flag maps:")
    for name, flag_map in constants.FLAG_MAPS.items():
        click.echo(f"  {name}:")
        for level, (symbol, key) in enumerate(zip(flag_map.symbols, flag_map.keys), 1):
            click.echo(f"    -{level} {symbol} {key}")


if __name__ == "__main__":
    cli()
