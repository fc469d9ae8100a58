#!/usr/bin/env python3
"""
tracker.py
-------------------
Assemble a focus tracker grid and write cell changes back.

Rendering pipeline:
    candidates -> filter -> sort -> (per row) read + normalize log
    -> window x entry display -> TrackerGrid

Nothing here draws: a TrackerGrid is plain data consumed by the CLI or
any other front end. Every failure is turned into a one-line notice
on the grid (or on the tracker for writes) and the render carries on
with the next row.

Usage:
    store = VaultStore(vault_dir, logger=logger)
    tracker = FocusTracker(store, configuration, logger=logger)
    grid = tracker.build_grid(today=date.today())
    tracker.update_entry("projects/alpha.md", "2024-01-05", rating=3)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

# --- Local imports ---
from focustrack.core.constants import PLUGIN_NAME, TRACK_COLUMN, TRACK_HEADING
from focustrack.core.exceptions import (
    DocumentNotFoundError,
    MutationError,
    StoreWriteError,
)
from focustrack.core.logging_manager import FocusTrackLogger, safe_logger
from focustrack.dataclasses.configuration import (
    TrackerConfiguration,
    validate_symbol_tables,
)
from focustrack.dataclasses.log_entry import CellDisplay, LogEntry, step_scale, to_display
from focustrack.dataclasses.tracked_item import TrackedItem
from focustrack.engine.filters import filter_items
from focustrack.engine.mutation import apply_mutation
from focustrack.engine.normalizer import FocusLog, normalize_log
from focustrack.engine.sorting import column_value, sort_items
from focustrack.engine.window import DayCell, generate_window


@dataclass(frozen=True)
class GridCell:
    """One date cell of a row."""

    day: DayCell
    entry: LogEntry
    display: CellDisplay

    @property
    def key(self) -> str:
        return self.day.key


@dataclass(frozen=True)
class TrackRow:
    """One tracked item across the window."""

    item: TrackedItem
    prefix_values: Tuple[str, ...]
    cells: Tuple[GridCell, ...]
    postfix_values: Tuple[str, ...]

    @property
    def label(self) -> str:
        return self.item.display_label


@dataclass
class TrackerGrid:
    """
    Everything needed to draw one tracker.

    Attributes:
        configuration: Configuration the grid was derived from
        window: Date columns
        track_heading: Heading of the label column
        rows: Rows in sort order
        notices: One-line messages for the operator
    """

    configuration: TrackerConfiguration
    window: List[DayCell]
    track_heading: str = TRACK_HEADING
    rows: List[TrackRow] = field(default_factory=list)
    notices: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def empty_message(self) -> str:
        paths = ", ".join(self.configuration.paths) or "the vault"
        return f"No tracks found under {paths}"

    @property
    def headings(self) -> List[str]:
        """Column headings: prefix columns, track, dates (day of month), postfix columns."""
        config = self.configuration
        return (
            [heading for heading, _ in config.prefix_columns]
            + [self.track_heading]
            + [str(cell.date.day) for cell in self.window]
            + [heading for heading, _ in config.postfix_columns]
        )

    @property
    def marked_cells(self) -> int:
        return sum(1 for row in self.rows for cell in row.cells if cell.display.has_value)


class FocusTracker:
    """
    Derives grids from a vault and applies cell changes.

    Attributes:
        store: Persistence collaborator (VaultStore or compatible)
        configuration: Current tracker configuration
        notices: Notices raised by writes
    """

    def __init__(
        self,
        store,
        configuration: TrackerConfiguration,
        logger: Optional[FocusTrackLogger] = None,
    ) -> None:
        self.store = store
        self.configuration = configuration
        self.logger = logger
        self.notices: List[str] = []

    def _notify(self, message: str, details: Optional[dict] = None) -> None:
        self.notices.append(f"{PLUGIN_NAME}: {message}")
        safe_logger(self.logger).log_warning(message, details)

    # ----- Reads -----

    def select_items(self) -> List[TrackedItem]:
        """Filter and sort the vault's notes for this configuration."""
        config = self.configuration
        candidates = self.store.list_candidate_items(config.title_property_names)
        matching = filter_items(candidates, config.filter_spec)
        sort_key = config.effective_sort_column
        return sort_items(
            matching,
            key=sort_key,
            descending=config.sort_descending,
            definition=config.column_definition(sort_key),
        )

    def read_log(self, path: str) -> FocusLog:
        """
        Read and normalize one note's focus log.

        A missing note yields an empty log and a notice.
        """
        try:
            header = self.store.read_structured_header(path)
        except DocumentNotFoundError as e:
            self._notify(str(e), {"path": path})
            return {}
        return normalize_log(header.get(self.configuration.log_property_name))

    def build_grid(self, today: date) -> TrackerGrid:
        """
        Derive the full grid for ``today``.

        Args:
            today: Current date, read once by the caller

        Returns:
            TrackerGrid (``is_empty`` when nothing matched)
        """
        config = self.configuration
        self.notices = []
        window = generate_window(
            config.focal_date, config.days_in_past, config.days_in_future, today
        )
        with safe_logger(self.logger).scope("render", focal=config.focal_date, days=len(window)):
            return self._assemble_grid(TrackerGrid(configuration=config, window=window))

    def _assemble_grid(self, grid: TrackerGrid) -> TrackerGrid:
        config = grid.configuration
        window = grid.window

        for warning in validate_symbol_tables(config):
            self._notify(warning)

        items = self.select_items()
        if not items:
            grid.notices = list(self.notices)
            safe_logger(self.logger).log_info(grid.empty_message)
            return grid

        label_properties = {item.label_property for item in items if item.label_property}
        if len(label_properties) == 1:
            grid.track_heading = label_properties.pop()

        for item in items:
            log = self.read_log(item.path)
            grid.rows.append(self._build_row(item, log, window))

        grid.notices = list(self.notices)
        safe_logger(self.logger).log_operation(
            "build_grid",
            {"rows": len(grid.rows), "marked": grid.marked_cells, "notices": len(grid.notices)},
        )
        return grid

    def _build_row(
        self, item: TrackedItem, log: FocusLog, window: List[DayCell]
    ) -> TrackRow:
        config = self.configuration
        cells = []
        for day in window:
            entry = log.get(day.key, LogEntry())
            cells.append(
                GridCell(
                    day=day,
                    entry=entry,
                    display=to_display(
                        entry, config.rating_symbols, config.flag_symbols, config.flag_keys
                    ),
                )
            )
        return TrackRow(
            item=item,
            prefix_values=tuple(
                column_value(item, prop, prop) for _, prop in config.prefix_columns
            ),
            cells=tuple(cells),
            postfix_values=tuple(
                column_value(item, prop, prop) for _, prop in config.postfix_columns
            ),
        )

    # ----- Writes -----

    def update_entry(
        self,
        path: str,
        date_key: str,
        rating: Optional[int] = None,
        remarks: Optional[str] = None,
    ) -> Optional[FocusLog]:
        """
        Change one cell and write the log back.

        Returns:
            The written log, or None when the mutation was aborted
        """
        if not path:
            self._notify("could not save changes: missing track path")
            return None
        log_field = self.configuration.log_property_name
        logger = safe_logger(self.logger)
        with logger.scope("write", path=path, date=date_key):
            try:
                header = self.store.read_structured_header(path)
                log = normalize_log(header.get(log_field))
                updated = apply_mutation(log, date_key, rating, remarks)
                self.store.write_structured_field(
                    path, log_field, {key: entry.to_dict() for key, entry in updated.items()}
                )
            except (DocumentNotFoundError, MutationError, StoreWriteError) as e:
                self._notify(f"could not save changes: {e}", {"path": path, "date": date_key})
                return None
            logger.log_operation(
                "update_entry", {"rating": rating, "remarks": remarks is not None}
            )
        return updated

    def step_entry(
        self, path: str, date_key: str, direction: int = 1, flag: bool = False
    ) -> Optional[FocusLog]:
        """
        Advance a cell through its scale (click behavior).

        With ``flag`` an unset cell enters the flag scale at -1 instead of
        the rating scale.
        """
        if not path:
            self._notify("could not save changes: missing track path")
            return None
        config = self.configuration
        with safe_logger(self.logger).scope("step", path=path, date=date_key, flag=flag):
            try:
                header = self.store.read_structured_header(path)
            except DocumentNotFoundError as e:
                self._notify(f"could not save changes: {e}", {"path": path, "date": date_key})
                return None
            log = normalize_log(header.get(config.log_property_name))
            current = log.get(date_key, LogEntry()).rating
            if flag and current == 0:
                new_rating = -1 if config.flag_symbols else 0
            else:
                new_rating = step_scale(
                    current, direction, len(config.rating_symbols), len(config.flag_symbols)
                )
            return self.update_entry(path, date_key, rating=new_rating)

    def clear_entry(self, path: str, date_key: str) -> Optional[FocusLog]:
        """Reset a cell to unset and drop its remarks."""
        return self.update_entry(path, date_key, rating=0, remarks="")


def sort_column_for_heading(configuration: TrackerConfiguration, heading: str) -> str:
    """
    Map a clicked heading (or a property name) to the sort column it controls.

    Unknown names are taken as property names.
    """
    if heading.lower() in (TRACK_COLUMN, TRACK_HEADING.lower()):
        return TRACK_COLUMN
    for column_heading, prop in configuration.columns:
        if column_heading == heading:
            return prop
    return heading
