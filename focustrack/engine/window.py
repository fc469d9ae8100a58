#!/usr/bin/env python3
"""
window.py
-------------------
Derive the run of dates shown as grid columns.

The window holds ``days_in_past + days_in_future + 1`` consecutive days
with the focal date at index ``days_in_past``. Each day is annotated
relative to "today", which the caller passes in once per render so a
render never straddles midnight.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import List, Optional

# --- Local imports ---
from focustrack.utils.dates import as_date, to_iso


class Weekday(IntEnum):
    """Day of week, Sunday first."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: date) -> Weekday:
        # date.weekday() is Monday=0
        return cls((day.weekday() + 1) % 7)

    @property
    def label(self) -> str:
        """Lowercase name, e.g. 'monday'."""
        return self.name.lower()

    @property
    def short(self) -> str:
        return self.name[:2].title()


@dataclass(frozen=True)
class DayCell:
    """
    One column of the window.

    Attributes:
        date: Calendar date
        is_today: Date equals today
        is_focal: Date equals the focal date
        is_past: Date is before today
        is_future: Date is after today
        weekday: Day of week
    """

    date: date
    is_today: bool
    is_focal: bool
    is_past: bool
    is_future: bool
    weekday: Weekday

    @property
    def key(self) -> str:
        """Focus log key for this day."""
        return to_iso(self.date)


def generate_window(
    focal_date: date | datetime,
    days_in_past: int,
    days_in_future: int,
    today: date | datetime,
) -> List[DayCell]:
    """
    Build the annotated date window.

    Args:
        focal_date: Date the window is centered on
        days_in_past: Days before the focal date (>= 0)
        days_in_future: Days after the focal date (>= 0)
        today: Current date, for the past/today/future annotation

    Returns:
        Consecutive DayCells, oldest first; cut short at date.min and
        date.max

    Raises:
        ValueError: If a day count is negative

    Examples:
        >>> cells = generate_window(date(2024, 1, 10), 2, 1, date(2024, 1, 9))
        >>> [c.key for c in cells]
        ['2024-01-08', '2024-01-09', '2024-01-10', '2024-01-11']
        >>> [c.is_today for c in cells]
        [False, True, False, False]
    """
    if days_in_past < 0 or days_in_future < 0:
        raise ValueError(
            f"Day counts must be non-negative, got past={days_in_past} future={days_in_future}"
        )

    focal = as_date(focal_date)
    current = as_date(today)
    past = min(days_in_past, (focal - date.min).days)
    future = min(days_in_future, (date.max - focal).days)
    start = focal - timedelta(days=past)

    cells = []
    for offset in range(past + future + 1):
        day = start + timedelta(days=offset)
        cells.append(
            DayCell(
                date=day,
                is_today=day == current,
                is_focal=day == focal,
                is_past=day < current,
                is_future=day > current,
                weekday=Weekday.of(day),
            )
        )
    return cells


def focal_index(window: List[DayCell]) -> Optional[int]:
    """Position of the focal date in a window."""
    for index, cell in enumerate(window):
        if cell.is_focal:
            return index
    return None
