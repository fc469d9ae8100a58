#!/usr/bin/env python3
"""
dates.py
-------------------
Calendar helpers shared by the window generator and the mutation engine.

Functions:
    as_date: Truncate a date or datetime to a calendar date
    parse_iso_date: Parse a ``YYYY-MM-DD`` key, returning None when malformed
    to_iso: Format a date as a log key
    day_ordinal: Map a log key to a sortable day number
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date, datetime
from typing import Any, Optional

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def as_date(value: date | datetime) -> date:
    """Return the calendar date of a date or datetime (midnight normalization)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse a log key into a date.

    Examples:
        >>> parse_iso_date("2024-03-05")
        datetime.date(2024, 3, 5)
        >>> parse_iso_date("2024-3-5") is None
        True
    """
    if isinstance(value, (date, datetime)):
        return as_date(value)
    if not isinstance(value, str) or not ISO_DATE_RE.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def to_iso(value: date | datetime) -> str:
    """Format a date as a ``YYYY-MM-DD`` log key."""
    return as_date(value).isoformat()


def day_ordinal(key: str) -> Optional[int]:
    """Proleptic Gregorian ordinal of a log key, None when the key is malformed."""
    parsed = parse_iso_date(key)
    return parsed.toordinal() if parsed is not None else None
