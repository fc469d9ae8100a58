#!/usr/bin/env python3
"""
mutation.py
-------------------
Apply one create/update/clear to a date's entry and re-sort the log.

The persisted log is always written in chronological order, whatever
order it was read in.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import replace
from typing import Mapping, Optional, Tuple

# --- Local imports ---
from focustrack.core.exceptions import MutationError
from focustrack.dataclasses.log_entry import LogEntry
from focustrack.engine.normalizer import FocusLog
from focustrack.utils.dates import day_ordinal


def _chronological(key: str) -> Tuple[bool, int]:
    # Malformed keys sort after every valid date
    ordinal = day_ordinal(key)
    return (ordinal is None, ordinal or 0)


def sort_log(log: Mapping[str, LogEntry]) -> FocusLog:
    """Return the log with keys in ascending date order."""
    return {key: log[key] for key in sorted(log, key=_chronological)}


def apply_mutation(
    log: Mapping[str, LogEntry],
    date: str,
    rating_change: Optional[int] = None,
    remarks_change: Optional[str] = None,
) -> FocusLog:
    """
    Update one date's entry and return the re-sorted log.

    Args:
        log: Current focus log (left unmodified)
        date: ``YYYY-MM-DD`` key to change
        rating_change: New scale value, None to keep the current one
        remarks_change: New remarks, None to keep; blank removes remarks

    Returns:
        New FocusLog sorted by date

    Raises:
        MutationError: If no date is given

    Examples:
        >>> apply_mutation({}, "2024-03-05", remarks_change="  ")
        {'2024-03-05': LogEntry(rating=0, remarks=None)}
    """
    if not date or not str(date).strip():
        raise MutationError("Mutation request is missing a date")
    date = str(date).strip()

    entry = log.get(date, LogEntry())
    if rating_change is not None:
        if isinstance(rating_change, bool) or not isinstance(rating_change, int):
            raise MutationError(f"Rating must be an integer, got {rating_change!r}")
        entry = replace(entry, rating=rating_change)
    if remarks_change is not None:
        remarks = remarks_change.strip()
        entry = replace(entry, remarks=remarks or None)

    updated = dict(log)
    updated[date] = entry
    return sort_log(updated)
