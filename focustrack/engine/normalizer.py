#!/usr/bin/env python3
"""
normalizer.py
-------------------
Turn a raw ``date -> value`` mapping read from a note into a FocusLog.

Keys are kept verbatim; date objects produced by the YAML loader for
unquoted keys are rendered back to ISO strings. No key validation is
done here: a malformed key is never looked up by the window and stays
invisible.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from datetime import date
from typing import Any, Dict, Mapping

# --- Local imports ---
from focustrack.dataclasses.log_entry import LogEntry, decode_entry

logger = logging.getLogger(__name__)

FocusLog = Dict[str, LogEntry]


def _log_key(key: Any) -> str:
    if isinstance(key, date):
        return key.isoformat()
    return str(key)


def normalize_log(raw_log: Any) -> FocusLog:
    """
    Decode every value of a raw focus log.

    Args:
        raw_log: Mapping of date key to stored value (None is an empty log)

    Returns:
        FocusLog with the input's key order

    Examples:
        >>> normalize_log({"2024-01-01": 3, "2024-01-02": "late"})
        {'2024-01-01': LogEntry(rating=3, remarks=None), '2024-01-02': LogEntry(rating=0, remarks='late')}
    """
    if raw_log is None:
        return {}
    if not isinstance(raw_log, Mapping):
        logger.warning("Focus log is a %s, not a mapping; ignoring it", type(raw_log).__name__)
        return {}

    return {_log_key(key): decode_entry(value) for key, value in raw_log.items()}
