#!/usr/bin/env python3
"""
engine package
--------------
Pure derivations over focus logs and tracked items.

Modules:
    normalizer: Raw frontmatter log -> FocusLog
    filters: Candidate items -> tracked items
    sorting: Tracked items -> display order
    window: Focal date -> annotated date columns
    mutation: One cell change -> re-sorted FocusLog
"""
from .filters import filter_items
from .mutation import apply_mutation, sort_log
from .normalizer import FocusLog, normalize_log
from .sorting import column_value, sort_items
from .window import DayCell, Weekday, generate_window

__all__ = [
    "DayCell",
    "FocusLog",
    "Weekday",
    "apply_mutation",
    "column_value",
    "filter_items",
    "generate_window",
    "normalize_log",
    "sort_items",
    "sort_log",
]
