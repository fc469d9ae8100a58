#!/usr/bin/env python3
"""
constants.py
--------------------
Built-in symbol tables and default values for focus trackers.

Rating tables map positive scale values (1-indexed) to symbols; flag tables
map negative scale values (1-indexed by absolute value) to symbols and a
human-readable key.

Usage:
    from focustrack.core.constants import RATING_MAPS, FLAG_MAPS

    symbols = RATING_MAPS["moonPhases"].symbols
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class RatingMap:
    """Ordered rating symbols with a description per level."""

    symbols: Tuple[str, ...]
    descriptions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FlagMap:
    """Ordered flag symbols with a key string per flag."""

    symbols: Tuple[str, ...]
    keys: Tuple[str, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Tuple[Tuple[str, str], ...]) -> "FlagMap":
        """Build a flag map from (symbol, key) pairs."""
        return cls(
            symbols=tuple(symbol for symbol, _ in pairs),
            keys=tuple(key for _, key in pairs),
        )


def _levels(count: int) -> Tuple[str, ...]:
    return tuple(f"Level {i + 1}" for i in range(count))


RATING_MAPS: Dict[str, RatingMap] = {
    "colors1": RatingMap(
        symbols=("🔴", "🟠", "🟡", "🟢", "🔵", "🟣"),
        descriptions=("Fail", "Fair", "Good", "Very Good", "Excellent", "Superior"),
    ),
    "digitsOpen": RatingMap(
        symbols=("➀", "➁", "➂", "➃", "➄", "➅", "➆", "➇", "➈", "➉"),
        descriptions=_levels(10),
    ),
    "digitsFilled": RatingMap(
        symbols=("➊", "➋", "➌", "➍", "➎", "➏", "➐", "➑", "➒", "➓"),
        descriptions=_levels(10),
    ),
    "moonPhases": RatingMap(
        symbols=("🌑", "🌒", "🌓", "🌔", "🌕"),
        descriptions=("New", "Waxing Crescent", "First Quarter", "Waxing Gibbous", "Full"),
    ),
}

FLAG_MAPS: Dict[str, FlagMap] = {
    "default": FlagMap.from_pairs((
        ("🚀", "Goal: aspirational"),
        ("🎯", "Goal: committed"),
        ("📅", "Due"),
        ("⏳", "Scheduled"),
        ("🏁", "Get started"),
        ("📈", "Make progress"),
        ("🦬", "Yak shaving"),
        ("🍰", "Reward"),
        ("🌀", "Unplanned"),
    )),
}

# ----- Defaults -----
DEFAULT_RATING_MAP = "digitsFilled"
DEFAULT_FLAG_MAP = "default"
DEFAULT_DAYS_PAST = 15
DEFAULT_DAYS_FUTURE = 7
MIN_DAYS_PAST = 1
MIN_DAYS_FUTURE = 1
# Upper bound for either side of the window
MAX_DAYS = 366
DEFAULT_LOG_PROPERTY = "focus-logs"
DEFAULT_TITLE_PROPERTIES = ("track-label", "focus-tracker-title", "title")

# ----- Rendering -----
TRACK_COLUMN = "track"
TRACK_HEADING = "Track"
UNSET_SYMBOL = " "
OUT_OF_BOUNDS = "❗"
REMARKS_SEPARATOR = "───────────"
LIST_SEPARATOR = " • "
PLUGIN_NAME = "Focus Track"
