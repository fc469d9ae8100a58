#!/usr/bin/env python3
"""
log_entry.py
-------------------
Canonical focus-log entry and its codecs.

A focus log stores one value per calendar date. Over time that value has
been written as a bare number, a bare string, or a ``{rating, remarks}``
mapping; every shape must stay readable. This module upgrades all of them
to a single ``LogEntry`` at the read boundary, and maps an entry to the
symbol and tooltip shown in a grid cell.

Scale values share one signed axis:
- ``0``: unset
- ``n > 0``: rating level ``n`` (1-indexed into the rating symbols)
- ``n < 0``: flag level ``|n|`` (1-indexed into the flag symbols)

``ScaleValue`` splits the sign into an explicit kind before any logic
looks at it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

# --- Local imports ---
from focustrack.core.constants import OUT_OF_BOUNDS, REMARKS_SEPARATOR, UNSET_SYMBOL
from focustrack.core.validators import DataValidator

logger = logging.getLogger(__name__)


# ----- Scale values -----


class ScaleKind(str, Enum):
    """Which symbol table a scale value indexes."""

    UNSET = "unset"
    RATING = "rating"
    FLAG = "flag"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available kinds."""
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class ScaleValue:
    """
    Tagged form of a signed scale integer.

    Attributes:
        kind: UNSET, RATING or FLAG
        level: 1-based level within the kind's table (0 for UNSET)
    """

    kind: ScaleKind
    level: int = 0

    @classmethod
    def from_int(cls, value: int) -> ScaleValue:
        """
        Split a stored scale integer by sign.

        Examples:
            >>> ScaleValue.from_int(-2)
            ScaleValue(kind=<ScaleKind.FLAG: 'flag'>, level=2)
        """
        if value > 0:
            return cls(ScaleKind.RATING, value)
        if value < 0:
            return cls(ScaleKind.FLAG, -value)
        return cls(ScaleKind.UNSET, 0)

    def to_int(self) -> int:
        """Encode back to the stored signed integer."""
        if self.kind is ScaleKind.RATING:
            return self.level
        if self.kind is ScaleKind.FLAG:
            return -self.level
        return 0

    @property
    def is_set(self) -> bool:
        return self.kind is not ScaleKind.UNSET

    @property
    def index(self) -> int:
        """0-based position in the kind's symbol table."""
        return self.level - 1


# ----- Entries -----


@dataclass(frozen=True)
class LogEntry:
    """
    One date's value in a focus log.

    Attributes:
        rating: Signed scale value (0 = unset)
        remarks: Free-text note, None when absent (never "")
    """

    rating: int = 0
    remarks: Optional[str] = None

    @property
    def scale(self) -> ScaleValue:
        return ScaleValue.from_int(self.rating)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for persistence; absent remarks are omitted.

        Examples:
            >>> LogEntry(3).to_dict()
            {'rating': 3}
        """
        data: Dict[str, Any] = {"rating": self.rating}
        if self.remarks is not None:
            data["remarks"] = self.remarks
        return data


@dataclass(frozen=True)
class CellDisplay:
    """
    What a grid cell shows for an entry.

    Attributes:
        has_value: True for ratings and flags
        symbol: Glyph to render
        tooltip: Hover text
    """

    has_value: bool
    symbol: str
    tooltip: str


def _to_rating(value: Any) -> int:
    """Coerce a loosely-typed rating to an int, 0 when unusable."""
    number = DataValidator.coerce_number(value)
    if number is None:
        if value not in (None, ""):
            logger.debug("Unusable rating %r, treating as unset", value)
        return 0
    return int(math.trunc(number))


def _to_remarks(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text else None


def decode_entry(raw: Any) -> LogEntry:
    """
    Upgrade any stored log value to a LogEntry.

    Accepted shapes:
    - ``None`` or ``""``: unset
    - number: rating only
    - numeric-looking string: rating only
    - other string: rating 0 with the string as remarks
    - mapping: ``rating`` (default 0) and optional ``remarks``

    Values that fit none of these decode to an unset entry rather than
    raising.

    Examples:
        >>> decode_entry(3)
        LogEntry(rating=3, remarks=None)
        >>> decode_entry("2")
        LogEntry(rating=2, remarks=None)
        >>> decode_entry("skipped")
        LogEntry(rating=0, remarks='skipped')
        >>> decode_entry({"rating": -1, "remarks": "blocked"})
        LogEntry(rating=-1, remarks='blocked')
    """
    if raw is None:
        return LogEntry()

    if isinstance(raw, Mapping):
        return LogEntry(
            rating=_to_rating(raw.get("rating", 0)),
            remarks=_to_remarks(raw.get("remarks")),
        )

    if isinstance(raw, bool):
        logger.debug("Boolean log value %r, treating as unset", raw)
        return LogEntry()

    if isinstance(raw, (int, float)):
        return LogEntry(rating=_to_rating(raw))

    if isinstance(raw, str):
        if not raw.strip():
            return LogEntry()
        if DataValidator.coerce_number(raw) is not None:
            return LogEntry(rating=_to_rating(raw))
        return LogEntry(rating=0, remarks=raw)

    logger.debug("Unsupported log value type %s, treating as unset", type(raw).__name__)
    return LogEntry()


def _symbol_at(symbols: Sequence[str], index: int) -> str:
    if 0 <= index < len(symbols):
        return symbols[index]
    return OUT_OF_BOUNDS


def to_display(
    entry: LogEntry,
    rating_symbols: Sequence[str],
    flag_symbols: Sequence[str],
    flag_keys: Sequence[str] = (),
) -> CellDisplay:
    """
    Map an entry to the symbol and tooltip of its grid cell.

    Levels past the end of a table render as ``OUT_OF_BOUNDS`` instead of
    raising.

    Args:
        entry: Canonical log entry
        rating_symbols: Symbols for rating levels 1..n
        flag_symbols: Symbols for flag levels 1..n
        flag_keys: Human-readable key per flag

    Returns:
        CellDisplay for the entry

    Examples:
        >>> to_display(LogEntry(3), ["a", "b", "c"], [])
        CellDisplay(has_value=True, symbol='c', tooltip='Rating: 3')
        >>> to_display(LogEntry(-2), [], ["x", "y"], ["k1", "k2"])
        CellDisplay(has_value=True, symbol='y', tooltip='Flag 2: k2')
    """
    scale = entry.scale

    if scale.kind is ScaleKind.RATING:
        symbol = _symbol_at(rating_symbols, scale.index)
        tooltip = f"Rating: {scale.level}"
    elif scale.kind is ScaleKind.FLAG:
        symbol = _symbol_at(flag_symbols, scale.index)
        tooltip = f"Flag {scale.level}"
        if 0 <= scale.index < len(flag_keys) and flag_keys[scale.index]:
            tooltip = f"{tooltip}: {flag_keys[scale.index]}"
    else:
        return CellDisplay(
            has_value=False,
            symbol=UNSET_SYMBOL,
            tooltip=entry.remarks or "",
        )

    if entry.remarks:
        tooltip = f"{tooltip}\n{REMARKS_SEPARATOR}\n{entry.remarks}"
    return CellDisplay(has_value=True, symbol=symbol, tooltip=tooltip)


def step_scale(current: int, direction: int, rating_count: int, flag_count: int) -> int:
    """
    Advance a scale value one level, clearing it past the end of its table.

    From 0 the result is always 1 (entering the rating scale). From a
    rating or flag the magnitude grows by one; once it exceeds the size
    of that table the value wraps to 0.

    Args:
        current: Stored scale value
        direction: +1 or -1
        rating_count: Number of rating symbols
        flag_count: Number of flag symbols

    Returns:
        Next scale value, always within the legal range

    Raises:
        ValueError: If direction is not +1 or -1

    Examples:
        >>> step_scale(0, -1, 5, 9)
        1
        >>> step_scale(5, 1, 5, 9)
        0
        >>> step_scale(-2, 1, 5, 9)
        -3
    """
    if direction not in (1, -1):
        raise ValueError(f"direction must be +1 or -1, got {direction}")

    scale = ScaleValue.from_int(current)
    if not scale.is_set:
        return 1

    magnitude = scale.level + 1
    limit = flag_count if scale.kind is ScaleKind.FLAG else rating_count
    if magnitude > limit:
        return 0
    return ScaleValue(scale.kind, magnitude).to_int()
