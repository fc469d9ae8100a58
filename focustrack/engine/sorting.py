#!/usr/bin/env python3
"""
sorting.py
-------------------
Order tracked items by their label or by a property.

Comparison is case-insensitive and locale-aware: base letters decide
first (accents folded away), then the accented form, both through the
process collation locale. The sort is stable and ``descending`` reverses
comparator results, not input order, so items with equal keys keep their
relative order in both directions.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import locale
import unicodedata
from typing import List, Optional, Sequence, Tuple

# --- Local imports ---
from focustrack.core.constants import TRACK_COLUMN
from focustrack.dataclasses.tracked_item import TrackedItem
from focustrack.utils.parsers import extract_tag_value, format_property_value


def column_value(item: TrackedItem, key: str, definition: Optional[str] = None) -> str:
    """
    Display text of an item for a sort key or column.

    Args:
        item: Tracked item
        key: "track" for the label, otherwise a property name
        definition: Column definition; one starting with '#' is a tag regex

    Returns:
        Display string ("" when the property is absent)

    Examples:
        >>> item = TrackedItem("a.md", "Alpha", properties={"area": ["home", "work"]})
        >>> column_value(item, "area")
        'home • work'
    """
    if definition and definition.startswith("#"):
        return extract_tag_value(sorted(item.tags), definition[1:])
    if key == TRACK_COLUMN:
        return item.display_label
    return format_property_value(item.properties.get(key))


def _strip_accents(text: str) -> str:
    # NFD decomposition + remove combining marks
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def _collation_key(text: str) -> Tuple[str, str]:
    folded = text.casefold()
    return locale.strxfrm(_strip_accents(folded)), locale.strxfrm(folded)


def sort_items(
    items: Sequence[TrackedItem],
    key: str = TRACK_COLUMN,
    descending: bool = False,
    definition: Optional[str] = None,
) -> List[TrackedItem]:
    """
    Sort items by label or property value.

    Args:
        items: Items to sort
        key: "track" or a property name
        descending: Reverse the comparison
        definition: Optional column definition for ``key`` (tag regex columns)

    Returns:
        New sorted list

    Examples:
        >>> items = [TrackedItem("b.md", "beta"), TrackedItem("a.md", "Alpha")]
        >>> [i.display_label for i in sort_items(items)]
        ['Alpha', 'beta']
    """
    return sorted(
        items,
        key=lambda item: _collation_key(column_value(item, key, definition)),
        reverse=descending,
    )
