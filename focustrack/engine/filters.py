#!/usr/bin/env python3
"""
filters.py
-------------------
Narrow the candidate notes down to the tracked items of one grid.

Clauses are AND'd and evaluated in a fixed order, stopping at the first
one that fails:

1. path matches any path pattern
2. some tag matches any tag-any pattern
3. every tag-all pattern matches some tag
4. no exclude-any pattern matches any tag
5. not every exclude-all pattern matches some tag
6. at least one required property is present with an equal value

Empty pattern lists are skipped. Property equality is OR'd across the
required properties.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, List, Mapping, Pattern, Sequence

# --- Local imports ---
from focustrack.dataclasses.tracked_item import FilterSpec, TrackedItem
from focustrack.utils.parsers import any_matches, compile_patterns


@dataclass(frozen=True)
class _CompiledFilter:
    paths: List[Pattern[str]]
    tag_any: List[Pattern[str]]
    tag_all: List[Pattern[str]]
    exclude_any: List[Pattern[str]]
    exclude_all: List[Pattern[str]]
    properties: Mapping[str, Any]

    @classmethod
    def from_spec(cls, spec: FilterSpec) -> _CompiledFilter:
        return cls(
            paths=compile_patterns(spec.path_patterns),
            tag_any=compile_patterns(spec.tag_any_patterns),
            tag_all=compile_patterns(spec.tag_all_patterns),
            exclude_any=compile_patterns(spec.exclude_tag_any_patterns),
            exclude_all=compile_patterns(spec.exclude_tag_all_patterns),
            properties=spec.property_equals,
        )


def _strictly_equal(actual: Any, expected: Any) -> bool:
    # True == 1 in Python; frontmatter booleans only equal booleans
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _some_tag_matches(rx: Pattern[str], tags: Sequence[str]) -> bool:
    return any(rx.search(tag) for tag in tags)


def item_matches(item: TrackedItem, compiled: _CompiledFilter) -> bool:
    """True when the item passes every clause of the filter."""
    tags = sorted(item.tags)

    if compiled.paths and not any_matches(compiled.paths, item.path):
        return False

    if compiled.tag_any and not any(_some_tag_matches(rx, tags) for rx in compiled.tag_any):
        return False

    if compiled.tag_all and not all(_some_tag_matches(rx, tags) for rx in compiled.tag_all):
        return False

    if compiled.exclude_any and any(_some_tag_matches(rx, tags) for rx in compiled.exclude_any):
        return False

    if compiled.exclude_all and all(_some_tag_matches(rx, tags) for rx in compiled.exclude_all):
        return False

    if compiled.properties:
        if not any(
            key in item.properties and _strictly_equal(item.properties[key], expected)
            for key, expected in compiled.properties.items()
        ):
            return False

    return True


def filter_items(items: Sequence[TrackedItem], spec: FilterSpec) -> List[TrackedItem]:
    """
    Return the items matching the filter criteria, in input order.

    Args:
        items: Candidate items
        spec: Filter criteria

    Returns:
        Matching items

    Examples:
        >>> a = TrackedItem("a/b.md", tags=frozenset({"x"}))
        >>> c = TrackedItem("c/d.md", tags=frozenset({"y"}))
        >>> [i.path for i in filter_items([a, c], FilterSpec(tag_any_patterns=("x",)))]
        ['a/b.md']
    """
    compiled = _CompiledFilter.from_spec(spec)
    return [item for item in items if item_matches(item, compiled)]
