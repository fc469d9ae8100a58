#!/usr/bin/env python3
"""
tracked_item.py
-------------------
Tracked items (one grid row each) and the filter criteria that
selects them.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

# --- Local imports ---
from focustrack.utils.parsers import strip_tag_prefix


@dataclass(frozen=True)
class TrackedItem:
    """
    A note whose focus log is displayed as one row.

    Identity is ``path``; ``display_label`` is resolved from the note's
    title properties by the store and is treated as opaque text here.

    Attributes:
        path: Vault-relative path with '/' separators
        display_label: Label shown in the track column
        tags: Tags without leading '#'
        properties: Parsed frontmatter
        label_property: Title property the label came from (None for file stem)
    """

    path: str
    display_label: str = ""
    tags: FrozenSet[str] = frozenset()
    properties: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)
    label_property: Optional[str] = None

    @property
    def stem(self) -> str:
        """File name without directories or the .md suffix."""
        name = self.path.rsplit("/", 1)[-1]
        return name[:-3] if name.endswith(".md") else name


@dataclass(frozen=True)
class FilterSpec:
    """
    Patterns narrowing the candidate items.

    Each pattern list, when empty, imposes no constraint.

    Attributes:
        path_patterns: Path must match at least one
        tag_any_patterns: Some tag must match at least one
        tag_all_patterns: Every pattern must match some tag
        exclude_tag_any_patterns: Dropped if any pattern matches any tag
        exclude_tag_all_patterns: Dropped if every pattern matches some tag
        property_equals: At least one property must equal its expected value
    """

    path_patterns: Tuple[str, ...] = ()
    tag_any_patterns: Tuple[str, ...] = ()
    tag_all_patterns: Tuple[str, ...] = ()
    exclude_tag_any_patterns: Tuple[str, ...] = ()
    exclude_tag_all_patterns: Tuple[str, ...] = ()
    property_equals: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_options(
        cls,
        paths: Iterable[str] = (),
        tags: Iterable[str] = (),
        tag_set: Iterable[str] = (),
        exclude_tags: Iterable[str] = (),
        exclude_tag_set: Iterable[str] = (),
        properties: Optional[Dict[str, Any]] = None,
    ) -> FilterSpec:
        """Build filter criteria from user options, dropping leading '#' from tag patterns."""
        return cls(
            path_patterns=tuple(paths),
            tag_any_patterns=tuple(strip_tag_prefix(t) for t in tags),
            tag_all_patterns=tuple(strip_tag_prefix(t) for t in tag_set),
            exclude_tag_any_patterns=tuple(strip_tag_prefix(t) for t in exclude_tags),
            exclude_tag_all_patterns=tuple(strip_tag_prefix(t) for t in exclude_tag_set),
            property_equals=dict(properties or {}),
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.path_patterns
            or self.tag_any_patterns
            or self.tag_all_patterns
            or self.exclude_tag_any_patterns
            or self.exclude_tag_all_patterns
            or self.property_equals
        )
