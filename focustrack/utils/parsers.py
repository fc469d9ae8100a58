#!/usr/bin/env python3
"""
parsers.py
--------------------
Parsing utilities for filter patterns, option keys and property values.

Functions:
    compile_patterns: Compile filter pattern strings into unanchored regexes
    any_matches: True when any compiled pattern matches a target string
    strip_tag_prefix: Remove a leading '#' from a tag or tag pattern
    option_key: Normalize camelCase / kebab-case option names to snake_case
    format_property_value: Render a frontmatter value as display text
    extract_tag_value: Pull a value out of tags with a column regex

Usage:
    from focustrack.utils.parsers import compile_patterns, any_matches

    patterns = compile_patterns(["projects/"])
    any_matches(patterns, "projects/alpha.md")  # True
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
import re
from typing import Any, Iterable, List, Pattern, Sequence

# --- Local imports ---
from focustrack.core.constants import LIST_SEPARATOR

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def compile_patterns(patterns: Iterable[str]) -> List[Pattern[str]]:
    """
    Compile filter patterns for unanchored, case-sensitive matching.

    A pattern matches a target when it is found anywhere in it, so plain
    text behaves as a substring test and "" matches everything. Patterns
    that are not valid regular expressions are matched literally.

    Examples:
        >>> [p.pattern for p in compile_patterns(["x", "a(b"])]
        ['x', 'a\\\\(b']
    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error:
            logger.warning("Invalid pattern %r, matching it literally", pattern)
            compiled.append(re.compile(re.escape(pattern)))
    return compiled


def any_matches(patterns: Sequence[Pattern[str]], target: str) -> bool:
    """True when at least one pattern is found in target."""
    return any(rx.search(target) for rx in patterns)


def strip_tag_prefix(tag: str) -> str:
    """
    Remove one leading '#' from a tag.

    Examples:
        >>> strip_tag_prefix("#project")
        'project'
    """
    return tag[1:] if tag.startswith("#") else tag


def option_key(name: str) -> str:
    """
    Normalize a user option name to snake_case.

    Examples:
        >>> option_key("daysInPast")
        'days_in_past'
        >>> option_key("log-property-name")
        'log_property_name'
    """
    snake = _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_")
    return snake.lower()


def format_property_value(value: Any) -> str:
    """
    Render a frontmatter value as display text.

    Examples:
        >>> format_property_value(["a", "b"])
        'a • b'
        >>> format_property_value(None)
        ''
        >>> format_property_value(3)
        '3'
    """
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(format_property_value(item) for item in value)
    if value is None:
        return ""
    if isinstance(value, bool):
        # Match the lowercase spelling used in frontmatter
        return "true" if value else "false"
    return str(value)


def extract_tag_value(tags: Iterable[str], pattern: str) -> str:
    """
    Extract a value from tags with a column regex.

    Returns the first capture group of the first match, else the whole
    match, else "".

    Examples:
        >>> extract_tag_value(["status/active", "area/home"], r"status/(\\w+)")
        'active'
    """
    if not pattern:
        return ""
    try:
        rx = re.compile(pattern)
    except re.error:
        logger.warning("Invalid column pattern %r", pattern)
        return ""

    for tag in tags:
        if not tag:
            continue
        for match in rx.finditer(tag):
            if match.groups() and match.group(1):
                return match.group(1)
            if match.group(0):
                return match.group(0)
    return ""
