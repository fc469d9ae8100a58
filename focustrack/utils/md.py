#!/usr/bin/env python3
"""
md.py
-------------------
Markdown-specific utilities for the Focus Track project.

Provides functions for parsing and rewriting Markdown notes with YAML
frontmatter:
- Frontmatter extraction and splitting
- Frontmatter parsing into a mapping
- Rebuilding a note with updated frontmatter
- Inline tag extraction from the note body

Intended for use by the vault store.
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Any, Dict, List

# --- Third party imports ---
import yaml

# --- Local imports ---
from focustrack.core.exceptions import HeaderParseError

# "#tag" preceded by start of line or whitespace; headings ("# Title") never match
INLINE_TAG_RE = re.compile(r"(?:(?<=\s)|^)#([^\s#!@$%^&*(),.?\":{}|<>;`'\[\]]+)", re.MULTILINE)


# ----- YAML Frontmatter Parsing -----
def split_frontmatter(content: str) -> tuple[str, List[str]]:
    """
    Split markdown content into YAML frontmatter and body.

    Expected format:
        ---
        yaml: content
        ---

        Body content here...

    Args:
        content: Full markdown file content

    Returns:
        Tuple of (frontmatter_text, body_lines)
        - frontmatter_text: YAML content as string (empty if no frontmatter)
        - body_lines: List of body content lines

    Examples:
        >>> content = "---\\ntitle: Alpha\\n---\\n\\nBody text"
        >>> fm, body = split_frontmatter(content)
        >>> fm
        'title: Alpha'
        >>> body
        ['Body text']
    """
    lines = content.splitlines()

    if not lines or lines[0].strip() != "---":
        return "", lines

    frontmatter_end = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            frontmatter_end = i
            break

    if frontmatter_end is None:
        return "", lines

    frontmatter_lines = lines[1:frontmatter_end]
    body_lines = lines[frontmatter_end + 1 :]

    while body_lines and body_lines[0].strip() == "":
        body_lines.pop(0)

    return "\n".join(frontmatter_lines), body_lines


def parse_frontmatter(content: str) -> Dict[str, Any]:
    """
    Parse the frontmatter of a note into a mapping.

    Args:
        content: Full markdown file content

    Returns:
        Parsed frontmatter (empty dict when the note has none)

    Raises:
        HeaderParseError: If the YAML is invalid or not a mapping
    """
    frontmatter_text, _ = split_frontmatter(content)
    if not frontmatter_text.strip():
        return {}

    try:
        data = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        raise HeaderParseError(f"Cannot parse YAML frontmatter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise HeaderParseError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data


def dump_frontmatter(data: Dict[str, Any]) -> str:
    """
    Serialize a frontmatter mapping, keeping key order and unicode symbols.

    Examples:
        >>> dump_frontmatter({"title": "Alpha"})
        'title: Alpha\\n'
    """
    return yaml.safe_dump(
        data, default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def _split_raw(content: str) -> tuple[bool, str]:
    """(has frontmatter, text after the closing delimiter exactly as written)."""
    lines = content.splitlines(keepends=True)
    if lines and lines[0].strip() == "---":
        for i, line in enumerate(lines[1:], 1):
            if line.strip() == "---":
                return True, "".join(lines[i + 1 :])
    return False, content


def replace_frontmatter(content: str, data: Dict[str, Any]) -> str:
    """
    Rebuild a note with new frontmatter, keeping its body byte for byte.

    A note without frontmatter gets one blank line between the new
    frontmatter and its text.

    Args:
        content: Current markdown file content
        data: Complete frontmatter mapping to write

    Returns:
        New file content

    Examples:
        >>> replace_frontmatter("---\\na: 1\\n---\\n\\n\\nBody", {"a": 2})
        '---\\na: 2\\n---\\n\\n\\nBody'
    """
    had_frontmatter, body = _split_raw(content)
    if not had_frontmatter and body:
        body = "\n" + body
    return "---\n" + dump_frontmatter(data) + "---\n" + body


# ----- Tags -----
def extract_inline_tags(body_lines: List[str]) -> List[str]:
    """
    Extract inline ``#tags`` from a note body.

    Lines inside fenced code blocks are ignored.

    Examples:
        >>> extract_inline_tags(["Working on #project/alpha today"])
        ['project/alpha']
        >>> extract_inline_tags(["# Heading"])
        []
    """
    tags: List[str] = []
    in_fence = False
    for line in body_lines:
        if line.lstrip().startswith("```"):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        tags.extend(INLINE_TAG_RE.findall(line))
    return tags
