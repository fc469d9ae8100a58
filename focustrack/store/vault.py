#!/usr/bin/env python3
"""
vault.py
-------------------
Markdown vault persistence for focus logs.

A vault is a directory of ``.md`` notes. Each note's YAML frontmatter
holds its properties, its tags and its focus log::

    ---
    title: Write chapter 3
    tags: [writing, book]
    focus-logs:
      '2024-01-01': {rating: 3}
      '2024-01-02': {rating: -2, remarks: waiting on review}
    ---

The store reads headers fresh on every call and never caches.
Writes replace the note atomically (temporary file + rename), keeping
the body untouched.

Usage:
    store = VaultStore(Path("~/notes").expanduser())
    items = store.list_candidate_items(("title",))
    header = store.read_structured_header(items[0].path)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

# --- Local imports ---
from focustrack.core.exceptions import (
    DocumentNotFoundError,
    DocumentReadError,
    HeaderParseError,
    StoreWriteError,
)
from focustrack.core.logging_manager import FocusTrackLogger, safe_logger
from focustrack.dataclasses.tracked_item import TrackedItem
from focustrack.utils import md
from focustrack.utils.parsers import strip_tag_prefix

_TAG_SPLIT = re.compile(r"[,\s]+")


def resolve_display_label(
    path: str, header: Mapping[str, Any], title_property_names: Sequence[str]
) -> Tuple[str, Optional[str]]:
    """
    Pick the row label for a note.

    The first title property with a truthy value wins; otherwise the file
    name without extension is used.

    Returns:
        Tuple of (label, property name or None)

    Examples:
        >>> resolve_display_label("a/b.md", {"title": "Bee"}, ["track-label", "title"])
        ('Bee', 'title')
        >>> resolve_display_label("a/b.md", {}, ["title"])
        ('b', None)
    """
    for name in title_property_names:
        value = header.get(name)
        if value:
            return str(value), name
    stem = path.rsplit("/", 1)[-1]
    return (stem[:-3] if stem.endswith(".md") else stem), None


def collect_tags(header: Mapping[str, Any], body_lines: List[str]) -> frozenset:
    """
    Gather frontmatter and inline tags, without leading '#'.

    Frontmatter ``tags`` may be a list or a comma/space separated string.
    """
    tags = set()
    fm_tags = header.get("tags")
    if isinstance(fm_tags, (list, tuple)):
        tags.update(strip_tag_prefix(t) if isinstance(t, str) else "" for t in fm_tags)
    elif isinstance(fm_tags, str):
        tags.update(strip_tag_prefix(t) for t in _TAG_SPLIT.split(fm_tags))
    tags.update(md.extract_inline_tags(body_lines))
    tags.discard("")
    return frozenset(tags)


class VaultStore:
    """
    Persistence collaborator over a directory of markdown notes.

    Attributes:
        root: Vault directory
        logger: Optional FocusTrackLogger
    """

    def __init__(self, root: Path, logger: Optional[FocusTrackLogger] = None) -> None:
        self.root = Path(root)
        self.logger = logger

    # ----- Paths -----

    def _resolve(self, path: str) -> Path:
        """Absolute file for a vault-relative path, refusing paths outside the vault."""
        if not path:
            raise DocumentNotFoundError(str(path))
        candidate = (self.root / path).resolve()
        root = self.root.resolve()
        if candidate != root and root not in candidate.parents:
            raise DocumentNotFoundError(path)
        return candidate

    def _relative(self, file_path: Path) -> str:
        return file_path.relative_to(self.root).as_posix()

    # ----- Reads -----

    def read_document(self, path: str) -> str:
        """
        Read a note's full text.

        Raises:
            DocumentNotFoundError: If no note exists at path
            DocumentReadError: If the note is not valid UTF-8 or cannot be opened
        """
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise DocumentNotFoundError(path)
        return self._read_text(file_path, path)

    def _read_text(self, file_path: Path, path: str) -> str:
        try:
            return file_path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            raise DocumentReadError(path, str(e)) from e

    def read_structured_header(self, path: str) -> Dict[str, Any]:
        """
        Read a note's frontmatter.

        Malformed frontmatter, and notes that cannot be read at all, read
        as an empty mapping.

        Raises:
            DocumentNotFoundError: If no note exists at path
        """
        try:
            return md.parse_frontmatter(self.read_document(path))
        except (DocumentReadError, HeaderParseError) as e:
            safe_logger(self.logger).log_warning(
                "Unreadable frontmatter, treating as empty", {"path": path, "error": str(e)}
            )
            return {}

    def list_candidate_items(
        self, title_property_names: Sequence[str] = ()
    ) -> List[TrackedItem]:
        """
        Enumerate every note in the vault as a TrackedItem.

        Notes with unreadable frontmatter, or that cannot be decoded at
        all, are still listed, with no properties and no tags. Items are
        ordered by file name.
        """
        if not self.root.is_dir():
            safe_logger(self.logger).log_warning(
                "Vault directory does not exist", {"root": str(self.root)}
            )
            return []

        items = []
        for file_path in sorted(self.root.rglob("*.md"), key=lambda p: (p.name, str(p))):
            if any(part.startswith(".") for part in file_path.relative_to(self.root).parts):
                continue
            path = self._relative(file_path)
            try:
                content = self._read_text(file_path, path)
            except DocumentReadError as e:
                safe_logger(self.logger).log_warning(
                    "Unreadable note, listing without properties", {"path": path, "error": e.reason}
                )
                content = ""
            try:
                header = md.parse_frontmatter(content)
            except HeaderParseError as e:
                safe_logger(self.logger).log_debug(
                    "Skipping frontmatter", {"path": path, "error": str(e)}
                )
                header = {}
            _, body_lines = md.split_frontmatter(content)
            label, label_property = resolve_display_label(path, header, title_property_names)
            items.append(
                TrackedItem(
                    path=path,
                    display_label=label,
                    tags=collect_tags(header, body_lines),
                    properties=header,
                    label_property=label_property,
                )
            )
        return items

    # ----- Writes -----

    def write_structured_field(
        self, path: str, field_name: str, value: Mapping[str, Any]
    ) -> None:
        """
        Replace one frontmatter field of a note, atomically.

        Raises:
            DocumentNotFoundError: If the note no longer exists
            StoreWriteError: If the frontmatter cannot be rewritten
        """
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise DocumentNotFoundError(path)

        try:
            content = self._read_text(file_path, path)
            header = md.parse_frontmatter(content)
        except (DocumentReadError, HeaderParseError) as e:
            raise StoreWriteError(f"Cannot write {field_name} to {path}: {e}") from e

        header[field_name] = dict(value)
        new_content = md.replace_frontmatter(content, header)

        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise StoreWriteError(f"Cannot write {field_name} to {path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(new_content)
            os.replace(tmp_name, file_path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreWriteError(f"Cannot write {field_name} to {path}: {e}") from e

        safe_logger(self.logger).log_operation(
            "write_structured_field", {"path": path, "field": field_name, "keys": len(value)}
        )
