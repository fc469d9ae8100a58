"""
Focus Track
===========

Per-day focus logs for markdown notes, rendered as a grid.

Each note in a vault carries a ``focus-logs`` frontmatter field mapping
ISO dates to a signed scale value (positive ratings, negative flags)
and optional remarks. This package selects notes with path/tag/property
filters, sorts them, and lays their logs out over a window of days
around a focal date. Cell changes are written back to the note.

Main Components:
    - dataclasses: LogEntry codec, TrackedItem/FilterSpec, TrackerConfiguration
    - engine: Log normalization, filtering, sorting, date window, mutation
    - store: Markdown vault persistence
    - tracker: Grid assembly and cell writes
    - core: Logging, exceptions, validation, paths, constants
    - utils: Frontmatter, date and option parsing helpers

Primary Interfaces:
    - focustrack.cli: ``focustrack`` command-line interface
    - focustrack.tracker.FocusTracker: Programmatic grid/mutation API

Example Usage:
    >>> from datetime import date
    >>> from focustrack import FocusTracker, VaultStore, load_configuration
    >>> config, notices = load_configuration("paths: projects/", today=date.today())
    >>> grid = FocusTracker(VaultStore(vault_dir), config).build_grid(date.today())
"""
from focustrack.dataclasses.configuration import (
    TrackerConfiguration,
    TrackerSettings,
    load_configuration,
)
from focustrack.dataclasses.log_entry import LogEntry, decode_entry, step_scale, to_display
from focustrack.store.vault import VaultStore
from focustrack.tracker import FocusTracker, TrackerGrid

__version__ = "1.0.0"

__all__ = [
    "FocusTracker",
    "LogEntry",
    "TrackerConfiguration",
    "TrackerGrid",
    "TrackerSettings",
    "VaultStore",
    "decode_entry",
    "load_configuration",
    "step_scale",
    "to_display",
]
