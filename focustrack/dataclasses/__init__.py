"""
dataclasses package
-------------------
Dataclass definitions for focus logs and tracker options.

- LogEntry: One date's rating/flag and remarks
- TrackedItem: A note shown as one grid row
- FilterSpec: Patterns selecting the tracked items
- TrackerConfiguration: Immutable options of one tracker
"""
from focustrack.dataclasses.configuration import TrackerConfiguration, TrackerSettings
from focustrack.dataclasses.log_entry import CellDisplay, LogEntry, ScaleKind, ScaleValue
from focustrack.dataclasses.tracked_item import FilterSpec, TrackedItem

__all__ = [
    "CellDisplay",
    "FilterSpec",
    "LogEntry",
    "ScaleKind",
    "ScaleValue",
    "TrackedItem",
    "TrackerConfiguration",
    "TrackerSettings",
]
