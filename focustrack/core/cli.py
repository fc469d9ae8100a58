#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for Focus Track commands.

Functions:
    setup_logger: Initialize FocusTrackLogger for CLI operations

Classes:
    OperationStats: Base class for all statistics
    TrackerStats: For grid renders
    MutationStats: For log writes

Usage:
    from focustrack.core.cli import setup_logger, TrackerStats

    logger = setup_logger(log_dir, "tracker")
    stats = TrackerStats()
    stats.items_rendered += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

# --- Local imports ---
from focustrack.core.logging_manager import FocusTrackLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> FocusTrackLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a FocusTrackLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'cli', 'tracker')

    Returns:
        Configured FocusTrackLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return FocusTrackLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        start_time: Operation start timestamp
    """
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def duration(self) -> float:
        """
        Get elapsed time in seconds (cached after first call).

        Returns:
            Seconds elapsed since start_time
        """
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Get formatted summary string."""
        return f"{self.duration():.2f}s"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the operations log."""
        return {"duration": round(self.duration(), 3)}


@dataclass
class TrackerStats(OperationStats):
    """
    Statistics for grid renders.

    Attributes:
        items_rendered: Number of rows in the grid
        cells_with_value: Number of cells holding a rating or flag
        notices: Number of notices raised while rendering
    """
    items_rendered: int = 0
    cells_with_value: int = 0
    notices: int = 0

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        if self.items_rendered < 0:
            raise ValueError(f"items_rendered must be non-negative, got {self.items_rendered}")
        if self.cells_with_value < 0:
            raise ValueError(f"cells_with_value must be non-negative, got {self.cells_with_value}")
        if self.notices < 0:
            raise ValueError(f"notices must be non-negative, got {self.notices}")

    def summary(self) -> str:
        """Get formatted summary with render metrics."""
        return (
            f"{self.items_rendered} tracks, "
            f"{self.cells_with_value} marked cells, "
            f"{self.notices} notices, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with render metrics."""
        d = super().to_dict()
        d.update({
            "items_rendered": self.items_rendered,
            "cells_with_value": self.cells_with_value,
            "notices": self.notices,
        })
        return d


@dataclass
class MutationStats(OperationStats):
    """
    Statistics for log writes.

    Attributes:
        entries_written: Number of successful mutations
        entries_rejected: Number of mutations aborted
    """
    entries_written: int = 0
    entries_rejected: int = 0

    def summary(self) -> str:
        """Get formatted summary with mutation metrics."""
        return (
            f"{self.entries_written} written, "
            f"{self.entries_rejected} rejected, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with mutation metrics."""
        d = super().to_dict()
        d.update({
            "entries_written": self.entries_written,
            "entries_rejected": self.entries_rejected,
        })
        return d
