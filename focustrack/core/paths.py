#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Focus Track project.

The project structure:
    ROOT/
    ├── focustrack/    # Package code
    ├── vault/         # Markdown notes (default vault)
    └── logs/          # Application logs

``FOCUSTRACK_VAULT`` and ``FOCUSTRACK_LOG_DIR`` override the vault and
log locations; CLI options override both.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/focustrack/core/paths.py and navigates up
    the directory tree to find ROOT.

    Returns:
        Path object for project root
    """
    current_file = Path(__file__).resolve()

    # Navigate up: paths.py -> core/ -> focustrack/ -> ROOT/
    return current_file.parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()

# ---- Vault ----
VAULT_DIR = Path(os.environ.get("FOCUSTRACK_VAULT", ROOT / "vault"))
SETTINGS_FILE = VAULT_DIR / ".focustrack.yaml"

# ---- Logs ----
LOG_DIR = Path(os.environ.get("FOCUSTRACK_LOG_DIR", ROOT / "logs"))
