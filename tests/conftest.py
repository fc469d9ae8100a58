"""
conftest.py
-----------
Shared pytest fixtures for Focus Track tests.

Provides fixtures for:
- Temporary vaults of markdown notes
- Sample note content
- Configurations and loggers
"""
import pytest
from pathlib import Path
from datetime import date

from focustrack.core.logging_manager import FocusTrackLogger
from focustrack.dataclasses.configuration import TrackerConfiguration
from focustrack.store.vault import VaultStore


TODAY = date(2024, 1, 10)


# ----- Helpers -----

def write_note(root: Path, relative: str, content: str) -> Path:
    """Write a note under root, creating folders as needed."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ----- Sample Note Content Fixtures -----

@pytest.fixture
def alpha_note_content():
    """Project note with a mixed-shape focus log."""
    return """---
title: Alpha project
priority: 2
status: active
tags:
  - project
  - work
focus-logs:
  '2024-01-08': 3
  '2024-01-09': skipped
  '2024-01-10':
    rating: -2
    remarks: waiting on review
---

# Alpha

Notes about #client/acme work.
"""


@pytest.fixture
def beta_note_content():
    """Project note without a title property."""
    return """---
priority: 1
status: paused
tags: [project, home]
focus-logs:
  '2024-01-09': {rating: 1}
---

Body of beta.
"""


@pytest.fixture
def archive_note_content():
    """Archived note that filters usually exclude."""
    return """---
title: Old thing
tags: [project, archived]
---
"""


# ----- Vault Fixtures -----

@pytest.fixture
def vault_dir(tmp_path, alpha_note_content, beta_note_content, archive_note_content):
    """Temporary vault with three project notes and one unrelated note."""
    root = tmp_path / "vault"
    root.mkdir()
    write_note(root, "projects/alpha.md", alpha_note_content)
    write_note(root, "projects/beta.md", beta_note_content)
    write_note(root, "archive/old.md", archive_note_content)
    write_note(root, "journal/2024-01-10.md", "Just a journal page.\n")
    write_note(root, ".trash/deleted.md", "---\ntags: [project]\n---\n")
    return root


@pytest.fixture
def make_note(vault_dir):
    """Factory writing extra notes into the sample vault."""
    def _make(relative: str, content: str) -> Path:
        return write_note(vault_dir, relative, content)
    return _make


@pytest.fixture
def store(vault_dir):
    """VaultStore over the sample vault."""
    return VaultStore(vault_dir)


@pytest.fixture
def logger(tmp_path):
    """Real logger writing under a temporary directory."""
    return FocusTrackLogger(tmp_path / "logs", "test")


# ----- Configuration Fixtures -----

@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def default_config():
    """All-defaults configuration focused on TODAY."""
    return TrackerConfiguration.defaults(TODAY)
