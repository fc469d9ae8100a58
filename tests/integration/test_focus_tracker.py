#!/usr/bin/env python3
"""
test_focus_tracker.py
---------------------
Integration tests for grid assembly and cell writes over a real vault.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import replace
from datetime import date

# --- Third-party imports ---
import pytest

# --- Local imports ---
from focustrack.core.constants import MAX_DAYS, OUT_OF_BOUNDS, UNSET_SYMBOL
from focustrack.dataclasses.configuration import load_configuration
from focustrack.dataclasses.log_entry import LogEntry
from focustrack.tracker import FocusTracker, sort_column_for_heading
from focustrack.utils.md import parse_frontmatter


TODAY = date(2024, 1, 10)


def make_tracker(store, text, logger=None):
    config, notices = load_configuration(text, TODAY)
    assert notices == []
    return FocusTracker(store, config, logger=logger)


def row_labels(grid):
    return [row.label for row in grid.rows]


@pytest.fixture
def projects(store):
    return make_tracker(store, "paths: projects/\ndaysInPast: 2\ndaysInFuture: 1")


class TestBuildGrid:
    def test_rows_and_window(self, projects):
        grid = projects.build_grid(TODAY)
        assert row_labels(grid) == ["Alpha project", "beta"]
        assert [c.key for c in grid.window] == [
            "2024-01-08", "2024-01-09", "2024-01-10", "2024-01-11",
        ]
        assert grid.notices == []

    def test_cells(self, projects):
        grid = projects.build_grid(TODAY)
        alpha, beta = grid.rows
        assert [c.display.symbol for c in alpha.cells] == ["➌", UNSET_SYMBOL, "🎯", UNSET_SYMBOL]
        assert alpha.cells[1].display.tooltip == "skipped"
        assert alpha.cells[2].entry == LogEntry(-2, "waiting on review")
        assert alpha.cells[2].display.tooltip.startswith("Flag 2: Goal: committed")
        assert [c.display.has_value for c in beta.cells] == [False, True, False, False]
        assert grid.marked_cells == 3

    def test_today_and_focal_columns(self, projects):
        grid = projects.build_grid(TODAY)
        assert [c.is_today for c in grid.window] == [False, False, True, False]
        shifted = replace(projects.configuration, focal_date=date(2024, 1, 20))
        grid = FocusTracker(projects.store, shifted).build_grid(TODAY)
        assert not any(c.is_today for c in grid.window)
        assert grid.window[2].is_focal

    def test_track_heading_from_common_label_property(self, projects):
        grid = projects.build_grid(TODAY)
        assert grid.track_heading == "title"
        assert grid.headings == ["title", "8", "9", "10", "11"]

    def test_mixed_label_sources_keep_default_heading(self, store, make_note):
        make_note("projects/gamma.md", "---\ntrack-label: Gamma\ntags: [project]\n---\n")
        grid = make_tracker(store, "paths: projects/").build_grid(TODAY)
        assert grid.track_heading == "Track"

    def test_tag_filters(self, store):
        grid = make_tracker(store, "tags: ['#project']\nexcludeTags: [archived]").build_grid(TODAY)
        assert row_labels(grid) == ["Alpha project", "beta"]

    def test_inline_tags_filter(self, store):
        grid = make_tracker(store, "tags: [client/acme]").build_grid(TODAY)
        assert row_labels(grid) == ["Alpha project"]

    def test_property_filter(self, store):
        grid = make_tracker(store, "properties:\n  status: paused").build_grid(TODAY)
        assert row_labels(grid) == ["beta"]

    def test_sort_by_property_descending(self, store):
        tracker = make_tracker(
            store, "paths: projects/\nsortColumn: status\nsortDescending: true"
        )
        assert row_labels(tracker.build_grid(TODAY)) == ["beta", "Alpha project"]

    def test_prefix_column_sorts_by_default(self, store):
        tracker = make_tracker(store, "paths: projects/\nprefixColumns:\n  Prio: priority")
        grid = tracker.build_grid(TODAY)
        assert row_labels(grid) == ["beta", "Alpha project"]
        assert [row.prefix_values for row in grid.rows] == [("1",), ("2",)]
        assert grid.headings[:2] == ["Prio", "title"]

    def test_tag_postfix_column(self, store):
        tracker = make_tracker(
            store, "paths: projects/alpha\npostfixColumns:\n  Client: '#client/(\\w+)'"
        )
        grid = tracker.build_grid(TODAY)
        assert grid.rows[0].postfix_values == ("acme",)

    def test_other_log_property(self, store):
        grid = make_tracker(store, "paths: projects/\nlogPropertyName: effort").build_grid(TODAY)
        assert grid.marked_cells == 0

    def test_empty_result(self, store):
        grid = make_tracker(store, "paths: nothing/").build_grid(TODAY)
        assert grid.is_empty
        assert grid.empty_message == "No tracks found under nothing/"

    def test_out_of_range_symbols(self, store, make_note):
        make_note(
            "projects/wild.md",
            "---\ntitle: Wild\nfocus-logs:\n  '2024-01-10': 42\n---\n",
        )
        tracker = make_tracker(store, "paths: projects/wild\ndaysInPast: 1\ndaysInFuture: 1")
        grid = tracker.build_grid(TODAY)
        assert grid.rows[0].cells[1].display.symbol == OUT_OF_BOUNDS

    def test_empty_symbol_table_notice(self, store):
        tracker = make_tracker(store, "paths: projects/\nflagSymbols: []")
        grid = tracker.build_grid(TODAY)
        assert any("Flag symbol table is empty" in n for n in grid.notices)
        assert all(n.startswith("Focus Track: ") for n in grid.notices)

    def test_undecodable_note_does_not_abort_render(self, projects, vault_dir):
        (vault_dir / "projects" / "bad.md").write_bytes(b"---\ntitle: \xff\xfe\n---\n")
        grid = projects.build_grid(TODAY)
        assert row_labels(grid) == ["Alpha project", "bad", "beta"]
        assert all(cell.entry == LogEntry() for cell in grid.rows[1].cells)

    def test_window_at_end_of_calendar(self, store):
        tracker = make_tracker(
            store, "paths: projects/\nfocalDate: 9999-12-31\ndaysInPast: 1000000\ndaysInFuture: 3"
        )
        grid = tracker.build_grid(TODAY)
        assert len(grid.window) == MAX_DAYS + 1
        assert grid.window[-1].date == date.max
        assert row_labels(grid) == ["Alpha project", "beta"]

    def test_grid_logged(self, store, logger):
        tracker = make_tracker(store, "paths: projects/", logger=logger)
        tracker.build_grid(TODAY)
        for handler in logger.main_logger.handlers:
            handler.flush()
        log_text = (logger.log_dir / "test.log").read_text(encoding="utf-8")
        assert "build_grid" in log_text
        assert "[render focal=2024-01-10 days=" in log_text

    def test_writes_logged_in_step_scope(self, store, logger):
        tracker = make_tracker(store, "paths: projects/", logger=logger)
        tracker.step_entry("projects/beta.md", "2024-01-09")
        log_text = (logger.log_dir / "test.log").read_text(encoding="utf-8")
        assert (
            "[step path=projects/beta.md date=2024-01-09 flag=False > "
            "write path=projects/beta.md date=2024-01-09] update_entry"
        ) in log_text


class TestReadLog:
    def test_missing_note_is_empty_with_notice(self, projects):
        assert projects.read_log("projects/missing.md") == {}
        assert projects.notices == [
            "Focus Track: No document found for path: projects/missing.md"
        ]


class TestWrites:
    def _log(self, vault_dir, path):
        content = (vault_dir / path).read_text(encoding="utf-8")
        return parse_frontmatter(content)["focus-logs"]

    def test_update_creates_entry_sorted(self, projects, vault_dir):
        result = projects.update_entry("projects/alpha.md", "2024-01-01", rating=4, remarks="early")
        assert result["2024-01-01"] == LogEntry(4, "early")
        log = self._log(vault_dir, "projects/alpha.md")
        assert list(log) == ["2024-01-01", "2024-01-08", "2024-01-09", "2024-01-10"]
        assert log["2024-01-01"] == {"rating": 4, "remarks": "early"}

    def test_update_upgrades_legacy_shapes(self, projects, vault_dir):
        projects.update_entry("projects/alpha.md", "2024-01-11", rating=1)
        log = self._log(vault_dir, "projects/alpha.md")
        assert log["2024-01-08"] == {"rating": 3}
        assert log["2024-01-09"] == {"rating": 0, "remarks": "skipped"}

    def test_update_remarks_only(self, projects, vault_dir):
        projects.update_entry("projects/beta.md", "2024-01-09", remarks="solid")
        assert self._log(vault_dir, "projects/beta.md")["2024-01-09"] == {
            "rating": 1,
            "remarks": "solid",
        }

    def test_body_untouched(self, projects, vault_dir):
        before = (vault_dir / "projects/alpha.md").read_text(encoding="utf-8").split("---\n", 2)[2]
        projects.update_entry("projects/alpha.md", "2024-01-11", rating=1)
        after = (vault_dir / "projects/alpha.md").read_text(encoding="utf-8").split("---\n", 2)[2]
        assert after == before

    def test_grid_reflects_write(self, projects):
        projects.update_entry("projects/beta.md", "2024-01-11", rating=-1)
        grid = projects.build_grid(TODAY)
        assert grid.rows[1].cells[3].display.symbol == "🚀"

    def test_missing_note_aborts_with_notice(self, projects):
        assert projects.update_entry("projects/missing.md", "2024-01-01", rating=1) is None
        assert projects.notices[0].startswith("Focus Track: could not save changes")

    def test_missing_path_aborts(self, projects):
        assert projects.update_entry("", "2024-01-01", rating=1) is None
        assert len(projects.notices) == 1

    def test_missing_date_aborts(self, projects, vault_dir):
        before = (vault_dir / "projects/beta.md").read_text(encoding="utf-8")
        assert projects.update_entry("projects/beta.md", "", rating=1) is None
        assert (vault_dir / "projects/beta.md").read_text(encoding="utf-8") == before

    def test_malformed_note_not_overwritten(self, projects, make_note):
        path = make_note("projects/broken.md", "---\ntitle: [oops\n---\n")
        assert projects.update_entry("projects/broken.md", "2024-01-01", rating=1) is None
        assert path.read_text(encoding="utf-8") == "---\ntitle: [oops\n---\n"

    def test_undecodable_note_aborts_with_notice(self, projects, vault_dir):
        path = vault_dir / "projects" / "bad.md"
        path.write_bytes(b"---\ntitle: \xff\xfe\n---\n")
        assert projects.step_entry("projects/bad.md", "2024-01-01") is None
        assert projects.notices[0].startswith("Focus Track: could not save changes")
        assert path.read_bytes() == b"---\ntitle: \xff\xfe\n---\n"

    def test_step_rating(self, projects):
        result = projects.step_entry("projects/beta.md", "2024-01-09")
        assert result["2024-01-09"].rating == 2

    def test_step_unset_enters_ratings(self, projects):
        assert projects.step_entry("projects/beta.md", "2024-01-12")["2024-01-12"].rating == 1

    def test_step_flag(self, projects):
        assert projects.step_entry("projects/alpha.md", "2024-01-10")["2024-01-10"].rating == -3

    def test_step_into_flags(self, projects):
        result = projects.step_entry("projects/beta.md", "2024-01-12", flag=True)
        assert result["2024-01-12"].rating == -1

    def test_step_past_last_rating_clears(self, projects):
        projects.update_entry("projects/beta.md", "2024-01-09", rating=10)
        result = projects.step_entry("projects/beta.md", "2024-01-09")
        assert result["2024-01-09"].rating == 0

    def test_step_missing_note(self, projects):
        assert projects.step_entry("projects/none.md", "2024-01-01") is None
        assert len(projects.notices) == 1

    def test_clear(self, projects, vault_dir):
        result = projects.clear_entry("projects/alpha.md", "2024-01-10")
        assert result["2024-01-10"] == LogEntry()
        assert self._log(vault_dir, "projects/alpha.md")["2024-01-10"] == {"rating": 0}


class TestSortColumnForHeading:
    def test_track(self, default_config):
        assert sort_column_for_heading(default_config, "Track") == "track"

    def test_column_heading(self):
        config, _ = load_configuration("prefixColumns:\n  Prio: priority", TODAY)
        assert sort_column_for_heading(config, "Prio") == "priority"

    def test_unknown_is_property(self, default_config):
        assert sort_column_for_heading(default_config, "status") == "status"
