"""
test_log_entry.py
-----------------
Unit tests for focustrack.dataclasses.log_entry.

Covers decoding of every stored log shape, cell display mapping and
stepping through the signed scale.
"""
import pytest

from focustrack.core.constants import OUT_OF_BOUNDS, REMARKS_SEPARATOR, UNSET_SYMBOL
from focustrack.dataclasses.log_entry import (
    LogEntry,
    ScaleKind,
    ScaleValue,
    decode_entry,
    step_scale,
    to_display,
)


RATINGS = ("a", "b", "c", "d", "e")
FLAGS = ("x", "y", "z")
KEYS = ("Goal", "Due", "Reward")


class TestScaleValue:
    """Test the tagged scale representation."""

    @pytest.mark.parametrize(
        "value, kind, level",
        [
            (0, ScaleKind.UNSET, 0),
            (4, ScaleKind.RATING, 4),
            (-3, ScaleKind.FLAG, 3),
        ],
    )
    def test_from_int(self, value, kind, level):
        scale = ScaleValue.from_int(value)
        assert scale.kind is kind
        assert scale.level == level
        assert scale.to_int() == value

    def test_index_is_zero_based(self):
        assert ScaleValue.from_int(1).index == 0
        assert ScaleValue.from_int(-2).index == 1

    def test_choices(self):
        assert ScaleKind.choices() == ["unset", "rating", "flag"]


class TestDecodeEntry:
    """Test upgrading stored values to LogEntry."""

    def test_none_is_unset(self):
        assert decode_entry(None) == LogEntry(0, None)

    def test_integer(self):
        assert decode_entry(3) == LogEntry(3, None)

    def test_negative_integer_is_flag(self):
        assert decode_entry(-2) == LogEntry(-2, None)

    def test_numeric_string(self):
        assert decode_entry("2") == LogEntry(2, None)

    def test_non_numeric_string_becomes_remarks(self):
        assert decode_entry("skipped") == LogEntry(0, "skipped")

    def test_blank_string_is_unset(self):
        assert decode_entry("") == LogEntry()
        assert decode_entry("   ") == LogEntry()

    def test_mapping_with_rating_and_remarks(self):
        assert decode_entry({"rating": -1, "remarks": "blocked"}) == LogEntry(-1, "blocked")

    def test_mapping_without_rating_defaults_to_zero(self):
        assert decode_entry({"remarks": "note"}) == LogEntry(0, "note")

    def test_mapping_with_string_rating(self):
        assert decode_entry({"rating": "4"}) == LogEntry(4, None)

    def test_mapping_with_empty_remarks_drops_them(self):
        assert decode_entry({"rating": 1, "remarks": ""}).remarks is None

    def test_non_integral_rating_is_truncated(self):
        assert decode_entry(2.7) == LogEntry(2, None)
        assert decode_entry({"rating": -1.5}) == LogEntry(-1, None)

    def test_boolean_is_unset(self):
        assert decode_entry(True) == LogEntry()
        assert decode_entry({"rating": True}) == LogEntry()

    def test_unsupported_type_is_unset(self):
        assert decode_entry(["a", "b"]) == LogEntry()

    def test_unusable_mapping_rating_is_zero(self):
        assert decode_entry({"rating": "lots"}) == LogEntry(0, None)

    def test_nan_is_unset(self):
        assert decode_entry(float("nan")) == LogEntry()

    def test_integer_too_large_for_float_is_unset(self):
        assert decode_entry(10 ** 400) == LogEntry()
        assert decode_entry({"rating": 10 ** 400, "remarks": "huge"}) == LogEntry(0, "huge")


class TestLogEntry:
    """Test LogEntry serialization."""

    def test_to_dict_omits_absent_remarks(self):
        assert LogEntry(3).to_dict() == {"rating": 3}

    def test_to_dict_includes_remarks(self):
        assert LogEntry(-1, "x").to_dict() == {"rating": -1, "remarks": "x"}

    def test_entries_are_immutable(self):
        entry = LogEntry(1)
        with pytest.raises(Exception):
            entry.rating = 2


class TestToDisplay:
    """Test mapping entries to cell symbols and tooltips."""

    def test_unset(self):
        display = to_display(LogEntry(), RATINGS, FLAGS)
        assert display.has_value is False
        assert display.symbol == UNSET_SYMBOL
        assert display.tooltip == ""

    def test_unset_with_remarks_keeps_them_in_tooltip(self):
        display = to_display(LogEntry(0, "rest day"), RATINGS, FLAGS)
        assert display.has_value is False
        assert display.tooltip == "rest day"

    def test_rating(self):
        display = to_display(LogEntry(3), RATINGS, FLAGS)
        assert display.has_value is True
        assert display.symbol == "c"
        assert display.tooltip == "Rating: 3"

    def test_flag_with_key(self):
        display = to_display(LogEntry(-2), RATINGS, FLAGS, KEYS)
        assert display.symbol == "y"
        assert display.tooltip == "Flag 2: Due"

    def test_flag_without_key(self):
        display = to_display(LogEntry(-3), RATINGS, FLAGS, ("only",))
        assert display.tooltip == "Flag 3"

    def test_remarks_appended_after_separator(self):
        display = to_display(LogEntry(1, "good session"), RATINGS, FLAGS)
        assert display.tooltip == f"Rating: 1\n{REMARKS_SEPARATOR}\ngood session"

    def test_rating_past_end_of_table(self):
        display = to_display(LogEntry(6), RATINGS, FLAGS)
        assert display.has_value is True
        assert display.symbol == OUT_OF_BOUNDS

    def test_flag_past_end_of_table(self):
        assert to_display(LogEntry(-4), RATINGS, FLAGS).symbol == OUT_OF_BOUNDS

    def test_empty_tables(self):
        assert to_display(LogEntry(1), (), ()).symbol == OUT_OF_BOUNDS


class TestStepScale:
    """Test stepping a cell through its scale."""

    def test_unset_enters_rating_scale(self):
        assert step_scale(0, 1, 5, 3) == 1

    def test_unset_down_still_enters_rating_scale(self):
        assert step_scale(0, -1, 5, 3) == 1

    def test_rating_increments(self):
        assert step_scale(2, 1, 5, 3) == 3

    def test_rating_wraps_to_unset(self):
        assert step_scale(5, 1, 5, 3) == 0

    def test_flag_grows_in_magnitude(self):
        assert step_scale(-1, 1, 5, 3) == -2

    def test_flag_wraps_to_unset(self):
        assert step_scale(-3, 1, 5, 3) == 0

    def test_out_of_range_rating_clears(self):
        assert step_scale(9, 1, 5, 3) == 0

    @pytest.mark.parametrize("current", range(-3, 6))
    def test_result_always_in_legal_range(self, current):
        result = step_scale(current, 1, 5, 3)
        assert -3 <= result <= 5

    def test_repeated_steps_cycle_back_to_unset(self):
        value = 0
        seen = []
        for _ in range(6):
            value = step_scale(value, 1, 5, 3)
            seen.append(value)
        assert seen == [1, 2, 3, 4, 5, 0]

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            step_scale(1, 0, 5, 3)


class TestScaleProperties:
    """Properties that hold for every table size."""

    @pytest.mark.parametrize("ratings, flags", [(0, 0), (1, 0), (5, 9), (10, 1)])
    @pytest.mark.parametrize("direction", [1, -1])
    def test_from_unset_always_one(self, ratings, flags, direction):
        assert step_scale(0, direction, ratings, flags) == 1

    @pytest.mark.parametrize("count", [1, 5, 10])
    def test_rating_returns_to_unset(self, count):
        for start in range(1, count + 1):
            value = start
            for _ in range(count - start + 1):
                value = step_scale(value, 1, count, 3)
            assert value == 0

    @pytest.mark.parametrize("count", [1, 3, 9])
    def test_flag_returns_to_unset(self, count):
        for start in range(1, count + 1):
            value = -start
            for _ in range(count - start + 1):
                value = step_scale(value, 1, 5, count)
            assert value == 0

    @pytest.mark.parametrize(
        "raw", [None, "", 3, -2, 2.5, "7", "text", True, {"rating": "x"}, {"rating": 1e3}, object()]
    )
    def test_decoded_rating_is_int(self, raw):
        assert type(decode_entry(raw).rating) is int

    def test_flag_scenario(self):
        entry = decode_entry(-2)
        display = to_display(entry, ["a", "b", "c", "d", "e"], ["x", "y"], ["k1", "k2"])
        assert (display.symbol, display.tooltip, display.has_value) == ("y", "Flag 2: k2", True)
