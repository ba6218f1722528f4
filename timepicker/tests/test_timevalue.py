import logging

import pytest

from timepicker.timevalue import (
    MIDNIGHT,
    Time,
    coerce_selection,
    format_time,
    is_well_formed,
    parse_minimum,
    parse_time,
)


class TestFormat:
    def test_zero_padded(self):
        assert format_time(Time(9, 5)) == "09:05"

    def test_str_uses_canonical_form(self):
        assert str(Time(23, 59)) == "23:59"

    def test_round_trip(self):
        for h in range(24):
            for m in range(0, 60, 7):
                assert parse_time(format_time(Time(h, m))) == Time(h, m)


class TestParseTime:
    @pytest.mark.parametrize("text", [None, "", "abc", "12", "1:2:3", "aa:bb", "12:xx"])
    def test_malformed_defaults_to_midnight(self, text):
        assert parse_time(text) == MIDNIGHT

    @pytest.mark.parametrize("text", ["24:00", "12:60", "-1:30"])
    def test_out_of_range_defaults_to_midnight(self, text):
        assert parse_time(text) == MIDNIGHT

    def test_surrounding_whitespace_ignored(self):
        assert parse_time(" 07:45 ") == Time(7, 45)

    def test_single_digit_fields(self):
        assert parse_time("7:5") == Time(7, 5)


class TestParseMinimum:
    def test_absent_is_midnight(self):
        assert parse_minimum(None) == MIDNIGHT

    def test_keeps_out_of_range_hour(self):
        assert parse_minimum("24:00") == Time(24, 0)

    def test_malformed_is_midnight(self):
        assert parse_minimum("nine thirty") == MIDNIGHT


class TestCoerceSelection:
    def test_none_and_empty_are_unset(self):
        assert coerce_selection(None) is None
        assert coerce_selection("") is None

    def test_time_passes_through(self):
        t = Time(1, 2)
        assert coerce_selection(t) is t

    def test_string_is_parsed(self):
        assert coerce_selection("18:20") == Time(18, 20)

    def test_malformed_string_is_unset_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="timepicker.timevalue"):
            assert coerce_selection("25:99") is None
        assert "malformed" in caplog.text

    def test_non_string_is_unset(self):
        assert coerce_selection(930) is None
        assert parse_time(930) == MIDNIGHT

    def test_is_well_formed(self):
        assert is_well_formed("00:00")
        assert not is_well_formed("24:00")
        assert not is_well_formed(None)


def test_times_order_chronologically():
    assert Time(9, 30) < Time(9, 31) < Time(10, 0)
