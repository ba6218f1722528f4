"""Tests for TimeBounds predicates, directional search, clamp and seed."""
from timepicker.constraints import TimeBounds
from timepicker.timevalue import Time

NINE_THIRTY = TimeBounds(Time(9, 30))


class TestPredicates:
    def test_no_minimum_disables_nothing(self):
        b = TimeBounds()
        assert not any(b.is_hour_disabled(h) for h in range(24))
        assert not any(b.is_minute_disabled(0, m) for m in range(60))

    def test_hours_below_minimum_disabled(self):
        assert NINE_THIRTY.is_hour_disabled(8)
        assert not NINE_THIRTY.is_hour_disabled(9)
        assert not NINE_THIRTY.is_hour_disabled(23)

    def test_boundary_hour_minutes(self):
        assert NINE_THIRTY.is_minute_disabled(9, 29)
        assert not NINE_THIRTY.is_minute_disabled(9, 30)

    def test_all_minutes_of_earlier_hour_disabled(self):
        assert all(NINE_THIRTY.is_minute_disabled(8, m) for m in range(60))

    def test_later_hours_fully_enabled(self):
        assert not any(NINE_THIRTY.is_minute_disabled(10, m) for m in range(60))

    def test_minute_disabling_is_monotonic(self):
        for h in range(24):
            for m in range(1, 60):
                if NINE_THIRTY.is_minute_disabled(h, m):
                    assert all(NINE_THIRTY.is_minute_disabled(h, k) for k in range(m))


class TestSearch:
    def test_first_enabled(self):
        assert NINE_THIRTY.first_enabled_hour() == 9
        assert NINE_THIRTY.first_enabled_minute(9) == 30
        assert NINE_THIRTY.first_enabled_minute(10) == 0
        assert NINE_THIRTY.first_enabled_minute(8) is None

    def test_next_hour_skips_disabled_forward(self):
        assert NINE_THIRTY.next_enabled_hour(23, +1) == 9

    def test_next_hour_wraps_backward(self):
        assert NINE_THIRTY.next_enabled_hour(9, -1) == 23

    def test_next_minute_wraps_past_disabled_block(self):
        assert NINE_THIRTY.next_enabled_minute(9, 15, -1) == 59
        assert NINE_THIRTY.next_enabled_minute(9, 59, +1) == 30

    def test_degenerate_minimum_has_nothing(self):
        b = TimeBounds(Time(24, 0))
        assert b.first_enabled_hour() is None
        assert b.next_enabled_hour(0, +1) is None
        assert b.next_enabled_minute(23, 0, +1) is None


class TestClamp:
    def test_boundary_minute_raised(self):
        assert NINE_THIRTY.clamp(9, 10) == Time(9, 30)

    def test_earlier_hour_raised(self):
        assert NINE_THIRTY.clamp(5, 45) == Time(9, 45)

    def test_valid_value_unchanged(self):
        assert NINE_THIRTY.clamp(14, 5) == Time(14, 5)

    def test_degenerate_returns_none(self):
        assert TimeBounds(Time(30, 0)).clamp(10, 0) is None

    def test_clamped_value_is_never_disabled(self):
        for h in range(24):
            for m in range(0, 60, 5):
                t = NINE_THIRTY.clamp(h, m)
                assert not NINE_THIRTY.is_minute_disabled(t.hour, t.minute)


class TestSeed:
    def test_unset_seeds_at_minimum(self):
        assert NINE_THIRTY.seed(None) == Time(9, 30)

    def test_later_selection_kept(self):
        assert NINE_THIRTY.seed(Time(10, 5)) == Time(10, 5)

    def test_boundary_hour_minute_raised(self):
        assert NINE_THIRTY.seed(Time(9, 10)) == Time(9, 30)
        assert NINE_THIRTY.seed(Time(9, 45)) == Time(9, 45)

    def test_earlier_hour_resets_minute(self):
        assert TimeBounds(Time(9, 0)).seed(Time(7, 45)) == Time(9, 0)

    def test_no_minimum_unset_is_midnight(self):
        assert TimeBounds().seed(None) == Time(0, 0)

    def test_degenerate_parks_in_range(self):
        t = TimeBounds(Time(24, 0)).seed(None)
        assert 0 <= t.hour < 24 and 0 <= t.minute < 60


class TestMinuteOverflowMinimum:
    """A minimum minute of 60 or more leaves its hour without selectable minutes."""

    BOUNDS = TimeBounds(Time(10, 60))

    def test_clamp_rolls_over_to_next_hour(self):
        assert self.BOUNDS.clamp(10, 59) == Time(11, 0)
        assert self.BOUNDS.clamp(3, 15) == Time(11, 0)

    def test_clamp_keeps_minute_in_later_hour(self):
        assert self.BOUNDS.clamp(12, 45) == Time(12, 45)

    def test_clamp_last_hour_without_minutes_is_none(self):
        assert TimeBounds(Time(23, 60)).clamp(23, 59) is None

    def test_seed_skips_hour_without_minutes(self):
        assert self.BOUNDS.seed(None) == Time(11, 0)
        assert self.BOUNDS.seed(Time(10, 20)) == Time(11, 0)
