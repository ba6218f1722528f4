"""Minimum-time constraint predicates and the searches built on them.

:class:`TimeBounds` is the single source of truth for which cells are
selectable. Rendering greys cells out with it, click handling rejects
disabled cells with it, and keyboard navigation skips over disabled cells
with it.

An hour strictly below the minimum hour is disabled together with all of its
minutes; only the boundary hour compares minute-for-minute.
"""
from __future__ import annotations

from typing import Optional

from timepicker.timevalue import HOURS, MINUTES, MIDNIGHT, Time


class TimeBounds:
    """Inclusive lower bound on selectable times.

    Parameters
    ----------
    minimum:
        The earliest selectable time. ``None`` means ``00:00``, i.e. no
        effective restriction. Out-of-range values are accepted: an hour past
        23 disables every cell, a minute past 59 disables its whole hour.
    """

    def __init__(self, minimum: Optional[Time] = None) -> None:
        self.minimum = minimum or MIDNIGHT

    def __repr__(self) -> str:
        return f"TimeBounds(minimum={self.minimum.hour:02d}:{self.minimum.minute:02d})"

    @property
    def hour(self) -> int:
        return self.minimum.hour

    @property
    def minute(self) -> int:
        return self.minimum.minute

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_hour_disabled(self, hour: int) -> bool:
        return hour < self.minimum.hour

    def is_minute_disabled(self, hour: int, minute: int) -> bool:
        if hour < self.minimum.hour:
            return True
        if hour == self.minimum.hour:
            return minute < self.minimum.minute
        return False

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def first_enabled_hour(self) -> Optional[int]:
        for hour in range(HOURS):
            if not self.is_hour_disabled(hour):
                return hour
        return None

    def first_enabled_minute(self, hour: int) -> Optional[int]:
        for minute in range(MINUTES):
            if not self.is_minute_disabled(hour, minute):
                return minute
        return None

    def next_enabled_hour(self, start: int, step: int) -> Optional[int]:
        """Step once from *start* in direction *step*, wrapping, skipping disabled hours.

        Returns ``None`` when no hour is selectable.
        """
        hour = start
        for _ in range(HOURS):
            hour = (hour + step) % HOURS
            if not self.is_hour_disabled(hour):
                return hour
        return None

    def next_enabled_minute(self, hour: int, start: int, step: int) -> Optional[int]:
        """Minute-column counterpart of :meth:`next_enabled_hour` for a fixed *hour*."""
        minute = start
        for _ in range(MINUTES):
            minute = (minute + step) % MINUTES
            if not self.is_minute_disabled(hour, minute):
                return minute
        return None

    def clamp(self, hour: int, minute: int) -> Optional[Time]:
        """Raise ``(hour, minute)`` to the nearest selectable time at or after it.

        An hour with no selectable minute rolls over to the next hour that has
        one. Returns ``None`` when the bound leaves nothing selectable.
        """
        if hour < self.minimum.hour:
            hour = self.minimum.hour
        while hour < HOURS:
            first = self.first_enabled_minute(hour)
            if first is not None:
                return Time(hour, max(minute, first))
            hour += 1
            minute = 0
        return None

    def seed(self, selection: Optional[Time]) -> Time:
        """Starting cursor for a freshly opened panel.

        The hour is the selected hour raised to the minimum hour. The minute
        is kept only when the hour was not raised, and the result is then
        clamped like a commit. With no selectable cell at all the cursor parks
        on the last hour in range.
        """
        base = selection or MIDNIGHT
        hour = max(base.hour, self.minimum.hour)
        minute = base.minute if hour == base.hour else 0
        seeded = self.clamp(hour, minute)
        if seeded is None:
            return Time(HOURS - 1, min(minute, MINUTES - 1))
        return seeded
