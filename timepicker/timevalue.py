"""Time values for the time picker: the hour/minute pair, parsing and formatting.

Parsing never raises. A picker has to stay usable whatever the caller hands
it, so anything that does not look like ``HH:MM`` collapses to ``00:00``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

HOURS = 24
MINUTES = 60


@dataclass(frozen=True, order=True)
class Time:
    hour: int = 0
    minute: int = 0

    def __str__(self) -> str:
        return format_time(self)

    def as_tuple(self) -> Tuple[int, int]:
        return self.hour, self.minute


MIDNIGHT = Time(0, 0)


def format_time(value: Time) -> str:
    """Return the canonical zero-padded 24-hour ``HH:MM`` form."""
    return f"{value.hour:02d}:{value.minute:02d}"


def _split(text: Optional[str]) -> Optional[Tuple[int, int]]:
    if not isinstance(text, str) or not text:
        return None
    parts = text.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def parse_time(text: Optional[str]) -> Time:
    """Parse ``HH:MM``; absent, malformed or out-of-range input yields 00:00."""
    pair = _split(text)
    if pair is None:
        return MIDNIGHT
    hour, minute = pair
    if not (0 <= hour < HOURS and 0 <= minute < MINUTES):
        return MIDNIGHT
    return Time(hour, minute)


def parse_minimum(text: Optional[str]) -> Time:
    """Parse a minimum time without range checking.

    An out-of-range minimum such as ``24:00`` is kept as-is and leaves the
    picker with nothing selectable.
    """
    pair = _split(text)
    if pair is None:
        return MIDNIGHT
    return Time(*pair)


def is_well_formed(text: Optional[str]) -> bool:
    pair = _split(text)
    return pair is not None and 0 <= pair[0] < HOURS and 0 <= pair[1] < MINUTES


def coerce_selection(value: Union[None, str, Time]) -> Optional[Time]:
    """Turn a caller-supplied value into a selection, ``None`` meaning unset."""
    if value is None or isinstance(value, Time):
        return value
    if value == "":
        return None
    if not is_well_formed(value):
        logger.warning("Ignoring malformed time value %r; treating as unset", value)
        return None
    return parse_time(value)
