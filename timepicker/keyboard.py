"""Input events for the time picker.

:class:`SimulatedKeyboard` stands in for the host's input devices during
development and tests. Events are queued as ``(kind, value)`` tuples:

* ``('key', 'ArrowDown')``         a key press, by DOM-style key name
* ``('click', ('hours', 9))``      a pointer click on a cell
* ``('open', None)``               the trigger asks the panel to open
* ``('close', None)``              the overlay asks the panel to close
* ``('clear', None)``              the selection is reset to unset

:func:`parse_script` turns a short textual script such as
``"open down down right enter"`` into the same event tuples, which is how the
command-line runner is driven.
"""
from __future__ import annotations

import queue
import re
from typing import Iterable, List, Optional, Tuple

from timepicker.selector_core import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    NAVIGATION_KEYS,
    Column,
)

Event = Tuple[str, object]

_KEY_ALIASES = {
    "up": KEY_UP,
    "down": KEY_DOWN,
    "left": KEY_LEFT,
    "right": KEY_RIGHT,
    "enter": KEY_ENTER,
}

_CLICK_RE = re.compile(r"^(hour|hours|minute|minutes):(\d{1,2})$")


class SimulatedKeyboard:
    """Queue of synthetic input events.

    Example::

        kbd = SimulatedKeyboard()
        kbd.simulate_open()
        kbd.simulate_key("ArrowDown")
        kbd.simulate_click("minutes", 30)

        while True:
            ev = kbd.get_event()
            if ev is None:
                break
            print(ev)
    """

    def __init__(self) -> None:
        self._events: queue.Queue[Event] = queue.Queue()

    def simulate_key(self, key: str, repeat: int = 1) -> None:
        """Inject *repeat* presses of *key*."""
        for _ in range(max(0, repeat)):
            self._events.put(("key", key))

    def simulate_click(self, column, value: int) -> None:
        self._events.put(("click", (Column.parse(column).value, int(value))))

    def simulate_open(self) -> None:
        self._events.put(("open", None))

    def simulate_close(self) -> None:
        self._events.put(("close", None))

    def simulate_clear(self) -> None:
        self._events.put(("clear", None))

    def put(self, event: Event) -> None:
        self._events.put(event)

    def get_event(self) -> Optional[Event]:
        """Return the next queued event, or ``None`` if the queue is empty."""
        try:
            return self._events.get_nowait()
        except queue.Empty:
            return None

    def cleanup(self) -> None:
        """Drop any events still queued."""
        while self.get_event() is not None:
            pass


def parse_script(text: str) -> List[Event]:
    """Parse a whitespace- or comma-separated event script.

    Tokens: ``up``, ``down``, ``left``, ``right``, ``enter`` (or the
    ``ArrowUp``-style names), ``open``, ``close``, ``clear``, ``hour:N`` and
    ``minute:N``. Raises ``ValueError`` on anything else.
    """
    events: List[Event] = []
    for token in re.split(r"[\s,]+", text.strip()):
        if not token:
            continue
        lowered = token.lower()
        if token in NAVIGATION_KEYS:
            events.append(("key", token))
        elif lowered in _KEY_ALIASES:
            events.append(("key", _KEY_ALIASES[lowered]))
        elif lowered in ("open", "close", "clear"):
            events.append((lowered, None))
        else:
            m = _CLICK_RE.match(lowered)
            if not m:
                raise ValueError(f"Unknown script token: {token!r}")
            column = Column.HOURS if m.group(1).startswith("hour") else Column.MINUTES
            events.append(("click", (column.value, int(m.group(2)))))
    return events


def feed(keyboard: SimulatedKeyboard, events: Iterable[Event]) -> None:
    for event in events:
        keyboard.put(event)
