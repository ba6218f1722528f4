"""Selection and keyboard-navigation state machine for the two-column time picker.

The picker shows two lists side by side: 24 hours and 60 minutes. A value is
chosen either by clicking a cell or by moving a keyboard cursor and pressing
Enter, subject to an optional minimum time.

Panel lifecycle
---------------
Navigation state (the focused hour, the focused minute and the active column)
exists only while the panel is open. :meth:`TimeSelector.open_panel` builds it
fresh from the current selection and the minimum time, and queues a single
deferred request to bring both focused cells into view.
:meth:`TimeSelector.close_panel` throws it away, so no stale cursor survives
into the next open.

Keyboard
--------
While the panel is open:

* ``ArrowUp`` / ``ArrowDown``   move the cursor in the active column, wrapping
                                 around and skipping disabled cells
* ``ArrowLeft``                  activates the hours column
* ``ArrowRight``                 activates the minutes column, snapping the
                                 minute cursor forward if it sits on a
                                 disabled minute
* ``Enter``                      commits the focused hour and minute

Every other key is left to the host. Consumed keys have their default action
prevented.

Commit
------
Clicks and Enter both end in :meth:`TimeSelector.commit`, which raises the
candidate to the minimum time where needed, reports ``HH:MM`` through
``on_change`` and, unless ``close_on_commit`` is off, closes the panel.

Collaborators
-------------
All collaborator callbacks are optional:

``on_change(value)``
    Receives the committed ``HH:MM`` string, or ``None`` after :meth:`clear`.
``ensure_visible(column, index, alignment)``
    Scroll request for the list renderer; *alignment* is ``"nearest"`` or
    ``"center"``.
``on_open_change(is_open)``
    Panel-visibility notifications for the overlay.
``on_display(selector)``
    Called whenever something visible changed and the panel should be redrawn.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from timepicker.constraints import TimeBounds
from timepicker.scheduler import Cancellable, ManualScheduler, Scheduler
from timepicker.timevalue import (
    HOURS,
    MINUTES,
    Time,
    coerce_selection,
    format_time,
    parse_minimum,
)

logger = logging.getLogger(__name__)

PLACEHOLDER = "Pick a time"

KEY_UP = "ArrowUp"
KEY_DOWN = "ArrowDown"
KEY_LEFT = "ArrowLeft"
KEY_RIGHT = "ArrowRight"
KEY_ENTER = "Enter"

NAVIGATION_KEYS = frozenset({KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_ENTER})

ALIGN_NEAREST = "nearest"
ALIGN_CENTER = "center"


class Column(Enum):
    HOURS = "hours"
    MINUTES = "minutes"

    @classmethod
    def parse(cls, name: Union["Column", str]) -> "Column":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            raise ValueError(f"Unknown column: {name!r}") from None

    @property
    def size(self) -> int:
        return HOURS if self is Column.HOURS else MINUTES


class KeyEvent:
    """Host key event. The selector calls :meth:`prevent_default` on keys it consumes."""

    def __init__(self, key: str) -> None:
        self.key = key
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def __repr__(self) -> str:
        return f"KeyEvent({self.key!r})"


@dataclass(frozen=True)
class Cell:
    value: int
    label: str
    disabled: bool
    focused: bool
    selected: bool


@dataclass
class _Navigation:
    focused_hour: int
    focused_minute: int
    active_column: Column = Column.HOURS


TimeLike = Union[None, str, Time]


class TimeSelector:
    """Two-column time picker state machine.

    Parameters
    ----------
    value:
        Initial selection as ``HH:MM``, a :class:`Time`, or ``None`` (unset).
        Malformed strings are treated as unset.
    on_change:
        Callback ``(value: Optional[str]) -> None`` fired on commit and clear.
    min_time:
        Inclusive lower bound, ``HH:MM`` or :class:`Time`. Defaults to
        ``00:00``.
    controlled:
        When ``True`` the caller owns the selection: commits only notify
        ``on_change`` and the caller feeds the accepted value back through
        :meth:`set_value`. When ``False`` (default) the selector keeps the
        committed value itself.
    close_on_commit:
        Close the panel after every commit. Defaults to ``True``.
    ensure_visible, on_open_change, on_display:
        Rendering and overlay collaborators, see the module docstring.
    scheduler:
        Object with ``call_soon(callback)`` returning a cancellable handle,
        used for the deferred bring-into-view request on open. Defaults to a
        :class:`~timepicker.scheduler.ManualScheduler` the host must pump.
    """

    def __init__(
        self,
        value: TimeLike = None,
        on_change: Optional[Callable[[Optional[str]], None]] = None,
        min_time: TimeLike = None,
        controlled: bool = False,
        close_on_commit: bool = True,
        ensure_visible: Optional[Callable[[Column, int, str], None]] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
        on_display: Optional[Callable[["TimeSelector"], None]] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.controlled = controlled
        self.close_on_commit = close_on_commit

        self._on_change = on_change or (lambda value: None)
        self._ensure_visible = ensure_visible or (lambda column, index, alignment: None)
        self._on_open_change = on_open_change or (lambda is_open: None)
        self._on_display = on_display or (lambda selector: None)
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()

        self._selection: Optional[Time] = coerce_selection(value)
        self._bounds = TimeBounds(self._coerce_minimum(min_time))

        self._panel_open = False
        self._nav: Optional[_Navigation] = None
        self._pending_scroll: Optional[Cancellable] = None

        logger.info(
            "TimeSelector initialized: value=%s min=%s controlled=%s close_on_commit=%s",
            self.value, format_time(self._bounds.minimum), controlled, close_on_commit,
        )

    # ------------------------------------------------------------------
    # Panel lifecycle
    # ------------------------------------------------------------------

    def open_panel(self) -> None:
        """Open the panel and build fresh navigation state (closed -> open edge only)."""
        if self._panel_open:
            return
        seed = self._bounds.seed(self._selection)
        self._nav = _Navigation(seed.hour, seed.minute, Column.HOURS)
        self._panel_open = True
        logger.info("Panel opened, focus=%s", format_time(seed))

        self._cancel_pending_scroll()
        self._pending_scroll = self.scheduler.call_soon(self._reveal_focus)

        self._notify_open_change(True)
        self._refresh_display()

    def close_panel(self) -> None:
        if not self._panel_open:
            return
        self._cancel_pending_scroll()
        self._panel_open = False
        self._nav = None
        logger.info("Panel closed")
        self._notify_open_change(False)
        self._refresh_display()

    # Panel-visibility contract for the overlay collaborator
    request_open = open_panel
    request_close = close_panel

    def toggle_panel(self) -> None:
        if self._panel_open:
            self.close_panel()
        else:
            self.open_panel()

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, key: Union[str, KeyEvent]) -> bool:
        """Handle one key press. Returns ``True`` when the key was consumed."""
        event = key if isinstance(key, KeyEvent) else KeyEvent(key)
        if not self._panel_open or event.key not in NAVIGATION_KEYS:
            return False
        event.prevent_default()

        nav = self._nav
        if event.key == KEY_UP:
            self._move(-1)
        elif event.key == KEY_DOWN:
            self._move(+1)
        elif event.key == KEY_LEFT:
            nav.active_column = Column.HOURS
            self._request_visible(Column.HOURS, nav.focused_hour, ALIGN_NEAREST)
            self._refresh_display()
        elif event.key == KEY_RIGHT:
            nav.active_column = Column.MINUTES
            self._snap_minute()
            self._request_visible(Column.MINUTES, nav.focused_minute, ALIGN_NEAREST)
            self._refresh_display()
        else:
            self.commit(nav.focused_hour, nav.focused_minute)
        return True

    def _move(self, step: int) -> None:
        nav = self._nav
        if nav.active_column is Column.HOURS:
            nxt = self._bounds.next_enabled_hour(nav.focused_hour, step)
            if nxt is None:
                nxt = min(self._bounds.hour, HOURS - 1)
            nav.focused_hour = nxt
            # the minute cursor has to stay valid for the new hour
            self._snap_minute()
            index = nxt
        else:
            nxt = self._bounds.next_enabled_minute(nav.focused_hour, nav.focused_minute, step)
            if nxt is None:
                nxt = min(self._bounds.minute, MINUTES - 1)
            nav.focused_minute = nxt
            index = nxt
        logger.debug(
            "Cursor %s %+d -> %02d:%02d",
            nav.active_column.value, step, nav.focused_hour, nav.focused_minute,
        )
        self._request_visible(nav.active_column, index, ALIGN_NEAREST)
        self._refresh_display()

    def _snap_minute(self) -> None:
        nav = self._nav
        if self._bounds.is_minute_disabled(nav.focused_hour, nav.focused_minute):
            first = self._bounds.first_enabled_minute(nav.focused_hour)
            if first is not None:
                nav.focused_minute = first

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def click_hour(self, hour: int) -> bool:
        """Select *hour*, keeping the selected minute. No-op on disabled cells."""
        if not self._panel_open or not 0 <= hour < HOURS:
            return False
        if self._bounds.is_hour_disabled(hour):
            logger.debug("Ignoring click on disabled hour %02d", hour)
            return False
        minute = self._selection.minute if self._selection else 0
        self.commit(hour, minute)
        return True

    def click_minute(self, minute: int) -> bool:
        """Select *minute* under the hour the minute column currently shows."""
        if not self._panel_open or not 0 <= minute < MINUTES:
            return False
        hour = self._minute_column_hour()
        if self._bounds.is_minute_disabled(hour, minute):
            logger.debug("Ignoring click on disabled minute %02d (hour %02d)", minute, hour)
            return False
        self.commit(hour, minute)
        return True

    def click(self, column: Union[Column, str], value: int) -> bool:
        if Column.parse(column) is Column.HOURS:
            return self.click_hour(value)
        return self.click_minute(value)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def commit(self, hour: int, minute: int) -> Optional[str]:
        """Clamp ``(hour, minute)`` to the minimum, report it and maybe close.

        Returns the committed ``HH:MM`` string, or ``None`` when the minimum
        leaves nothing selectable (the commit is then dropped).
        """
        clamped = self._bounds.clamp(hour, minute)
        if clamped is None:
            logger.warning(
                "Dropping commit of %02d:%02d: minimum %s leaves nothing selectable",
                hour, minute, format_time(self._bounds.minimum),
            )
            return None
        if clamped.minute != minute:
            self._request_visible(Column.MINUTES, clamped.minute, ALIGN_CENTER)

        text = format_time(clamped)
        logger.info("Commit %02d:%02d -> %s", hour, minute, text)
        if not self.controlled:
            self._selection = clamped
        self._notify_change(text)

        if self.close_on_commit:
            self.close_panel()
        else:
            if self._nav is not None:
                self._nav.focused_hour = clamped.hour
                self._nav.focused_minute = clamped.minute
            self._refresh_display()
        return text

    def clear(self) -> None:
        """Reset the selection to unset and report ``None``."""
        logger.info("Selection cleared")
        if not self.controlled:
            self._selection = None
        self._notify_change(None)
        self._refresh_display()

    # ------------------------------------------------------------------
    # Caller-driven updates
    # ------------------------------------------------------------------

    def set_value(self, value: TimeLike) -> None:
        """Adopt the caller's value (the controlled-mode feedback path)."""
        self._selection = coerce_selection(value)
        self._refresh_display()

    def set_min_time(self, min_time: TimeLike) -> None:
        self._bounds = TimeBounds(self._coerce_minimum(min_time))
        logger.info("Minimum time set to %s", format_time(self._bounds.minimum))
        if self._nav is not None:
            # keep the cursor on the first selectable cell at or after it
            seed = self._bounds.seed(Time(self._nav.focused_hour, self._nav.focused_minute))
            self._nav.focused_hour = seed.hour
            self._nav.focused_minute = seed.minute
        self._refresh_display()

    # ------------------------------------------------------------------
    # List-rendering contract
    # ------------------------------------------------------------------

    def cells(self, column: Union[Column, str]) -> List[Cell]:
        """Return the tagged cells for *column*, in display order."""
        column = Column.parse(column)
        nav = self._nav
        active = nav is not None and nav.active_column is column
        if column is Column.HOURS:
            focused = nav.focused_hour if active else None
            selected = self._selection.hour if self._selection else None
            return [
                Cell(h, f"{h:02d}", self._bounds.is_hour_disabled(h), h == focused, h == selected)
                for h in range(HOURS)
            ]
        hour = self._minute_column_hour()
        focused = nav.focused_minute if active else None
        selected = self._selection.minute if self._selection else None
        return [
            Cell(m, f"{m:02d}", self._bounds.is_minute_disabled(hour, m), m == focused, m == selected)
            for m in range(MINUTES)
        ]

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def selection(self) -> Optional[Time]:
        return self._selection

    @property
    def value(self) -> Optional[str]:
        """The selection as ``HH:MM``, or ``None`` when unset."""
        return format_time(self._selection) if self._selection else None

    @property
    def display_text(self) -> str:
        """Trigger label: the value, or a placeholder when unset."""
        return self.value or PLACEHOLDER

    @property
    def bounds(self) -> TimeBounds:
        return self._bounds

    @property
    def panel_open(self) -> bool:
        return self._panel_open

    @property
    def active_column(self) -> Optional[Column]:
        return self._nav.active_column if self._nav else None

    @property
    def focused_hour(self) -> Optional[int]:
        return self._nav.focused_hour if self._nav else None

    @property
    def focused_minute(self) -> Optional[int]:
        return self._nav.focused_minute if self._nav else None

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce_minimum(min_time: TimeLike) -> Time:
        if isinstance(min_time, Time):
            return min_time
        return parse_minimum(min_time)

    def _minute_column_hour(self) -> int:
        if self._nav is not None:
            return self._nav.focused_hour
        return self._selection.hour if self._selection else 0

    def _reveal_focus(self) -> None:
        self._pending_scroll = None
        if self._nav is None:
            return
        self._request_visible(Column.HOURS, self._nav.focused_hour, ALIGN_CENTER)
        self._request_visible(Column.MINUTES, self._nav.focused_minute, ALIGN_CENTER)

    def _cancel_pending_scroll(self) -> None:
        if self._pending_scroll is not None:
            self._pending_scroll.cancel()
            self._pending_scroll = None

    def _request_visible(self, column: Column, index: int, alignment: str) -> None:
        try:
            self._ensure_visible(column, index, alignment)
        except Exception:
            logger.exception("ensure_visible callback raised an exception")

    def _notify_change(self, value: Optional[str]) -> None:
        try:
            self._on_change(value)
        except Exception:
            logger.exception("on_change callback raised an exception")

    def _notify_open_change(self, is_open: bool) -> None:
        try:
            self._on_open_change(is_open)
        except Exception:
            logger.exception("on_open_change callback raised an exception")

    def _refresh_display(self) -> None:
        try:
            self._on_display(self)
        except Exception:
            logger.exception("on_display callback raised an exception")
