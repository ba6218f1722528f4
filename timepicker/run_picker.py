"""CLI runner for the time picker.

Drives a TimeSelector from a scripted event sequence (see
`timepicker.keyboard.parse_script`), pumping the deferred scheduler after each
event the way a host event loop would. Optionally writes a PNG snapshot of the
panel and trigger after every event.
"""
import argparse
import sys
import logging
from pathlib import Path

from timepicker.config import load_settings
from timepicker.keyboard import SimulatedKeyboard, feed, parse_script
from timepicker.scheduler import ManualScheduler
from timepicker.selector_core import KeyEvent, TimeSelector
from timepicker.ui import PanelView, compose_trigger

logger = logging.getLogger(__name__)


def dispatch(selector: TimeSelector, event) -> bool:
    """Apply one ``(kind, value)`` input event to *selector*.

    Returns ``True`` when the selector acted on the event.
    """
    kind, value = event
    if kind == "key":
        return selector.handle_key(KeyEvent(value))
    if kind == "click":
        column, index = value
        return selector.click(column, index)
    if kind == "open":
        was_open = selector.panel_open
        selector.request_open()
        return not was_open
    if kind == "close":
        was_open = selector.panel_open
        selector.request_close()
        return was_open
    if kind == "clear":
        selector.clear()
        return True
    logger.warning(f"Ignoring unknown event kind {kind!r}")
    return False


def run_events(selector: TimeSelector, keyboard: SimulatedKeyboard, scheduler: ManualScheduler, on_frame=None) -> int:
    """Drain *keyboard* into *selector*; return the number of events processed."""
    count = 0
    while True:
        ev = keyboard.get_event()
        if ev is None:
            break
        handled = dispatch(selector, ev)
        logger.debug("Event %r handled=%s", ev, handled)
        # next turn of the loop: deferred scroll requests run here
        scheduler.run_pending()
        count += 1
        if on_frame is not None:
            on_frame(count, ev)
    return count


def main(argv=None):
    p = argparse.ArgumentParser(description="Run the time picker against a scripted event sequence")
    p.add_argument("--config", help="Path to settings JSON (defaults to built-in settings)")
    p.add_argument("--min-time", help="Minimum selectable time, HH:MM")
    p.add_argument("--value", help="Initial value, HH:MM")
    p.add_argument("--keep-open", action="store_true", help="Keep the panel open after a commit")
    p.add_argument("--script", default="open", help="Event script, e.g. \"open down down right enter\"")
    p.add_argument("--snapshot-dir", help="Write a PNG of the panel and trigger after every event")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.info("Debug logging enabled")

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings: {e}")
        return 1

    if args.min_time is not None:
        settings["min_time"] = args.min_time
    if args.value is not None:
        settings["value"] = args.value
    if args.keep_open:
        settings["close_on_commit"] = False

    try:
        events = parse_script(args.script)
    except ValueError as e:
        logger.error(f"Bad script: {e}")
        return 2

    view = PanelView(
        visible_rows=settings["visible_rows"],
        panel_width=settings["panel_width"],
        row_height=settings["row_height"],
    )
    scheduler = ManualScheduler()

    def on_change(value):
        print(f"value: {value}")

    selector = TimeSelector(
        value=settings["value"],
        on_change=on_change,
        min_time=settings["min_time"],
        close_on_commit=settings["close_on_commit"],
        ensure_visible=view.ensure_visible,
        scheduler=scheduler,
    )

    on_frame = None
    if args.snapshot_dir:
        out = Path(args.snapshot_dir)
        out.mkdir(parents=True, exist_ok=True)

        def on_frame(n, ev):
            trigger = compose_trigger(selector.display_text, size=(view.panel_width, view.row_height))
            trigger.save(out / f"{n:03d}_trigger.png")
            if selector.panel_open:
                view.render(selector).save(out / f"{n:03d}_panel.png")

    keyboard = SimulatedKeyboard()
    feed(keyboard, events)
    n = run_events(selector, keyboard, scheduler, on_frame=on_frame)
    logger.info(f"Processed {n} events; panel_open={selector.panel_open}")
    print(f"final: {selector.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
