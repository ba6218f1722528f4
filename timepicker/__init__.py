"""Time picker package init.

Two-column hour/minute picker: the navigation and selection state machine
lives in `selector_core`, everything else is input, rendering and config
plumbing around it.
"""

__all__ = [
    "config",
    "constraints",
    "keyboard",
    "scheduler",
    "selector_core",
    "timevalue",
    "ui",
]
