"""Default configuration loader for the time picker.

This module exposes a small `load_settings` helper that reads a JSON settings
file, merges it over `DEFAULT_SETTINGS` and returns a validated dict ready for
the selector and panel view. `sample_settings.json` next to this module shows
every key.
"""

from pathlib import Path
import json
from typing import Dict, Any

from timepicker.timevalue import is_well_formed

SAMPLE_SETTINGS = Path(__file__).with_name("sample_settings.json")

DEFAULT_SETTINGS = {
    "min_time": None,
    "value": None,
    "close_on_commit": True,
    "visible_rows": 6,
    "panel_width": 160,
    "row_height": 36,
}

_POSITIVE_INTS = ("visible_rows", "panel_width", "row_height")


def load_settings(path: str = None) -> Dict[str, Any]:
    """Load and validate settings JSON. If `path` is None, return the defaults.

    Unknown keys are rejected so typos do not go unnoticed.
    """
    settings = dict(DEFAULT_SETTINGS)
    if path is None:
        return settings

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Settings file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a JSON object")

    unknown = set(data) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown settings keys: {sorted(unknown)}")

    settings.update(data)

    for key in ("min_time", "value"):
        v = settings[key]
        if v is not None and not isinstance(v, str):
            raise ValueError(f"'{key}' must be an HH:MM string or null")
    # Only the value is range-checked; the minimum is taken as given.
    if settings["value"] is not None and not is_well_formed(settings["value"]):
        raise ValueError(f"'value' is not a valid HH:MM time: {settings['value']!r}")
    if not isinstance(settings["close_on_commit"], bool):
        raise ValueError("'close_on_commit' must be true or false")
    for key in _POSITIVE_INTS:
        v = settings[key]
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ValueError(f"'{key}' must be a positive integer")

    return settings


if __name__ == "__main__":
    # Quick smoke test when run directly
    import sys
    path = sys.argv[1] if len(sys.argv) > 1 else str(SAMPLE_SETTINGS)
    cfg = load_settings(path)
    print("Loaded settings:", cfg)
