import json, os
import logging

from app.errors import SettingsError

log = logging.getLogger(__name__)

SETTINGS_PATH = "data/settings.json"

DEFAULT_SETTINGS = {
    "tick_ms": 1000,
    "show_debug_panel": False,
    "db_path": "data/quickcheck.db",
}


def ensure_settings_file():
    folder = os.path.dirname(SETTINGS_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    if not os.path.exists(SETTINGS_PATH):
        with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
            json.dump(DEFAULT_SETTINGS, f, indent=2)


def load_settings() -> dict:
    settings = dict(DEFAULT_SETTINGS)
    try:
        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            settings.update(data)
        else:
            log.warning("Settings file %s is not an object, using defaults", SETTINGS_PATH)
    except FileNotFoundError:
        pass
    except (OSError, ValueError) as e:
        log.warning("Failed to read %s: %s", SETTINGS_PATH, e)

    tick = settings["tick_ms"]
    if isinstance(tick, bool) or not isinstance(tick, int) or tick <= 0:
        raise SettingsError(f"tick_ms must be a positive integer, got {tick!r}")
    settings["show_debug_panel"] = bool(settings["show_debug_panel"])
    return settings
