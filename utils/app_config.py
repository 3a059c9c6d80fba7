"""User preferences for the recurring engine and its reports.

Config lives in ~/.recurring_ledger/config.json. Zero imports from the
services so it can be read before anything else is built.
"""
import json
import os
from pathlib import Path

from utils.constants import DEFAULT_SETTINGS

CONFIG_DIR = Path.home() / ".recurring_ledger"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_setting(key: str):
    """Return the stored value for key, or its default from DEFAULT_SETTINGS."""
    if key not in DEFAULT_SETTINGS:
        raise KeyError(f"Unknown setting: {key}")
    return load_config().get(key, DEFAULT_SETTINGS[key])


def set_setting(key: str, value) -> None:
    """Update one setting and save. None restores the default."""
    if key not in DEFAULT_SETTINGS:
        raise KeyError(f"Unknown setting: {key}")
    config = load_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_config(config)
