"""Configuration management for gbeep.

Values come from, in order of precedence: command-line flags, environment
variables, the user's config.json, and the built-in defaults below.
"""

import json
import logging
import os

from pytone.parser import DEFAULT_FREQUENCY, DEFAULT_NOTE_DURATION

from .paths import config_dir, config_file, ensure_dir

log = logging.getLogger(__name__)

SOUND_MODES = ("auto", "bell", "native")

DEFAULT_CONFIG = {
    "beep": {
        "frequency": DEFAULT_FREQUENCY,
        "duration": DEFAULT_NOTE_DURATION,
        "sound": "auto",
        "pattern": None,  # e.g. "mario", "s-s-l", "200,100,400"
        "repeat": 1,
        "delay": 0,  # ms before the first tone
    },
}


def _defaults() -> dict:
    return {key: dict(value) for key, value in DEFAULT_CONFIG.items()}


def get_config() -> dict:
    """Load configuration, falling back to defaults when missing or unreadable."""
    cfg_file = config_file()
    merged = _defaults()

    if not cfg_file.exists():
        return merged

    try:
        with open(cfg_file) as f:
            config = json.load(f)
    except (json.JSONDecodeError, IOError):
        log.debug("unreadable config file: %s", cfg_file, exc_info=True)
        return merged

    if not isinstance(config, dict):
        return merged

    # Merge with defaults for any missing keys
    for key, value in config.items():
        if isinstance(value, dict) and key in merged:
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def save_config(config: dict) -> None:
    """Save configuration to file."""
    ensure_dir(config_dir())
    with open(config_file(), "w") as f:
        json.dump(config, f, indent=2)


def init_config() -> bool:
    """Write the default config if none exists. Returns True if written."""
    if config_file().exists():
        return False
    save_config(DEFAULT_CONFIG)
    return True


def _positive_int(value, minimum: int = 1) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= minimum else None


def get_beep_defaults() -> dict:
    """Get validated beep defaults (env vars override the config file).

    Invalid entries are dropped in favour of the built-in default.
    """
    builtin = DEFAULT_CONFIG["beep"]
    beep = get_config().get("beep", {})
    if not isinstance(beep, dict):
        beep = {}

    result = dict(builtin)
    for key, minimum in (("frequency", 1), ("duration", 1), ("repeat", 1), ("delay", 0)):
        if key in beep:
            value = _positive_int(beep[key], minimum)
            if value is None:
                log.debug("ignoring invalid config value %s=%r", key, beep[key])
            else:
                result[key] = value

    sound = os.environ.get("GBEEP_SOUND") or beep.get("sound")
    if sound:
        sound = str(sound).lower()
        if sound in SOUND_MODES:
            result["sound"] = sound
        else:
            log.debug("ignoring unknown sound mode %r", sound)

    pattern = os.environ.get("GBEEP_PATTERN") or beep.get("pattern")
    if isinstance(pattern, str) and pattern.strip():
        result["pattern"] = pattern

    return result
