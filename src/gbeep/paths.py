"""Centralized path management for gbeep.

All path functions (not constants) so GBEEP_DIR is checked at call time.
When GBEEP_DIR is set, everything lives under it.
Otherwise, platformdirs and the system temp directory decide.
"""

import os
import tempfile
from pathlib import Path

from platformdirs import user_config_dir

_APP_NAME = "gbeep"


def _override_root() -> Path | None:
    """Return the GBEEP_DIR override path, or None."""
    val = os.environ.get("GBEEP_DIR")
    return Path(val) if val else None


# -- Config ------------------------------------------------------------------

def config_dir() -> Path:
    """Config directory (config.json)."""
    root = _override_root()
    if root:
        return root / "config"
    return Path(user_config_dir(_APP_NAME))


def config_file() -> Path:
    return config_dir() / "config.json"


# -- Temporary tones ---------------------------------------------------------

def tone_dir() -> Path:
    """Where synthesized tone files are written before playback."""
    root = _override_root()
    if root:
        return root / "tmp"
    return Path(tempfile.gettempdir())


def tone_file(frequency: int, duration: int) -> Path:
    """Temp WAV for one tone, named by its parameters."""
    return tone_dir() / f"gbeep_{frequency}_{duration}.wav"


# -- Helpers -----------------------------------------------------------------

def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if missing, then return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path
