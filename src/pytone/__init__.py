"""pytone - Beep patterns and sine tone synthesis."""

from .parser import (
    ToneEvent,
    parse_pattern,
    default_events,
    PRESETS,
    SHORT_DURATIONS,
    DEFAULT_FREQUENCY,
    DEFAULT_NOTE_DURATION,
    NOTE_PAUSE,
)
from .synthesis import generate_sine, write_wav, write_tone_file, SAMPLE_RATE

__version__ = "0.1.0"
__all__ = [
    "ToneEvent",
    "parse_pattern",
    "default_events",
    "PRESETS",
    "SHORT_DURATIONS",
    "DEFAULT_FREQUENCY",
    "DEFAULT_NOTE_DURATION",
    "NOTE_PAUSE",
    "generate_sine",
    "write_wav",
    "write_tone_file",
    "SAMPLE_RATE",
]
