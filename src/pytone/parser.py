"""Parse beep patterns into tone events.

Supported forms:
    - Preset names: "mario", "success", "error", "warning"
    - Short syntax: "s-s-l" (short-short-long), "s-300-long"
    - Comma-separated durations in ms: "200,100,400"

Parsing never raises. Anything unusable becomes a single default note.
"""

import re
from dataclasses import dataclass

DEFAULT_FREQUENCY = 1200
DEFAULT_NOTE_DURATION = 300
NOTE_PAUSE = 50

# ASCII digits only
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

SHORT_DURATIONS = {
    "s": 200,
    "short": 200,
    "m": 300,
    "medium": 300,
    "l": 500,
    "long": 500,
}

# Unknown short-syntax tokens fall back to a short note
_SHORT_FALLBACK = SHORT_DURATIONS["short"]


@dataclass(frozen=True)
class ToneEvent:
    """One note: frequency in Hz, duration in ms, optional pause after it in ms."""

    frequency: int
    duration: int
    pause: int | None = None


def _mario(frequency: int) -> list[ToneEvent]:
    # E5 -> G5 -> B5 coin sound, ignores the default frequency
    return [
        ToneEvent(659, 100, 50),
        ToneEvent(784, 100, 50),
        ToneEvent(988, 150),
    ]


def _success(frequency: int) -> list[ToneEvent]:
    return [
        ToneEvent(frequency, 200, 50),
        ToneEvent(int(frequency * 1.2), 200),
    ]


def _error(frequency: int) -> list[ToneEvent]:
    return [
        ToneEvent(frequency, 200, 100),
        ToneEvent(frequency, 200, 100),
        ToneEvent(frequency, 500),
    ]


def _warning(frequency: int) -> list[ToneEvent]:
    return [
        ToneEvent(frequency, 300, 100),
        ToneEvent(int(frequency * 0.8), 300),
    ]


PRESETS = {
    "mario": _mario,
    "success": _success,
    "error": _error,
    "warning": _warning,
}


def _parse_int(text: str) -> int | None:
    """Parse a leading integer the way a lenient CLI would ("120ms" -> 120)."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def default_events(frequency: int = DEFAULT_FREQUENCY) -> list[ToneEvent]:
    """The single-note fallback sequence."""
    return [ToneEvent(frequency, DEFAULT_NOTE_DURATION)]


def parse_short_syntax(pattern: str, frequency: int) -> list[ToneEvent]:
    """Parse "s-m-l" style patterns. Every note, the last included, gets a pause."""
    events = []
    for token in pattern.split("-"):
        token = token.strip()
        duration = SHORT_DURATIONS.get(token)
        if duration is None:
            duration = _parse_int(token)
            if duration is None:
                duration = _SHORT_FALLBACK
        events.append(ToneEvent(frequency, duration, NOTE_PAUSE))
    return events


def parse_duration_list(pattern: str, frequency: int) -> list[ToneEvent]:
    """Parse "200,100,400" style patterns, dropping non-positive or junk entries."""
    durations = []
    for token in pattern.split(","):
        duration = _parse_int(token)
        if duration is not None and duration > 0:
            durations.append(duration)

    if not durations:
        return default_events(frequency)

    events = [ToneEvent(frequency, d, NOTE_PAUSE) for d in durations[:-1]]
    events.append(ToneEvent(frequency, durations[-1]))
    return events


def parse_pattern(pattern: str, default_frequency: int = DEFAULT_FREQUENCY) -> list[ToneEvent]:
    """Turn a pattern string into an ordered list of tone events.

    Args:
        pattern: Preset name, short syntax, or comma-separated durations
        default_frequency: Frequency used by every note the pattern doesn't pin

    Returns:
        At least one ToneEvent. Matching is case-insensitive and ignores
        surrounding whitespace.
    """
    normalized = (pattern or "").strip().lower()

    preset = PRESETS.get(normalized)
    if preset is not None:
        return preset(default_frequency)

    if "-" in normalized and "," not in normalized:
        return parse_short_syntax(normalized, default_frequency)

    return parse_duration_list(normalized, default_frequency)
