"""Play a beep configuration: leading delay, repeats, and patterns.

Waits are asyncio sleeps and each tone is emitted in a worker thread, so
the event loop stays free while a player subprocess runs.
"""

import asyncio
import sys
from dataclasses import dataclass
from typing import Awaitable, Callable

from pytone.parser import ToneEvent, parse_pattern

from .config import SOUND_MODES
from .sound import DEFAULT_DURATION, DEFAULT_FREQUENCY, play_beep

# Gap between repeats
PAUSE_BETWEEN_REPEATS = 0.2


@dataclass(frozen=True)
class PlaybackConfig:
    """What to play for one request. Durations and delay are in ms."""

    frequency: int = DEFAULT_FREQUENCY
    duration: int = DEFAULT_DURATION
    pattern: str | None = None
    repeat: int = 1
    delay: int = 0
    sound_mode: str = "auto"
    verbose: bool = False

    def __post_init__(self):
        if self.repeat < 1:
            raise ValueError("repeat must be at least 1")
        if self.delay < 0:
            raise ValueError("delay cannot be negative")
        if self.sound_mode not in SOUND_MODES:
            raise ValueError(f"unknown sound mode: {self.sound_mode}")


Emit = Callable[..., bool]
Sleep = Callable[[float], Awaitable[None]]


async def _play_note(note: ToneEvent, mode: str, verbose: bool, emit: Emit, sleep: Sleep) -> None:
    await asyncio.to_thread(emit, note.frequency, note.duration, mode, verbose)
    if note.pause:
        await sleep(note.pause / 1000)


async def _play_pattern(
    pattern: str,
    frequency: int,
    mode: str,
    verbose: bool,
    emit: Emit,
    sleep: Sleep,
) -> None:
    notes = parse_pattern(pattern, frequency)
    if verbose:
        print(f"[PATTERN] {pattern} ({len(notes)} notes)", file=sys.stderr)

    for note in notes:
        await _play_note(note, mode, verbose, emit, sleep)


async def play(
    config: PlaybackConfig,
    emit: Emit = play_beep,
    sleep: Sleep = asyncio.sleep,
) -> None:
    """Play *config* to completion.

    Args:
        config: What to play
        emit: Called as emit(frequency, duration, mode, verbose) per tone
        sleep: Awaitable sleep taking seconds
    """
    verbose = config.verbose

    if config.delay > 0:
        if verbose:
            print(f"[WAIT] {config.delay}ms before beep", file=sys.stderr)
        await sleep(config.delay / 1000)

    for i in range(config.repeat):
        if config.repeat > 1 and verbose:
            print(f"[BEEP] {i + 1}/{config.repeat}", file=sys.stderr)

        if config.pattern:
            await _play_pattern(
                config.pattern, config.frequency, config.sound_mode, verbose, emit, sleep
            )
        else:
            # Only report the strategy for the first of a run of identical beeps
            note = ToneEvent(config.frequency, config.duration)
            await _play_note(note, config.sound_mode, verbose and i == 0, emit, sleep)

        if i < config.repeat - 1:
            await sleep(PAUSE_BETWEEN_REPEATS)


def play_sync(config: PlaybackConfig, emit: Emit = play_beep) -> None:
    """Run play() on a fresh event loop."""
    asyncio.run(play(config, emit=emit))
