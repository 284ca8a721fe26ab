#!/usr/bin/env python3
"""Unit tests for sequencer.py - delays, repeats and pattern playback."""

import asyncio
import time
from unittest.mock import patch

import pytest

from gbeep.config import DEFAULT_CONFIG
from gbeep.sequencer import PlaybackConfig, play, play_sync, PAUSE_BETWEEN_REPEATS
from gbeep.sound import DEFAULT_DURATION, DEFAULT_FREQUENCY, play_beep
from pytone.parser import default_events


class Recorder:
    """Records emitted tones and sleeps in order."""

    def __init__(self, result=True):
        self.events = []
        self.result = result

    def emit(self, frequency, duration, mode, verbose):
        self.events.append(("emit", frequency, duration, mode, verbose))
        return self.result

    async def sleep(self, seconds):
        self.events.append(("sleep", seconds))

    def emits(self):
        return [e for e in self.events if e[0] == "emit"]

    def sleeps(self):
        return [e[1] for e in self.events if e[0] == "sleep"]


def run(config, recorder):
    asyncio.run(play(config, emit=recorder.emit, sleep=recorder.sleep))


class TestPlaybackConfig:
    """Tests for PlaybackConfig defaults and validation."""

    def test_defaults(self):
        """Test documented defaults."""
        config = PlaybackConfig()
        assert config.frequency == 1200
        assert config.duration == 300
        assert config.pattern is None
        assert config.repeat == 1
        assert config.delay == 0
        assert config.sound_mode == "auto"
        assert config.verbose is False

    def test_defaults_agree_with_config_and_parser(self):
        """Test the standalone tone matches the config file and parser defaults."""
        config = PlaybackConfig()
        beep = DEFAULT_CONFIG["beep"]
        assert (config.frequency, config.duration) == (beep["frequency"], beep["duration"])
        assert (config.frequency, config.duration) == (DEFAULT_FREQUENCY, DEFAULT_DURATION)
        note = default_events()[0]
        assert (note.frequency, note.duration) == (DEFAULT_FREQUENCY, DEFAULT_DURATION)

    def test_repeat_must_be_positive(self):
        """Test repeat below 1 is rejected."""
        with pytest.raises(ValueError):
            PlaybackConfig(repeat=0)

    def test_delay_not_negative(self):
        """Test negative delay is rejected."""
        with pytest.raises(ValueError):
            PlaybackConfig(delay=-1)

    def test_sound_mode_checked(self):
        """Test unknown sound modes are rejected."""
        with pytest.raises(ValueError):
            PlaybackConfig(sound_mode="loud")

    def test_frozen(self):
        """Test the config is read-only."""
        config = PlaybackConfig()
        with pytest.raises(AttributeError):
            config.repeat = 3


class TestPlainBeep:
    """Tests for playback without a pattern."""

    def test_single_beep(self):
        """Test one tone with the configured values and no waits."""
        rec = Recorder()
        run(PlaybackConfig(frequency=800, duration=200, sound_mode="bell"), rec)
        assert rec.events == [("emit", 800, 200, "bell", False)]

    def test_repeat(self):
        """Test repeats are separated by the fixed gap, with none after the last."""
        rec = Recorder()
        run(PlaybackConfig(repeat=3), rec)
        assert [e[0] for e in rec.events] == ["emit", "sleep", "emit", "sleep", "emit"]
        assert rec.sleeps() == [PAUSE_BETWEEN_REPEATS] * 2

    def test_verbose_only_first_repeat(self):
        """Test only the first of repeated plain beeps is verbose."""
        rec = Recorder()
        run(PlaybackConfig(repeat=3, verbose=True), rec)
        assert [e[4] for e in rec.emits()] == [True, False, False]

    def test_delay_comes_first(self):
        """Test the leading delay happens once, before any tone."""
        rec = Recorder()
        run(PlaybackConfig(delay=50, repeat=2), rec)
        assert rec.events[0] == ("sleep", 0.05)
        assert rec.sleeps() == [0.05, PAUSE_BETWEEN_REPEATS]

    def test_no_delay_no_sleep(self):
        """Test zero delay does not sleep."""
        rec = Recorder()
        run(PlaybackConfig(delay=0), rec)
        assert rec.sleeps() == []

    def test_verbose_delay_message(self, capsys):
        """Test the delay is announced when verbose."""
        run(PlaybackConfig(delay=10, verbose=True), Recorder())
        assert "[WAIT] 10ms" in capsys.readouterr().err

    @patch("gbeep.sound.platform.system", return_value="Linux")
    @patch("gbeep.sound.LinuxEmitter.bell", return_value=True)
    @patch("gbeep.sound.LinuxEmitter.native", return_value=True)
    def test_default_beep_on_linux_uses_beep_utility(self, mock_native, mock_bell, mock_system):
        """Test the default config plays a pitched tone, so auto mode goes native first."""
        play_sync(PlaybackConfig())
        mock_native.assert_called_once_with(DEFAULT_FREQUENCY, DEFAULT_DURATION, False)
        mock_bell.assert_not_called()


class TestPatternPlayback:
    """Tests for playback with a pattern."""

    def test_mario(self):
        """Test mario notes and their pauses."""
        rec = Recorder()
        run(PlaybackConfig(pattern="mario"), rec)
        assert rec.events == [
            ("emit", 659, 100, "auto", False),
            ("sleep", 0.05),
            ("emit", 784, 100, "auto", False),
            ("sleep", 0.05),
            ("emit", 988, 150, "auto", False),
        ]

    def test_pattern_uses_config_frequency(self):
        """Test the config frequency is the pattern default."""
        rec = Recorder()
        run(PlaybackConfig(frequency=900, pattern="200,100"), rec)
        assert [e[1] for e in rec.emits()] == [900, 900]
        assert [e[2] for e in rec.emits()] == [200, 100]

    def test_short_syntax_trailing_pause(self):
        """Test the last short-syntax note keeps its pause."""
        rec = Recorder()
        run(PlaybackConfig(pattern="s-s-l"), rec)
        assert rec.events[-1] == ("sleep", 0.05)
        assert len(rec.emits()) == 3

    def test_pattern_repeat(self):
        """Test the whole pattern is replayed with gaps between."""
        rec = Recorder()
        run(PlaybackConfig(pattern="200,100", repeat=2), rec)
        assert rec.events == [
            ("emit", 1200, 200, "auto", False),
            ("sleep", 0.05),
            ("emit", 1200, 100, "auto", False),
            ("sleep", PAUSE_BETWEEN_REPEATS),
            ("emit", 1200, 200, "auto", False),
            ("sleep", 0.05),
            ("emit", 1200, 100, "auto", False),
        ]

    def test_pattern_verbose_every_note(self, capsys):
        """Test pattern notes keep verbose on every repeat."""
        rec = Recorder()
        run(PlaybackConfig(pattern="mario", repeat=2, verbose=True), rec)
        assert all(e[4] for e in rec.emits())
        assert "[PATTERN] mario (3 notes)" in capsys.readouterr().err

    def test_invalid_pattern_plays_default(self):
        """Test a junk pattern still plays one tone."""
        rec = Recorder()
        run(PlaybackConfig(frequency=700, pattern="invalid"), rec)
        assert rec.events == [("emit", 700, 300, "auto", False)]


class TestFailures:
    """Tests that failed tones never stop playback."""

    def test_failed_emission_continues(self):
        """Test every tone is still attempted when all fail."""
        rec = Recorder(result=False)
        run(PlaybackConfig(pattern="mario", repeat=2), rec)
        assert len(rec.emits()) == 6

    @patch("gbeep.sound.subprocess.run")
    def test_missing_native_player(self, mock_run):
        """Test a missing native utility does not raise out of play()."""
        mock_run.side_effect = FileNotFoundError("afplay")

        def emit(frequency, duration, mode, verbose):
            return play_beep(frequency, duration, mode, verbose, detector=lambda: "macos")

        asyncio.run(play(PlaybackConfig(pattern="50,50", repeat=2), emit=emit))
        assert mock_run.call_count == 4


class TestTiming:
    """Wall-clock tests with real sleeps."""

    @staticmethod
    def _silent(frequency, duration, mode, verbose):
        return True

    def test_repeat_takes_longer(self):
        """Test repeat gaps add up in elapsed time."""
        start = time.monotonic()
        play_sync(PlaybackConfig(repeat=1), emit=self._silent)
        single = time.monotonic() - start

        start = time.monotonic()
        play_sync(PlaybackConfig(repeat=3), emit=self._silent)
        triple = time.monotonic() - start

        assert triple > single
        assert triple >= 2 * PAUSE_BETWEEN_REPEATS * 0.9

    def test_delay_precedes_first_tone(self):
        """Test no tone starts before the leading delay has passed."""
        start = time.monotonic()
        times = []

        def emit(frequency, duration, mode, verbose):
            times.append(time.monotonic() - start)
            return True

        play_sync(PlaybackConfig(delay=50), emit=emit)
        assert len(times) == 1
        assert times[0] >= 0.045
