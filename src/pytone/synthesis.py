"""Sine tone synthesis for beep playback."""

from pathlib import Path

import numpy as np
from scipy.io import wavfile

SAMPLE_RATE = 44100
AMPLITUDE = 0.3


def sample_count(duration_ms: int, sample_rate: int = SAMPLE_RATE) -> int:
    """Number of samples needed to cover *duration_ms* milliseconds."""
    return max(0, (sample_rate * duration_ms) // 1000)


def generate_sine(
    frequency: float,
    duration_ms: int,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = AMPLITUDE,
) -> np.ndarray:
    """Generate a plain sine tone as 16-bit PCM samples.

    No envelope is applied: the tone starts and stops at full amplitude,
    which is what a terminal beep sounds like.

    Args:
        frequency: Tone frequency in Hz
        duration_ms: Duration in milliseconds
        sample_rate: Sample rate in Hz
        amplitude: Peak level as a fraction of full scale

    Returns:
        Mono int16 sample array
    """
    n_samples = sample_count(duration_ms, sample_rate)
    t = np.arange(n_samples) / sample_rate
    wave = np.sin(2 * np.pi * frequency * t)
    return np.floor(wave * amplitude * 32767).astype(np.int16)


def write_wav(samples: np.ndarray, path: Path, sample_rate: int = SAMPLE_RATE) -> Path:
    """Write mono 16-bit samples to a WAV file and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    wavfile.write(str(path), sample_rate, samples.astype(np.int16))
    return path


def write_tone_file(
    frequency: float,
    duration_ms: int,
    path: Path,
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    """Synthesize a tone straight to *path*."""
    return write_wav(generate_sine(frequency, duration_ms, sample_rate), path, sample_rate)
