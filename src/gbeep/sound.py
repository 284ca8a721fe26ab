"""Emit a single beep using whatever the current OS offers.

Every entry point here returns a bool and never raises: a notification
must not break the command it is reporting on.
"""

import logging
import platform
import subprocess
import sys
from typing import Callable

from pytone.parser import DEFAULT_FREQUENCY
from pytone.parser import DEFAULT_NOTE_DURATION as DEFAULT_DURATION
from pytone.synthesis import write_tone_file

from .paths import tone_file

log = logging.getLogger(__name__)

WINDOWS = "windows"
MACOS = "macos"
LINUX = "linux"

# afplay volume range is 0-2
MAC_VOLUME = 1.0
MAC_RATE = 1


def detect_os() -> str:
    """Return "windows", "macos" or "linux" for the running system."""
    system = platform.system()
    if system == "Windows":
        return WINDOWS
    if system == "Darwin":
        return MACOS
    return LINUX


class SoundEmitter:
    """Base emitter. Native playback is just the terminal bell here."""

    name = "generic"
    # Whether the terminal bell is a usable cue on this platform
    bell_is_audible = True

    def bell(self, verbose: bool = False) -> bool:
        """Ring the terminal bell."""
        try:
            sys.stdout.write("\a")
            sys.stdout.flush()
        except (OSError, ValueError) as e:
            log.debug("terminal bell failed: %s", e)
            return False
        if verbose:
            print("[BELL] Using terminal bell", file=sys.stderr)
        return True

    def native(self, frequency: int, duration: int, verbose: bool = False) -> bool:
        return self.bell(verbose)

    def emit(
        self,
        frequency: int | None = None,
        duration: int | None = None,
        mode: str = "auto",
        verbose: bool = False,
    ) -> bool:
        """Play one tone in the given sound mode.

        Args:
            frequency: Tone frequency in Hz (None for a plain beep)
            duration: Tone duration in ms (None for a plain beep)
            mode: "auto", "bell" or "native"
            verbose: Report the strategy used on stderr

        Returns:
            True if something was played
        """
        simple = frequency is None and duration is None
        frequency = frequency or DEFAULT_FREQUENCY
        duration = duration or DEFAULT_DURATION

        if mode == "native":
            return self.native(frequency, duration, verbose)

        if not self.bell_is_audible:
            return self.native(frequency, duration, verbose)

        if mode == "bell":
            return self.bell(verbose)

        # auto: a plain beep can be a bell, anything with pitch needs native
        if simple and self.bell(verbose):
            return True
        return self.native(frequency, duration, verbose)


class WindowsEmitter(SoundEmitter):
    """Console beep through winsound, no files involved."""

    name = WINDOWS
    bell_is_audible = False

    def native(self, frequency: int, duration: int, verbose: bool = False) -> bool:
        try:
            import winsound
        except ImportError:
            log.debug("winsound unavailable")
            return False

        try:
            winsound.Beep(frequency, duration)
        except (RuntimeError, ValueError) as e:
            log.debug("winsound.Beep failed: %s", e)
            if verbose:
                print(f"[ERROR] Console beep failed: {e}", file=sys.stderr)
            return False

        if verbose:
            print(f"[NATIVE] Windows: console beep ({frequency}Hz, {duration}ms)", file=sys.stderr)
        return True


class MacEmitter(SoundEmitter):
    """Synthesize a WAV and play it with afplay."""

    name = MACOS
    bell_is_audible = False

    def native(self, frequency: int, duration: int, verbose: bool = False) -> bool:
        path = tone_file(frequency, duration)
        try:
            write_tone_file(frequency, duration, path)
            subprocess.run(
                ["afplay", str(path), "-v", str(MAC_VOLUME), "-r", str(MAC_RATE)],
                check=True,
            )
        except subprocess.CalledProcessError as e:
            if verbose:
                print(f"[ERROR] afplay failed: {e}", file=sys.stderr)
            return False
        except FileNotFoundError:
            if verbose:
                print("[ERROR] Audio player not found: afplay", file=sys.stderr)
            return False
        except OSError as e:
            log.debug("could not write tone file %s: %s", path, e)
            return False
        finally:
            try:
                path.unlink()
            except OSError:
                pass

        if verbose:
            print(f"[NATIVE] macOS: afplay ({frequency}Hz, {duration}ms)", file=sys.stderr)
        return True


class LinuxEmitter(SoundEmitter):
    """PC speaker via the `beep` utility, terminal bell otherwise."""

    name = LINUX

    def native(self, frequency: int, duration: int, verbose: bool = False) -> bool:
        try:
            subprocess.run(
                ["beep", "-f", str(frequency), "-l", str(duration)],
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (subprocess.CalledProcessError, OSError) as e:
            log.debug("beep utility failed, using bell: %s", e)
            return self.bell(verbose)

        if verbose:
            print(f"[NATIVE] Linux: beep command ({frequency}Hz, {duration}ms)", file=sys.stderr)
        return True


EMITTERS: dict[str, type[SoundEmitter]] = {
    WINDOWS: WindowsEmitter,
    MACOS: MacEmitter,
    LINUX: LinuxEmitter,
}


def get_emitter(os_name: str | None = None) -> SoundEmitter:
    """Get the emitter for *os_name* (detected when None)."""
    if os_name is None:
        os_name = detect_os()
    return EMITTERS.get(os_name, SoundEmitter)()


def play_beep(
    frequency: int | None = None,
    duration: int | None = None,
    mode: str = "auto",
    verbose: bool = False,
    detector: Callable[[], str] = detect_os,
) -> bool:
    """Play a beep. Returns True on success, False on any failure."""
    try:
        emitter = get_emitter(detector())
        log.debug("%s emitter, mode=%s", emitter.name, mode)
        return emitter.emit(frequency, duration, mode, verbose)
    except Exception as e:
        log.debug("beep failed", exc_info=True)
        if verbose:
            print(f"[ERROR] Beep failed: {e}", file=sys.stderr)
        return False
