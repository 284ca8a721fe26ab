"""Run the wrapped command and report how it exited."""

import logging
import subprocess
import sys
from typing import NamedTuple

log = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    exit_code: int
    success: bool


def run_command(command: str, args: list[str], verbose: bool = False) -> CommandResult:
    """Run *command* with inherited stdio and wait for it.

    Spawn failures (missing executable, permission denied) and signal
    deaths are reported as exit code 1 rather than raised.
    """
    if verbose:
        print(f"[RUN] {' '.join([command, *args])}", file=sys.stderr)

    try:
        # shell on Windows so npm/yarn .cmd shims resolve
        completed = subprocess.run([command, *args], shell=sys.platform == "win32")
    except OSError as e:
        log.debug("could not start %s", command, exc_info=True)
        if verbose:
            print(f"[ERROR] Command error: {e}", file=sys.stderr)
        return CommandResult(1, False)

    exit_code = completed.returncode if completed.returncode >= 0 else 1
    if verbose:
        print(f"[EXIT] Command exited with code: {exit_code}", file=sys.stderr)
    return CommandResult(exit_code, exit_code == 0)
