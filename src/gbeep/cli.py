#!/usr/bin/env python3
"""gbeep - Play a beep on demand or when a command finishes."""

import argparse
import logging
import os
import re
import sys

from . import __version__
from .command import CommandResult, run_command
from .config import SOUND_MODES, get_beep_defaults, init_config
from .paths import config_file
from .sequencer import PlaybackConfig, play_sync
from .sound import detect_os

EPILOG = """\
examples:
  gbeep                              play the default beep
  gbeep 800 200                      play 800Hz for 200ms
  gbeep -f 1000 -d 500               play 1000Hz for 500ms
  gbeep --pattern mario              play the Mario coin sound
  gbeep --pattern "s-s-l"            short-short-long
  gbeep --pattern "200,100,400"      three beeps with these durations (ms)
  gbeep -r 3                         beep three times
  gbeep --delay 1000                 wait one second, then beep
  gbeep -- npm test                  run npm test, beep when it finishes
  gbeep --success -- make build      beep only if the build succeeds
  gbeep --error -- pytest            beep only if the tests fail
  gbeep -v --pattern mario -- ls     verbose, with a pattern
"""

HELP_HINT = "For help: gbeep --help"

# "FREQ DURATION" shortcut; ASCII digits only
_ASCII_INT = re.compile(r"[0-9]+")


class UsageError(Exception):
    """Invalid command-line arguments."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message):
        raise UsageError(message)


def _int_arg(label: str, minimum: int = 1):
    """Build an argparse type that accepts integers >= *minimum*."""

    def convert(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            number = None
        if number is None or number < minimum:
            if minimum > 0:
                raise argparse.ArgumentTypeError(f"{label} must be a positive number.")
            raise argparse.ArgumentTypeError(f"{label} cannot be negative.")
        return number

    return convert


def _sound_mode(value: str) -> str:
    if value not in SOUND_MODES:
        raise argparse.ArgumentTypeError('Sound mode must be "auto", "bell", or "native".')
    return value


def build_parser(defaults: dict | None = None) -> argparse.ArgumentParser:
    """Build the argument parser, seeding defaults from the user's config."""
    if defaults is None:
        defaults = get_beep_defaults()

    parser = _ArgumentParser(
        prog="gbeep",
        description="Play a sound when a command finishes or on demand",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "args", nargs="*", metavar="FREQ DURATION | COMMAND",
        help="Optional frequency and duration, or a command to run",
    )
    parser.add_argument(
        "-f", "--frequency", type=_int_arg("Frequency"), default=defaults["frequency"],
        metavar="HZ", help=f"Beep frequency (default: {defaults['frequency']})",
    )
    parser.add_argument(
        "-d", "--duration", type=_int_arg("Duration"), default=defaults["duration"],
        metavar="MS", help=f"Beep duration in milliseconds (default: {defaults['duration']})",
    )
    parser.add_argument(
        "-s", "--sound", type=_sound_mode, default=defaults["sound"], metavar="MODE",
        help=f"Sound mode: auto | bell | native (default: {defaults['sound']})",
    )
    parser.add_argument(
        "--pattern", default=defaults["pattern"],
        help='Beep pattern (e.g. "s-s-l", "mario", "200,100,400")',
    )
    parser.add_argument(
        "-r", "--repeat", type=_int_arg("Repeat"), default=defaults["repeat"], metavar="N",
        help="Repeat the beep N times",
    )
    parser.add_argument(
        "--delay", type=_int_arg("Delay", minimum=0), default=defaults["delay"], metavar="MS",
        help="Delay before the beep in milliseconds",
    )
    parser.add_argument("--success", action="store_true", help="Beep only on successful exit")
    parser.add_argument("--error", action="store_true", help="Beep only on error exit")
    parser.add_argument("--silent", action="store_true", help="Suppress all output (sound only)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--success-freq", type=_int_arg("Success frequency"), metavar="HZ",
        help="Frequency for the success beep",
    )
    parser.add_argument(
        "--success-duration", type=_int_arg("Success duration"), metavar="MS",
        help="Duration for the success beep",
    )
    parser.add_argument(
        "--error-freq", type=_int_arg("Error frequency"), metavar="HZ",
        help="Frequency for the error beep",
    )
    parser.add_argument(
        "--error-duration", type=_int_arg("Error duration"), metavar="MS",
        help="Duration for the error beep",
    )
    parser.add_argument(
        "--init-config", action="store_true",
        help="Write a default config file and exit",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def split_command(argv: list[str]) -> tuple[list[str], list[str] | None]:
    """Split argv at the first "--" into (options, command).

    The command is None when there is no "--". A doubled "-- --" is
    accepted and collapses to one separator.
    """
    if "--" not in argv:
        return argv, None
    index = argv.index("--")
    command = argv[index + 1:]
    if command[:1] == ["--"]:
        command = command[1:]
    return argv[:index], command


def parse_args(argv: list[str], defaults: dict | None = None) -> argparse.Namespace:
    """Parse argv into a namespace with resolved frequency, duration and command.

    Raises:
        UsageError: On unknown options or invalid values
    """
    option_argv, command = split_command(argv)
    args = build_parser(defaults).parse_args(option_argv)

    positionals = list(args.args)
    if len(positionals) >= 2 and all(_ASCII_INT.fullmatch(p) for p in positionals[:2]):
        args.frequency = int(positionals[0])
        args.duration = int(positionals[1])
        positionals = positionals[2:]

    if command is None and positionals:
        command = positionals
    args.command = command
    return args


def is_verbose(args: argparse.Namespace) -> bool:
    return args.verbose and not args.silent


def print_summary(args: argparse.Namespace) -> None:
    """Describe what is about to happen on stderr."""
    print(f"[INFO] OS: {detect_os()}", file=sys.stderr)
    print(f"[INFO] Sound mode: {args.sound}", file=sys.stderr)
    if args.pattern:
        print(f"[INFO] Pattern: {args.pattern}", file=sys.stderr)
    if args.repeat > 1:
        print(f"[INFO] Repeat: {args.repeat}x", file=sys.stderr)
    if args.delay > 0:
        print(f"[INFO] Delay: {args.delay}ms", file=sys.stderr)


def playback_config(args: argparse.Namespace, result: CommandResult | None = None) -> PlaybackConfig:
    """Build the playback config, applying success/error overrides for *result*."""
    frequency = args.frequency
    duration = args.duration
    pattern = args.pattern

    if result is not None:
        if result.success and args.success and not pattern:
            pattern = "mario"

        if result.success and (args.success_freq or args.success_duration):
            frequency = args.success_freq or frequency
            duration = args.success_duration or duration
        elif not result.success and (args.error_freq or args.error_duration):
            frequency = args.error_freq or frequency
            duration = args.error_duration or duration

    return PlaybackConfig(
        frequency=frequency,
        duration=duration,
        pattern=pattern,
        repeat=args.repeat,
        delay=args.delay,
        sound_mode=args.sound,
        verbose=is_verbose(args),
    )


def should_beep(args: argparse.Namespace, result: CommandResult) -> bool:
    """Apply the --success / --error filters to a command result."""
    if args.success and not result.success:
        return False
    if args.error and result.success:
        return False
    return True


def cmd_beep(args: argparse.Namespace) -> int:
    """Standalone mode: just beep."""
    if is_verbose(args):
        print_summary(args)
    play_sync(playback_config(args))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Command mode: run the command, maybe beep, return its exit code."""
    if not args.command:
        if not args.silent:
            print('Error: No command specified after "--".', file=sys.stderr)
            print("Example: gbeep -- npm test", file=sys.stderr)
            print(HELP_HINT, file=sys.stderr)
        return 1

    if is_verbose(args):
        print_summary(args)

    command, *command_args = args.command
    result = run_command(command, command_args, verbose=is_verbose(args))

    if should_beep(args, result):
        play_sync(playback_config(args, result))

    return result.exit_code


def cmd_init_config(args: argparse.Namespace) -> int:
    """Write the default config file."""
    if init_config():
        print(f"Wrote {config_file()}", file=sys.stderr)
    else:
        print(f"Config already exists: {config_file()}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("GBEEP_DEBUG") else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(HELP_HINT, file=sys.stderr)
        return 1

    if args.init_config:
        return cmd_init_config(args)

    if args.command is not None:
        return cmd_run(args)

    return cmd_beep(args)


if __name__ == "__main__":
    sys.exit(main())
