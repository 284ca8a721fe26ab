"""gbeep - Play a sound when a command finishes or on demand."""

__version__ = "1.0.0"
