"""A soft-touch MIDI controller model: encoder, buttons, segment LCD and console."""

__version__ = "0.0.1"

__all__ = [
    "app",
    "console",
    "drivers",
    "events",
    "mapping",
    "midi",
    "segments",
    "slcd",
    "system",
    "ui",
]