"""Scene-based MIDI CC controller front end: models, backend client and panel state."""

__version__ = "0.1.0"