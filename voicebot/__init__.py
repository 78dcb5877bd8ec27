"""Voice activity detection, a JSON value model with writers and paths, and wake-phrase checks."""

__version__ = "0.1.0"