"""Chat-completions adapter in front of a speech-to-text backend."""

__version__ = "0.1.0"
