"""Moodwave: music discovery and playlist backend."""

__version__ = "0.1.0"
