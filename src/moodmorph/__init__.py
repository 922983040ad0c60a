"""MoodMorph — a local, multi-profile emotion and behaviour journal."""

__version__ = "1.0.0"
