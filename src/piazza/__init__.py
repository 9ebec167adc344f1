"""Piazza: time-limited topic posts with likes, dislikes and comments."""

__version__ = "1.0.0"
