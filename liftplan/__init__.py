"""Workout generation and volume allocation engine."""

__version__ = "0.1.0"
