"""Endurance asteroid impact scenario engine."""

__version__ = "0.1.0"
