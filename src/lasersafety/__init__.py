"""Laser safety exposure limit engine."""

__version__ = "0.1.0"
