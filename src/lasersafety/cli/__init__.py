"""Command-line interface for the laser safety engine."""
