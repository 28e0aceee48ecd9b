"""Subway line management core - stations, lines, and sections."""

__version__ = "0.1.0"
