"""Data access layer for stations, lines, and sections."""

from subway_core.repositories import line, station

__all__ = [
    "line",
    "station",
]
