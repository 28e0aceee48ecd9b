"""Service layer - the collaborators that drive line topology and persistence."""

from subway_core.services import lines, stations

__all__ = [
    "lines",
    "stations",
]
