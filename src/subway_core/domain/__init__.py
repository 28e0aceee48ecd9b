"""Domain model - sections, line topology, and the line aggregate."""

from subway_core.domain.line import Line
from subway_core.domain.registry import StationDirectory, StationRegistry
from subway_core.domain.section import Section
from subway_core.domain.topology import LineTopology

__all__ = [
    "Line",
    "LineTopology",
    "Section",
    "StationDirectory",
    "StationRegistry",
]
