"""SQLAlchemy models for the subway database."""

from subway_core.models.line import Line, Section
from subway_core.models.station import Station

__all__ = [
    "Line",
    "Section",
    "Station",
]
