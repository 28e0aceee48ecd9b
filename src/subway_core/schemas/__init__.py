"""Pydantic schemas for service request/response models."""

from subway_core.schemas.line import (
    Line,
    LineCreate,
    LineDetail,
    LineUpdate,
    SectionCreate,
    SectionView,
)
from subway_core.schemas.station import Station, StationCreate

__all__ = [
    "Line",
    "LineCreate",
    "LineDetail",
    "LineUpdate",
    "SectionCreate",
    "SectionView",
    "Station",
    "StationCreate",
]
