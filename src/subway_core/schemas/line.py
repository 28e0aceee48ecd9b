"""Line and section schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from subway_core.schemas.station import Station

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


# ============================================================================
# Section Schemas
# ============================================================================


class SectionCreate(BaseModel):
    """Request model for adding a section to a line.

    Endpoint and distance rules are enforced by the topology engine, so that
    every rejection surfaces as the same error kind.
    """

    up_station_id: UUID
    down_station_id: UUID
    distance: int


class SectionView(BaseModel):
    """A section as persisted for a line."""

    up_station_id: UUID
    down_station_id: UUID
    distance: int

    model_config = {"from_attributes": True}


# ============================================================================
# Line Schemas
# ============================================================================


class LineCreate(BaseModel):
    """Request model for creating a line with its initial section."""

    name: str = Field(..., min_length=1, max_length=255)
    color: str = Field(..., pattern=COLOR_PATTERN)
    up_station_id: UUID
    down_station_id: UUID
    distance: int


class LineUpdate(BaseModel):
    """Request model for updating a line's metadata."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    color: str | None = Field(default=None, pattern=COLOR_PATTERN)


class Line(BaseModel):
    """A line response without its stations."""

    id: UUID
    name: str
    color: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LineDetail(BaseModel):
    """A line with its stations in path order and its sections."""

    id: UUID
    name: str
    color: str
    stations: list[Station]
    sections: list[SectionView]
    total_distance: int
    created_at: datetime
    updated_at: datetime
