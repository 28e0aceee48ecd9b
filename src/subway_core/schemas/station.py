"""Station schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class StationCreate(BaseModel):
    """Request model for creating a station."""

    name: str = Field(..., min_length=1, max_length=255)


class Station(BaseModel):
    """A station response."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "frozen": True}
