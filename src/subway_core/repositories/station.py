"""Station repository - data access for stations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from subway_core.models import Section as SectionModel
from subway_core.models import Station as StationModel
from subway_core.repositories._utils import ensure_utc
from subway_core.schemas import Station, StationCreate


async def create_station(db: AsyncSession, station_create: StationCreate) -> Station:
    """Create a new station."""
    station = StationModel(name=station_create.name)
    db.add(station)
    await db.commit()
    await db.refresh(station)
    return _to_schema(station)


async def get_station(db: AsyncSession, station_id: UUID) -> Station | None:
    """Get a station by ID."""
    result = await db.execute(select(StationModel).where(StationModel.id == station_id))
    station = result.scalar_one_or_none()
    if station is None:
        return None
    return _to_schema(station)


async def get_stations_by_ids(db: AsyncSession, station_ids: Iterable[UUID]) -> list[Station]:
    """Get every station whose ID is listed. Unknown IDs are skipped."""
    ids = set(station_ids)
    if not ids:
        return []
    result = await db.execute(select(StationModel).where(StationModel.id.in_(ids)))
    return [_to_schema(s) for s in result.scalars().all()]


async def list_stations(db: AsyncSession) -> list[Station]:
    """List all stations, oldest first."""
    result = await db.execute(
        select(StationModel).order_by(StationModel.created_at, StationModel.name)
    )
    return [_to_schema(s) for s in result.scalars().all()]


async def station_name_exists(db: AsyncSession, name: str) -> bool:
    """Check whether a station with this name exists."""
    result = await db.execute(select(StationModel.id).where(StationModel.name == name))
    return result.first() is not None


async def is_station_in_use(db: AsyncSession, station_id: UUID) -> bool:
    """Check whether any line has a section touching this station."""
    result = await db.execute(
        select(SectionModel.id)
        .where(
            or_(
                SectionModel.up_station_id == station_id,
                SectionModel.down_station_id == station_id,
            )
        )
        .limit(1)
    )
    return result.first() is not None


async def delete_station(db: AsyncSession, station_id: UUID) -> bool:
    """Delete a station."""
    result = await db.execute(select(StationModel).where(StationModel.id == station_id))
    station = result.scalar_one_or_none()
    if station is None:
        return False

    await db.delete(station)
    await db.commit()
    return True


def _to_schema(station: StationModel) -> Station:
    """Convert SQLAlchemy model to Pydantic schema."""
    return Station(
        id=station.id,
        name=station.name,
        created_at=ensure_utc(station.created_at),
        updated_at=ensure_utc(station.updated_at),
    )
