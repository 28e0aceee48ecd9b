"""Station service - uniqueness and reference checks around the station repository."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from subway_core.exceptions import DuplicateError, NotFoundError, ValidationError
from subway_core.repositories import station as station_repo
from subway_core.schemas import Station, StationCreate

logger = logging.getLogger(__name__)


async def create_station(db: AsyncSession, station_create: StationCreate) -> Station:
    """Create a station. Names are unique."""
    if await station_repo.station_name_exists(db, station_create.name):
        raise DuplicateError(f"Station name '{station_create.name}' already exists")
    try:
        station = await station_repo.create_station(db, station_create)
    except IntegrityError as exc:
        # Lost a race against a concurrent insert of the same name
        await db.rollback()
        logger.warning(f"Station insert rejected by database: {exc.orig}")
        raise DuplicateError(f"Station name '{station_create.name}' already exists") from exc
    logger.info(f"Created station {station.id} ({station.name})")
    return station


async def list_stations(db: AsyncSession) -> list[Station]:
    return await station_repo.list_stations(db)


async def get_station(db: AsyncSession, station_id: UUID) -> Station:
    """Get a station by ID."""
    station = await station_repo.get_station(db, station_id)
    if station is None:
        raise NotFoundError(f"Station {station_id} not found")
    return station


async def delete_station(db: AsyncSession, station_id: UUID) -> None:
    """Delete a station that no line passes through."""
    await get_station(db, station_id)
    if await station_repo.is_station_in_use(db, station_id):
        raise ValidationError(f"Station {station_id} is still part of a line")
    await station_repo.delete_station(db, station_id)
    logger.info(f"Deleted station {station_id}")
