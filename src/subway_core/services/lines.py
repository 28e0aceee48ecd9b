"""Line service - load, mutate, and persist line topologies.

Each section mutation runs as one unit: load the line's sections, let the
topology engine compute the new section set, then replace the stored set in a
single commit. Mutations on the same line are serialized with a per-line lock.
"""

import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from subway_core import domain
from subway_core.exceptions import DuplicateError, NotFoundError, ValidationError
from subway_core.repositories import line as line_repo
from subway_core.repositories import station as station_repo
from subway_core.schemas import (
    Line,
    LineCreate,
    LineDetail,
    LineUpdate,
    SectionCreate,
    SectionView,
)

logger = logging.getLogger(__name__)

# Entries live only while some task holds or waits for the lock.
_line_locks: dict[UUID, asyncio.Lock] = {}
_lock_users: Counter[UUID] = Counter()


@asynccontextmanager
async def line_lock(line_id: UUID) -> AsyncIterator[None]:
    """Serialize section mutations of one line."""
    lock = _line_locks.setdefault(line_id, asyncio.Lock())
    _lock_users[line_id] += 1
    try:
        async with lock:
            yield
    finally:
        _lock_users[line_id] -= 1
        if not _lock_users[line_id]:
            del _lock_users[line_id]
            del _line_locks[line_id]



async def _require_line(db: AsyncSession, line_id: UUID) -> Line:
    """Get a line or raise NotFoundError."""
    line = await line_repo.get_line(db, line_id)
    if line is None:
        raise NotFoundError(f"Line {line_id} not found")
    return line


async def _verify_unique(
    db: AsyncSession,
    name: str | None,
    color: str | None,
    exclude_line_id: UUID | None = None,
) -> None:
    """Raise DuplicateError if another line already has this name or color."""
    if name is not None and await line_repo.line_name_exists(db, name, exclude_line_id):
        raise DuplicateError(f"Line name '{name}' already exists")
    if color is not None and await line_repo.line_color_exists(db, color, exclude_line_id):
        raise DuplicateError(f"Line color '{color}' already exists")


async def _load_directory(
    db: AsyncSession, station_ids: Iterable[UUID], required: Iterable[UUID] = ()
) -> domain.StationDirectory:
    """Snapshot the stations a line needs. Every required ID must exist."""
    wanted = set(station_ids) | set(required)
    directory = domain.StationDirectory(await station_repo.get_stations_by_ids(db, wanted))
    for station_id in required:
        directory.find_station_by_id(station_id)
    return directory


async def _load_aggregate(
    db: AsyncSession, line: Line, required: Iterable[UUID] = ()
) -> domain.Line:
    """Rebuild the line aggregate from its stored sections."""
    topology = domain.LineTopology(await line_repo.list_sections_by_line(db, line.id))
    directory = await _load_directory(db, topology.station_ids, required)
    return domain.Line(
        id=line.id, name=line.name, color=line.color, registry=directory, topology=topology
    )


def _to_detail(line: Line, aggregate: domain.Line) -> LineDetail:
    return LineDetail(
        id=line.id,
        name=line.name,
        color=line.color,
        stations=aggregate.stations(),
        sections=[
            SectionView(
                up_station_id=s.up_station_id,
                down_station_id=s.down_station_id,
                distance=s.distance,
            )
            for s in aggregate.sections
        ],
        total_distance=aggregate.total_distance,
        created_at=line.created_at,
        updated_at=line.updated_at,
    )


async def _persist_sections(db: AsyncSession, aggregate: domain.Line) -> None:
    """Write the aggregate's section set, or delete the line once it has none.

    Any database failure rolls the session back before propagating.
    """
    try:
        if aggregate.is_empty:
            await line_repo.delete_line(db, aggregate.id)
        else:
            await line_repo.replace_sections(db, aggregate.id, aggregate.sections)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"Failed to persist sections for line {aggregate.id}")
        raise


# ============================================================================
# Line Operations
# ============================================================================


async def create_line(db: AsyncSession, line_create: LineCreate) -> LineDetail:
    """Create a line with its initial section."""
    await _verify_unique(db, line_create.name, line_create.color)
    section = domain.Section(
        line_create.up_station_id, line_create.down_station_id, line_create.distance
    )
    directory = await _load_directory(db, (), required=section.stations)

    aggregate = domain.Line.create(
        id=uuid4(),
        name=line_create.name,
        color=line_create.color,
        registry=directory,
        up_station_id=section.up_station_id,
        down_station_id=section.down_station_id,
        distance=section.distance,
    )
    try:
        line = await line_repo.create_line(
            db, aggregate.id, line_create.name, line_create.color, aggregate.sections
        )
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(f"Line insert rejected by database: {exc.orig}")
        raise DuplicateError("Line name or color already exists") from exc

    logger.info(f"Created line {line.id} ({line.name})")
    return _to_detail(line, aggregate)


async def list_lines(db: AsyncSession) -> list[Line]:
    return await line_repo.list_lines(db)


async def get_line(db: AsyncSession, line_id: UUID) -> LineDetail:
    """Get a line with its stations in path order."""
    line = await _require_line(db, line_id)
    aggregate = await _load_aggregate(db, line)
    return _to_detail(line, aggregate)


async def update_line(db: AsyncSession, line_id: UUID, line_update: LineUpdate) -> Line:
    """Rename or recolor a line."""
    await _require_line(db, line_id)
    await _verify_unique(db, line_update.name, line_update.color, exclude_line_id=line_id)
    try:
        updated = await line_repo.update_line(db, line_id, line_update)
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(f"Line update rejected by database: {exc.orig}")
        raise DuplicateError("Line name or color already exists") from exc
    if updated is None:
        raise NotFoundError(f"Line {line_id} not found")
    return updated


async def delete_line(db: AsyncSession, line_id: UUID) -> None:
    """Delete a line together with its sections."""
    async with line_lock(line_id):
        try:
            deleted = await line_repo.delete_line(db, line_id)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception(f"Failed to delete line {line_id}")
            raise
    if not deleted:
        raise NotFoundError(f"Line {line_id} not found")
    logger.info(f"Deleted line {line_id}")


# ============================================================================
# Section Operations
# ============================================================================


async def add_section(
    db: AsyncSession, line_id: UUID, section_create: SectionCreate
) -> LineDetail:
    """Add a section to a line, extending or splitting as needed."""
    async with line_lock(line_id):
        line = await _require_line(db, line_id)
        try:
            section = domain.Section(
                section_create.up_station_id,
                section_create.down_station_id,
                section_create.distance,
            )
            aggregate = await _load_aggregate(db, line, required=section.stations)
            aggregate.add_section(section)
        except (ValidationError, NotFoundError) as exc:
            logger.warning(f"Rejected section for line {line_id}: {exc.message}")
            raise

        await _persist_sections(db, aggregate)
        logger.info(
            f"Added section {section.up_station_id} -> {section.down_station_id} "
            f"({section.distance}) to line {line_id}"
        )
        line = await _require_line(db, line_id)
        return _to_detail(line, aggregate)


async def remove_station(db: AsyncSession, line_id: UUID, station_id: UUID) -> LineDetail | None:
    """Remove a station from a line.

    Returns the updated line, or None when the removal left the line without
    sections and the line was deleted.
    """
    async with line_lock(line_id):
        line = await _require_line(db, line_id)
        aggregate = await _load_aggregate(db, line)
        try:
            aggregate.remove_station(station_id)
        except NotFoundError as exc:
            logger.warning(f"Rejected station removal for line {line_id}: {exc.message}")
            raise

        await _persist_sections(db, aggregate)
        if aggregate.is_empty:
            logger.info(f"Removed last section of line {line_id}; line deleted")
            return None

        logger.info(f"Removed station {station_id} from line {line_id}")
        line = await _require_line(db, line_id)
        return _to_detail(line, aggregate)
