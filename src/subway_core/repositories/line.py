"""Line repository - data access for lines and their sections."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from subway_core.domain import Section
from subway_core.models import Line as LineModel
from subway_core.models import Section as SectionModel
from subway_core.repositories._utils import ensure_utc
from subway_core.schemas import Line, LineUpdate


# ============================================================================
# Line Operations
# ============================================================================


async def create_line(
    db: AsyncSession, line_id: UUID, name: str, color: str, sections: list[Section]
) -> Line:
    """Create a line together with its initial sections in one commit."""
    line = LineModel(id=line_id, name=name, color=color)
    db.add(line)
    await db.flush()
    db.add_all(_section_models(line.id, sections))
    await db.commit()
    await db.refresh(line)
    return _line_to_schema(line)


async def get_line(db: AsyncSession, line_id: UUID) -> Line | None:
    """Get a line by ID."""
    result = await db.execute(select(LineModel).where(LineModel.id == line_id))
    line = result.scalar_one_or_none()
    if line is None:
        return None
    return _line_to_schema(line)


async def list_lines(db: AsyncSession) -> list[Line]:
    """List all lines, oldest first."""
    result = await db.execute(select(LineModel).order_by(LineModel.created_at, LineModel.name))
    return [_line_to_schema(l) for l in result.scalars().all()]


async def line_name_exists(
    db: AsyncSession, name: str, exclude_line_id: UUID | None = None
) -> bool:
    """Check whether another line already uses this name."""
    query = select(LineModel.id).where(LineModel.name == name)
    if exclude_line_id is not None:
        query = query.where(LineModel.id != exclude_line_id)
    result = await db.execute(query)
    return result.first() is not None


async def line_color_exists(
    db: AsyncSession, color: str, exclude_line_id: UUID | None = None
) -> bool:
    """Check whether another line already uses this color."""
    query = select(LineModel.id).where(LineModel.color == color)
    if exclude_line_id is not None:
        query = query.where(LineModel.id != exclude_line_id)
    result = await db.execute(query)
    return result.first() is not None


async def update_line(db: AsyncSession, line_id: UUID, line_update: LineUpdate) -> Line | None:
    """Update a line's name and/or color."""
    result = await db.execute(select(LineModel).where(LineModel.id == line_id))
    line = result.scalar_one_or_none()
    if line is None:
        return None

    if line_update.name is not None:
        line.name = line_update.name
    if line_update.color is not None:
        line.color = line_update.color

    await db.commit()
    await db.refresh(line)
    return _line_to_schema(line)


async def delete_line(db: AsyncSession, line_id: UUID) -> bool:
    """Delete a line and all of its sections."""
    result = await db.execute(select(LineModel).where(LineModel.id == line_id))
    line = result.scalar_one_or_none()
    if line is None:
        return False

    # Explicit so SQLite (no FK enforcement by default) cascades too
    await db.execute(delete(SectionModel).where(SectionModel.line_id == line_id))
    await db.delete(line)
    await db.commit()
    return True


# ============================================================================
# Section Operations
# ============================================================================


async def list_sections_by_line(db: AsyncSession, line_id: UUID) -> list[Section]:
    """Load the section records of a line (unordered)."""
    result = await db.execute(select(SectionModel).where(SectionModel.line_id == line_id))
    return [_section_to_domain(s) for s in result.scalars().all()]


async def replace_sections(db: AsyncSession, line_id: UUID, sections: list[Section]) -> None:
    """Replace a line's whole section set in a single commit."""
    # Core DELETE runs immediately, ahead of the flushed INSERTs, so the
    # per-line unique constraints never see old and new rows together.
    await db.execute(delete(SectionModel).where(SectionModel.line_id == line_id))
    db.add_all(_section_models(line_id, sections))
    await db.execute(
        update(LineModel).where(LineModel.id == line_id).values(updated_at=datetime.now(UTC))
    )
    await db.commit()


# ============================================================================
# Converters
# ============================================================================


def _section_models(line_id: UUID, sections: list[Section]) -> list[SectionModel]:
    return [
        SectionModel(
            line_id=line_id,
            up_station_id=s.up_station_id,
            down_station_id=s.down_station_id,
            distance=s.distance,
        )
        for s in sections
    ]


def _section_to_domain(section: SectionModel) -> Section:
    return Section(section.up_station_id, section.down_station_id, section.distance)


def _line_to_schema(line: LineModel) -> Line:
    """Convert SQLAlchemy model to Pydantic schema."""
    return Line(
        id=line.id,
        name=line.name,
        color=line.color,
        created_at=ensure_utc(line.created_at),
        updated_at=ensure_utc(line.updated_at),
    )
