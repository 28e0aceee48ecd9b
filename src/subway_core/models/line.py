"""Line and section models.

Sections are plain rows keyed by line id. They carry no ORM relationships to
stations; the topology engine works on station ids only.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from subway_core.database import Base


class Line(Base):
    """A subway line with a unique name and color."""

    __tablename__ = "lines"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Section(Base):
    """A directed edge of a line: up station -> down station."""

    __tablename__ = "sections"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    line_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("lines.id", ondelete="CASCADE"), nullable=False
    )
    up_station_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("stations.id", ondelete="RESTRICT"), nullable=False
    )
    down_station_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("stations.id", ondelete="RESTRICT"), nullable=False
    )
    distance: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_sections_line_id", "line_id"),
        Index("ix_sections_up_station_id", "up_station_id"),
        Index("ix_sections_down_station_id", "down_station_id"),
        UniqueConstraint("line_id", "up_station_id", name="uq_section_line_up"),
        UniqueConstraint("line_id", "down_station_id", name="uq_section_line_down"),
        CheckConstraint("up_station_id != down_station_id", name="ck_section_no_self_ref"),
        CheckConstraint("distance > 0", name="ck_section_positive_distance"),
    )
