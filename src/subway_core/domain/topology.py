"""Line topology engine.

Keeps the sections of a single line as one simple directed path:
1. Adding a section extends the path at either end or splits an existing section
2. Removing a station shortens the path at an end or merges the two sections
   around an interior station
3. Ordering follows down-links from the unique source station

Every mutation builds the full replacement index before swapping it in, so a
rejected request never leaves a partially updated line behind.
"""

import logging
from collections.abc import Iterable
from typing import NoReturn
from uuid import UUID

from subway_core.domain.section import Section
from subway_core.exceptions import InvariantError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class LineTopology:
    """The set of sections of one line, indexed by up and down station."""

    def __init__(self, sections: Iterable[Section] = ()) -> None:
        self._by_up, self._by_down = _index(sections)

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._by_up or station_id in self._by_down

    def __len__(self) -> int:
        return len(self._by_up)

    def __repr__(self) -> str:
        return f"LineTopology(sections={len(self)}, stations={len(self.station_ids)})"

    @property
    def is_empty(self) -> bool:
        return not self._by_up

    @property
    def station_ids(self) -> set[UUID]:
        """All stations on the line, unordered."""
        return set(self._by_up) | set(self._by_down)

    @property
    def source(self) -> UUID | None:
        """The first station of the path, or None for an empty line."""
        if self.is_empty:
            return None
        return self._single_terminus(self._by_up, self._by_down, "source")

    @property
    def sink(self) -> UUID | None:
        """The last station of the path, or None for an empty line."""
        if self.is_empty:
            return None
        return self._single_terminus(self._by_down, self._by_up, "sink")

    @property
    def sections(self) -> list[Section]:
        """Sections in path order, source to sink."""
        return [self._by_up[station_id] for station_id in self.ordered_stations()[:-1]]

    @property
    def total_distance(self) -> int:
        return sum(section.distance for section in self._by_up.values())

    def add_section(self, section: Section) -> None:
        """Attach a section at an open end, or split the section it lands inside.

        Exactly one endpoint must already be on the line (an empty line accepts
        any section as its initial one).
        """
        if self.is_empty:
            self._apply(removed=[], added=[section])
            return

        up, down = section.up_station_id, section.down_station_id
        up_known = up in self
        down_known = down in self

        if up_known and down_known:
            raise ValidationError(
                "Section already connects these stations: both endpoints are on the line"
            )
        if not up_known and not down_known:
            raise NotFoundError(
                "At least one endpoint must already belong to the line"
            )

        if up_known:
            existing = self._by_up.get(up)
            if existing is None:
                # up is the sink: extend at the back
                self._apply(removed=[], added=[section])
                return
            _check_split_distance(section, existing)
            self._apply(
                removed=[existing],
                added=[
                    section,
                    Section(down, existing.down_station_id, existing.distance - section.distance),
                ],
            )
            return

        existing = self._by_down.get(down)
        if existing is None:
            # down is the source: extend at the front
            self._apply(removed=[], added=[section])
            return
        _check_split_distance(section, existing)
        self._apply(
            removed=[existing],
            added=[
                Section(existing.up_station_id, up, existing.distance - section.distance),
                section,
            ],
        )

    def remove_station(self, station_id: UUID) -> None:
        """Drop a station, merging its two sections when it is interior."""
        if station_id not in self:
            raise NotFoundError(f"Station {station_id} is not on this line")

        incoming = self._by_down.get(station_id)
        outgoing = self._by_up.get(station_id)
        removed = [s for s in (incoming, outgoing) if s is not None]

        added = []
        if incoming is not None and outgoing is not None:
            added.append(
                Section(
                    incoming.up_station_id,
                    outgoing.down_station_id,
                    incoming.distance + outgoing.distance,
                )
            )
        self._apply(removed=removed, added=added)

    def ordered_stations(self) -> list[UUID]:
        """Station ids from source to sink."""
        if self.is_empty:
            return []

        start = self._single_terminus(self._by_up, self._by_down, "source")
        expected = len(self.station_ids)
        order = [start]
        seen = {start}
        current = start
        while current in self._by_up:
            current = self._by_up[current].down_station_id
            if current in seen:
                _fail(f"Cycle detected at station {current}")
            seen.add(current)
            order.append(current)

        if len(order) != expected:
            _fail(f"Path reaches {len(order)} of {expected} stations")
        return order

    def _apply(self, removed: list[Section], added: list[Section]) -> None:
        remaining = [s for s in self._by_up.values() if s not in removed]
        self._by_up, self._by_down = _index([*remaining, *added])

    @staticmethod
    def _single_terminus(
        outgoing: dict[UUID, Section], incoming: dict[UUID, Section], label: str
    ) -> UUID:
        candidates = [station_id for station_id in outgoing if station_id not in incoming]
        if len(candidates) != 1:
            _fail(f"Expected exactly one {label} station, found {len(candidates)}")
        return candidates[0]


def _index(sections: Iterable[Section]) -> tuple[dict[UUID, Section], dict[UUID, Section]]:
    """Build the up/down lookup tables, rejecting any branching."""
    by_up: dict[UUID, Section] = {}
    by_down: dict[UUID, Section] = {}
    for section in sections:
        if section.up_station_id in by_up:
            _fail(f"Station {section.up_station_id} has two outgoing sections")
        if section.down_station_id in by_down:
            _fail(f"Station {section.down_station_id} has two incoming sections")
        by_up[section.up_station_id] = section
        by_down[section.down_station_id] = section
    return by_up, by_down


def _check_split_distance(section: Section, existing: Section) -> None:
    if section.distance >= existing.distance:
        raise ValidationError(
            f"Distance {section.distance} exceeds section length {existing.distance}"
        )


def _fail(message: str) -> NoReturn:
    logger.error("Line topology invariant violated: %s", message)
    raise InvariantError(message)
