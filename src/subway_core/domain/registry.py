"""Station registry - the read-only station lookup used by line aggregates."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from subway_core.exceptions import NotFoundError
from subway_core.schemas import Station


class StationRegistry(Protocol):
    """Lookup contract for stations referenced by a line."""

    def find_station_by_id(self, station_id: UUID) -> Station:
        """Return the station, or raise NotFoundError."""
        ...

    def name_exists(self, name: str) -> bool:
        ...


class StationDirectory:
    """In-memory registry built from a snapshot of stations."""

    def __init__(self, stations: Iterable[Station] = ()) -> None:
        self._by_id = {station.id: station for station in stations}
        self._names = {station.name for station in self._by_id.values()}

    def __len__(self) -> int:
        return len(self._by_id)

    def find_station_by_id(self, station_id: UUID) -> Station:
        station = self._by_id.get(station_id)
        if station is None:
            raise NotFoundError(f"Station {station_id} not found")
        return station

    def name_exists(self, name: str) -> bool:
        return name in self._names
