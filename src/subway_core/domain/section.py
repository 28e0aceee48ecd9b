"""Section - a directed, weighted edge between two stations of a line."""

from dataclasses import dataclass
from uuid import UUID

from subway_core.exceptions import ValidationError


@dataclass(frozen=True)
class Section:
    """An immutable up -> down edge with a strictly positive distance."""

    up_station_id: UUID
    down_station_id: UUID
    distance: int

    def __post_init__(self) -> None:
        if self.up_station_id == self.down_station_id:
            raise ValidationError("Section endpoints must differ")
        if isinstance(self.distance, bool) or not isinstance(self.distance, int):
            raise ValidationError(f"Section distance must be an integer, got {self.distance!r}")
        if self.distance <= 0:
            raise ValidationError(f"Section distance must be positive, got {self.distance}")

    @property
    def stations(self) -> tuple[UUID, UUID]:
        return (self.up_station_id, self.down_station_id)

    def connects(self, station_id: UUID) -> bool:
        """Whether the station is either endpoint of this section."""
        return station_id in self.stations
