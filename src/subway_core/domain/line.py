"""Line aggregate - metadata plus the topology of one line."""

from dataclasses import dataclass, field
from uuid import UUID

from subway_core.domain.registry import StationRegistry
from subway_core.domain.section import Section
from subway_core.domain.topology import LineTopology
from subway_core.schemas import Station


@dataclass
class Line:
    """A named, colored line whose stations form one ordered path."""

    id: UUID
    name: str
    color: str
    registry: StationRegistry = field(repr=False)
    topology: LineTopology = field(default_factory=LineTopology)

    @classmethod
    def create(
        cls,
        id: UUID,
        name: str,
        color: str,
        registry: StationRegistry,
        up_station_id: UUID,
        down_station_id: UUID,
        distance: int,
    ) -> "Line":
        """Build a line seeded with its initial section."""
        topology = LineTopology([Section(up_station_id, down_station_id, distance)])
        return cls(id=id, name=name, color=color, registry=registry, topology=topology)

    @property
    def sections(self) -> list[Section]:
        return self.topology.sections

    @property
    def total_distance(self) -> int:
        return self.topology.total_distance

    @property
    def is_empty(self) -> bool:
        return self.topology.is_empty

    def add_section(self, section: Section) -> None:
        self.topology.add_section(section)

    def remove_station(self, station_id: UUID) -> None:
        self.topology.remove_station(station_id)

    def station_ids(self) -> list[UUID]:
        return self.topology.ordered_stations()

    def stations(self) -> list[Station]:
        """Stations in path order, hydrated from the registry.

        A station missing from the registry raises NotFoundError; the line's
        sections are then out of sync with the station table.
        """
        return [
            self.registry.find_station_by_id(station_id)
            for station_id in self.topology.ordered_stations()
        ]
