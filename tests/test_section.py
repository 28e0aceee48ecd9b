"""Tests for the Section value object."""

from uuid import uuid4

import pytest

from subway_core.domain import Section
from subway_core.exceptions import ValidationError


class TestSectionConstruction:
    def test_valid_section(self):
        up, down = uuid4(), uuid4()
        section = Section(up, down, 10)
        assert section.up_station_id == up
        assert section.down_station_id == down
        assert section.distance == 10

    def test_same_endpoints_rejected(self):
        station = uuid4()
        with pytest.raises(ValidationError, match="endpoints must differ"):
            Section(station, station, 5)

    @pytest.mark.parametrize("distance", [0, -1, -100])
    def test_non_positive_distance_rejected(self, distance):
        with pytest.raises(ValidationError, match="positive"):
            Section(uuid4(), uuid4(), distance)

    @pytest.mark.parametrize("distance", [2.5, "3", True])
    def test_non_integer_distance_rejected(self, distance):
        with pytest.raises(ValidationError, match="integer"):
            Section(uuid4(), uuid4(), distance)

    def test_error_carries_code(self):
        station = uuid4()
        with pytest.raises(ValidationError) as exc_info:
            Section(station, station, 1)
        assert exc_info.value.code == "VALIDATION_ERROR"


class TestSectionValueSemantics:
    def test_structural_equality(self):
        up, down = uuid4(), uuid4()
        assert Section(up, down, 7) == Section(up, down, 7)
        assert Section(up, down, 7) != Section(up, down, 8)
        assert Section(up, down, 7) != Section(down, up, 7)

    def test_hashable(self):
        up, down = uuid4(), uuid4()
        assert len({Section(up, down, 7), Section(up, down, 7)}) == 1

    def test_immutable(self):
        section = Section(uuid4(), uuid4(), 3)
        with pytest.raises(AttributeError):
            section.distance = 4

    def test_connects(self):
        up, down = uuid4(), uuid4()
        section = Section(up, down, 3)
        assert section.connects(up)
        assert section.connects(down)
        assert not section.connects(uuid4())
        assert section.stations == (up, down)
