"""Tests for the station service."""

from uuid import uuid4

import pytest

from subway_core.exceptions import DuplicateError, NotFoundError, ValidationError
from subway_core.schemas import LineCreate, StationCreate
from subway_core.services import lines as line_service
from subway_core.services import stations as station_service


class TestCreateStation:
    @pytest.mark.asyncio
    async def test_create_station_success(self, db_session):
        """Create station should return the stored station."""
        station = await station_service.create_station(db_session, StationCreate(name="Seolleung"))
        assert station.name == "Seolleung"
        assert station.id is not None
        assert station.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_station_duplicate_name(self, db_session):
        """Station names are unique."""
        await station_service.create_station(db_session, StationCreate(name="Seolleung"))
        with pytest.raises(DuplicateError) as exc_info:
            await station_service.create_station(db_session, StationCreate(name="Seolleung"))
        assert exc_info.value.code == "DUPLICATE"
        assert isinstance(exc_info.value, ValidationError)


class TestReadStations:
    @pytest.mark.asyncio
    async def test_list_stations_empty(self, db_session):
        assert await station_service.list_stations(db_session) == []

    @pytest.mark.asyncio
    async def test_list_stations_returns_created(self, make_station, db_session):
        await make_station("Seolleung")
        await make_station("Yeoksam")
        await make_station("Gangnam")

        stations = await station_service.list_stations(db_session)
        assert {s.name for s in stations} == {"Seolleung", "Yeoksam", "Gangnam"}

    @pytest.mark.asyncio
    async def test_get_station(self, make_station, db_session):
        station_id = await make_station("Jjanggu")
        station = await station_service.get_station(db_session, station_id)
        assert station.id == station_id
        assert station.name == "Jjanggu"

    @pytest.mark.asyncio
    async def test_get_station_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await station_service.get_station(db_session, uuid4())


class TestDeleteStation:
    @pytest.mark.asyncio
    async def test_delete_station(self, make_station, db_session):
        station_id = await make_station("Gangnam")
        await station_service.delete_station(db_session, station_id)
        with pytest.raises(NotFoundError):
            await station_service.get_station(db_session, station_id)

    @pytest.mark.asyncio
    async def test_delete_station_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await station_service.delete_station(db_session, uuid4())

    @pytest.mark.asyncio
    async def test_delete_station_in_use(self, make_station, db_session):
        """A station on a line cannot be deleted."""
        a = await make_station("Gangnam")
        b = await make_station("Yeoksam")
        await line_service.create_line(
            db_session,
            LineCreate(
                name="Line 2", color="#00A84D", up_station_id=a, down_station_id=b, distance=10
            ),
        )

        with pytest.raises(ValidationError, match="still part of a line"):
            await station_service.delete_station(db_session, a)
        assert (await station_service.get_station(db_session, a)).name == "Gangnam"
