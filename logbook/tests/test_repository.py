from datetime import date, time
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from logbook.exceptions import FetchFailure, ValidationFailure
from logbook.models import GliderFlight
from logbook.repository import DjangoFlightRepository, fetch_range


class BrokenRepository:
    def engine_flights(self, start, end, pilot_id=None, aircraft_id=None):
        return []

    def glider_flights(self, start, end, pilot_id=None, aircraft_id=None):
        raise ConnectionError("store unreachable")


def test_missing_dates_fail_validation():
    with pytest.raises(ValidationFailure):
        fetch_range(BrokenRepository(), None, date(2024, 6, 1))


def test_inverted_range_fails_validation():
    with pytest.raises(ValidationFailure) as exc:
        fetch_range(BrokenRepository(), date(2024, 6, 2), date(2024, 6, 1))
    assert "earlier" in exc.value.message


def test_sub_fetch_error_discards_everything():
    with pytest.raises(FetchFailure):
        fetch_range(BrokenRepository(), date(2024, 6, 1), date(2024, 6, 1))


@pytest.mark.django_db
def test_database_error_becomes_fetch_failure(engine_flight):
    repository = DjangoFlightRepository()
    with patch.object(
        DjangoFlightRepository, "engine_flights", side_effect=DatabaseError("boom")
    ):
        with pytest.raises(FetchFailure):
            fetch_range(repository, date(2024, 6, 1), date(2024, 6, 1))


@pytest.mark.django_db
def test_range_is_inclusive(engine_flight, instruction_flight):
    engine, glider = fetch_range(
        DjangoFlightRepository(), date(2024, 6, 1), date(2024, 6, 1)
    )
    assert [r.id for r in engine] == [engine_flight.pk]
    assert [r.id for r in glider] == [instruction_flight.pk]

    engine, glider = fetch_range(
        DjangoFlightRepository(), date(2024, 6, 2), date(2024, 6, 30)
    )
    assert engine == [] and glider == []


@pytest.mark.django_db
def test_pilot_filter_includes_instructed_flights(
    engine_flight, instruction_flight, instructor
):
    engine, glider = fetch_range(
        DjangoFlightRepository(),
        date(2024, 6, 1),
        date(2024, 6, 1),
        pilot_id=instructor.pk,
    )
    assert engine == []
    assert [r.id for r in glider] == [instruction_flight.pk]


@pytest.mark.django_db
def test_aircraft_filter_uses_kind_specific_column(
    engine_flight, instruction_flight, tow_plane, glider_aircraft
):
    # the tow plane only appears as tow_aircraft on the glider flight
    engine, glider = fetch_range(
        DjangoFlightRepository(),
        date(2024, 6, 1),
        date(2024, 6, 1),
        aircraft_id=tow_plane.pk,
    )
    assert [r.id for r in engine] == [engine_flight.pk]
    assert glider == []

    GliderFlight.objects.create(
        date=date(2024, 6, 1),
        pilot=instruction_flight.pilot,
        glider_aircraft=glider_aircraft,
        departure_time=time(14, 0),
        arrival_time=time(15, 0),
        flight_purpose="sport",
    )
    _, glider = fetch_range(
        DjangoFlightRepository(),
        date(2024, 6, 1),
        date(2024, 6, 1),
        aircraft_id=glider_aircraft.pk,
    )
    assert len(glider) == 2
