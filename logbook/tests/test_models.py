from datetime import date, time
from decimal import Decimal

import pytest

from logbook.models import EngineFlight, GliderFlight, duration_hours, duration_minutes
from logbook.records import EngineFlightRecord, GliderFlightRecord


def test_duration_hours_rounds_to_one_decimal():
    assert duration_hours(time(10, 0), time(11, 30)) == Decimal("1.5")
    assert duration_hours(time(10, 0), time(10, 20)) == Decimal("0.3")


def test_duration_hours_crosses_midnight():
    assert duration_hours(time(23, 30), time(0, 30)) == Decimal("1.0")


def test_duration_minutes_crosses_midnight():
    assert duration_minutes(time(10, 0), time(11, 30)) == 90
    assert duration_minutes(time(23, 40), time(0, 25)) == 45


@pytest.mark.django_db
def test_save_fills_billable_minutes(pilot, tow_plane):
    flight = EngineFlight.objects.create(
        date=date(2024, 6, 1),
        pilot=pilot,
        engine_aircraft=tow_plane,
        departure_time=time(23, 30),
        arrival_time=time(0, 15),
        flight_purpose="local",
    )
    flight.refresh_from_db()
    assert flight.billable_minutes == 45


@pytest.mark.django_db
def test_tow_flights_get_no_billable_minutes(tow_pilot, tow_plane):
    flight = EngineFlight.objects.create(
        date=date(2024, 6, 1),
        pilot=tow_pilot,
        engine_aircraft=tow_plane,
        departure_time=time(10, 0),
        arrival_time=time(10, 15),
        flight_purpose="tow",
    )
    flight.refresh_from_db()
    assert flight.billable_minutes is None


@pytest.mark.django_db
def test_save_fills_missing_duration(engine_flight):
    engine_flight.refresh_from_db()
    assert engine_flight.flight_duration_decimal == Decimal("1.5")


@pytest.mark.django_db
def test_save_keeps_given_duration(instruction_flight):
    instruction_flight.refresh_from_db()
    assert instruction_flight.flight_duration_decimal == Decimal("0.8")


@pytest.mark.django_db
def test_engine_to_record(engine_flight, pilot, tow_plane):
    record = engine_flight.to_record()
    assert isinstance(record, EngineFlightRecord)
    assert record.kind == "engine"
    assert record.pilot_id == pilot.pk
    assert record.aircraft_id == tow_plane.pk
    assert record.billable_minutes == 90
    assert record.date == date(2024, 6, 1)


@pytest.mark.django_db
def test_glider_to_record(instruction_flight, instructor, glider_aircraft, tow_pilot):
    record = instruction_flight.to_record()
    assert isinstance(record, GliderFlightRecord)
    assert record.aircraft_id == glider_aircraft.pk
    assert record.instructor_id == instructor.pk
    assert record.tow_pilot_id == tow_pilot.pk
    assert record.notes == ""


@pytest.mark.django_db
def test_purpose_display(engine_flight, instruction_flight):
    assert engine_flight.purpose_display == "Local"
    assert instruction_flight.purpose_display == "Instruction (Received)"


@pytest.mark.django_db
def test_default_ordering_newest_first(engine_flight, pilot, tow_plane):
    later = EngineFlight.objects.create(
        date=date(2024, 6, 2),
        pilot=pilot,
        engine_aircraft=tow_plane,
        departure_time=time(8, 0),
        arrival_time=time(9, 0),
        flight_purpose="trip",
    )
    assert list(EngineFlight.objects.all()) == [later, engine_flight]
    assert GliderFlight.objects.count() == 0
