from datetime import date, time
from decimal import Decimal

import pytest

from logbook.records import EngineFlightRecord, FlightRecord, GliderFlightRecord

from .helpers import engine, glider


def test_negative_duration_is_rejected():
    with pytest.raises(ValueError):
        engine(duration="-0.1")


def test_missing_date_is_rejected():
    with pytest.raises(ValueError):
        EngineFlightRecord(
            id=1,
            date=None,
            pilot_id=1,
            departure_time=time(10, 0),
            arrival_time=time(11, 0),
            flight_duration_decimal=Decimal("1.0"),
            flight_purpose="local",
        )


def test_base_record_cannot_be_built():
    with pytest.raises(TypeError):
        FlightRecord(
            id=1,
            date=date(2024, 6, 1),
            pilot_id=10,
            departure_time=time(10, 0),
            arrival_time=time(11, 0),
            flight_duration_decimal=Decimal("1.0"),
            flight_purpose="local",
        )


def test_aircraft_id_follows_kind():
    e = engine(aircraft=7)
    g = glider(aircraft=8)
    assert (e.kind, e.aircraft_id) == ("engine", 7)
    assert (g.kind, g.aircraft_id) == ("glider", 8)


def test_records_are_immutable():
    record = glider()
    with pytest.raises(AttributeError):
        record.notes = "changed"


def test_join_key_uses_kind_specific_aircraft():
    record = GliderFlightRecord(
        id=1,
        date=glider().date,
        pilot_id=1,
        departure_time=time(9, 0),
        arrival_time=time(9, 30),
        flight_duration_decimal=Decimal("0.5"),
        flight_purpose="training",
        glider_aircraft_id=4,
    )
    assert record.join_key == (record.date, time(9, 0), 4)
