from datetime import date, time
from decimal import Decimal

from logbook.aggregation import ReferenceData
from logbook.records import EngineFlightRecord, GliderFlightRecord

_ids = iter(range(1, 100000))


def _time(value):
    if isinstance(value, str):
        hours, minutes = value.split(":")
        return time(int(hours), int(minutes))
    return value


def engine(day="2024-06-01", departure="10:00", duration="1.0", aircraft=1, pilot=10,
           purpose="local", instructor=None, **extra):
    dep = _time(departure)
    return EngineFlightRecord(
        id=extra.pop("id", next(_ids)),
        date=date.fromisoformat(day),
        pilot_id=pilot,
        instructor_id=instructor,
        departure_time=dep,
        arrival_time=extra.pop("arrival", dep),
        flight_duration_decimal=Decimal(duration),
        flight_purpose=purpose,
        engine_aircraft_id=aircraft,
        **extra,
    )


def glider(day="2024-06-01", departure="09:00", duration="0.5", aircraft=2, pilot=10,
           purpose="training", instructor=None, **extra):
    dep = _time(departure)
    return GliderFlightRecord(
        id=extra.pop("id", next(_ids)),
        date=date.fromisoformat(day),
        pilot_id=pilot,
        instructor_id=instructor,
        departure_time=dep,
        arrival_time=extra.pop("arrival", dep),
        flight_duration_decimal=Decimal(duration),
        flight_purpose=purpose,
        glider_aircraft_id=aircraft,
        **extra,
    )


REFERENCE = ReferenceData(
    pilots={10: "Ana Gomez", 11: "Bruno Diaz", 12: "Carla Ruiz"},
    aircraft={1: "LV-A1", 2: "LV-G1", 3: "LV-T1"},
)
