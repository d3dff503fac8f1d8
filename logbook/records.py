"""
Immutable flight records passed through the report pipeline.

A record is either an engine flight or a glider flight, told apart by
``kind``. Models convert themselves with ``to_record()``; everything after
the repository works on these records only, never on querysets.
"""

from dataclasses import dataclass
from datetime import date as date_type
from datetime import time
from decimal import Decimal
from typing import ClassVar, Optional


@dataclass(frozen=True, kw_only=True)
class FlightRecord:
    id: int
    date: date_type
    pilot_id: Optional[int]
    departure_time: time
    arrival_time: time
    flight_duration_decimal: Decimal
    flight_purpose: str
    instructor_id: Optional[int] = None
    notes: str = ""
    schedule_entry_id: Optional[int] = None

    kind: ClassVar[str] = ""

    def __post_init__(self):
        if not self.kind:
            raise TypeError("Build an EngineFlightRecord or a GliderFlightRecord")
        if not isinstance(self.date, date_type):
            raise ValueError(f"Flight {self.id} has no valid date")
        duration = Decimal(self.flight_duration_decimal)
        if duration < 0:
            raise ValueError(f"Flight {self.id} has a negative duration")
        object.__setattr__(self, "flight_duration_decimal", duration)

    @property
    def aircraft_id(self):
        raise NotImplementedError

    @property
    def join_key(self):
        """Key that identifies the same physical flight logged twice."""
        return (self.date, self.departure_time, self.aircraft_id)


@dataclass(frozen=True, kw_only=True)
class EngineFlightRecord(FlightRecord):
    engine_aircraft_id: Optional[int] = None
    billable_minutes: Optional[int] = None
    route_from_to: str = ""
    landings_count: Optional[int] = None
    tows_count: Optional[int] = None
    oil_added_liters: Optional[Decimal] = None
    fuel_added_liters: Optional[Decimal] = None

    kind: ClassVar[str] = "engine"

    @property
    def aircraft_id(self):
        return self.engine_aircraft_id


@dataclass(frozen=True, kw_only=True)
class GliderFlightRecord(FlightRecord):
    glider_aircraft_id: Optional[int] = None
    tow_pilot_id: Optional[int] = None
    tow_aircraft_id: Optional[int] = None

    kind: ClassVar[str] = "glider"

    @property
    def aircraft_id(self):
        return self.glider_aircraft_id
