"""
Billing report for one pilot.

Only flights where the pilot is pilot in command are billed. Flights the
pilot logged as instruction given are listed but never billed; engine
flights contribute their billable minutes (tow flights excepted) and each
glider flight is billed as one tow.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .purposes import FlightPurpose, purpose_name

ENGINE_FLIGHT = "Engine flight"
GLIDER_TOW = "Glider tow"
INSTRUCTION_GIVEN = "Instruction given"


@dataclass(frozen=True)
class BillingItem:
    date: object
    type: str
    aircraft: str
    duration_hs: Decimal
    billable_minutes: Optional[int]
    notes: str
    non_billable: bool = False

    @property
    def tow_count(self):
        return 1 if self.type == GLIDER_TOW and not self.non_billable else None


@dataclass(frozen=True)
class BillingReport:
    items: tuple
    total_billable_minutes: int
    total_tows: int

    @property
    def is_empty(self):
        return not self.items


def _instruction_item(record, reference):
    return BillingItem(
        date=record.date,
        type=INSTRUCTION_GIVEN,
        aircraft=reference.aircraft_name(record.aircraft_id),
        duration_hs=record.flight_duration_decimal,
        billable_minutes=None,
        notes="(not billable to you)",
        non_billable=True,
    )


def billing_report(engine_records, glider_records, pilot_id, reference):
    items = []
    total_minutes = 0
    total_tows = 0

    for record in engine_records:
        if record.pilot_id != pilot_id:
            continue
        if record.flight_purpose == FlightPurpose.INSTRUCTION_GIVEN:
            items.append(_instruction_item(record, reference))
            continue
        minutes = record.billable_minutes or 0
        items.append(
            BillingItem(
                date=record.date,
                type=ENGINE_FLIGHT,
                aircraft=reference.aircraft_name(record.aircraft_id),
                duration_hs=record.flight_duration_decimal,
                billable_minutes=minutes,
                notes=f"Purpose: {purpose_name(record.flight_purpose)}",
            )
        )
        if record.flight_purpose != FlightPurpose.TOW:
            total_minutes += minutes

    for record in glider_records:
        if record.pilot_id != pilot_id:
            continue
        if record.flight_purpose == FlightPurpose.INSTRUCTION_GIVEN:
            items.append(_instruction_item(record, reference))
            continue
        tow_pilot = reference.pilot_name(record.tow_pilot_id)
        tow_aircraft = reference.aircraft_name(record.tow_aircraft_id)
        items.append(
            BillingItem(
                date=record.date,
                type=GLIDER_TOW,
                aircraft=reference.aircraft_name(record.aircraft_id),
                duration_hs=record.flight_duration_decimal,
                billable_minutes=None,
                notes=f"Towed by: {tow_pilot} in {tow_aircraft}",
            )
        )
        total_tows += 1

    items.sort(key=lambda item: item.date)
    return BillingReport(
        items=tuple(items),
        total_billable_minutes=total_minutes,
        total_tows=total_tows,
    )
