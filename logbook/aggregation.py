"""
Aggregator: merges engine and glider records into one display table.

The rules are the ones the flight history, the aircraft activity report and
the weekly summary share:

- rows are sorted by (date, departure_time), newest first unless asked
  otherwise; the sort is stable so equal keys keep their input order;
- totals are kept per kind. An instructional flight logged by both the
  student and the instructor shares the same (date, departure_time,
  aircraft) key, and only its first occurrence is counted. Rows are never
  dropped, only the totals are deduplicated;
- when a pilot is in focus and instructed a flight, the row is labelled
  "<instructor> (Instr. de <student>)".
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from pilots.constants import UNKNOWN_PILOT

from .purposes import is_instruction, purpose_name

UNKNOWN_AIRCRAFT = "Unknown Aircraft"
NO_AIRCRAFT = "N/A"
NO_INSTRUCTOR = "-"

KINDS = ("engine", "glider")
KIND_LABELS = {"engine": "Engine", "glider": "Glider"}


@dataclass(frozen=True)
class ReferenceData:
    """Pilot and aircraft names, loaded once per report."""

    pilots: dict = field(default_factory=dict)
    aircraft: dict = field(default_factory=dict)

    @classmethod
    def load(cls):
        from pilots.models import Pilot

        from .models import Aircraft

        return cls(
            pilots={p.pk: p.display_name for p in Pilot.objects.all()},
            aircraft={a.pk: a.name for a in Aircraft.objects.all()},
        )

    def pilot_name(self, pilot_id):
        if pilot_id is None:
            return UNKNOWN_PILOT
        return self.pilots.get(pilot_id, UNKNOWN_PILOT)

    def aircraft_name(self, aircraft_id):
        if aircraft_id is None:
            return NO_AIRCRAFT
        return self.aircraft.get(aircraft_id, UNKNOWN_AIRCRAFT)


@dataclass(frozen=True)
class UnifiedRow:
    record: object
    aircraft_name: str
    pilot_label: str
    instructor_label: str
    purpose_name: str

    @property
    def kind(self):
        return self.record.kind

    @property
    def kind_label(self):
        return KIND_LABELS[self.record.kind]

    @property
    def date(self):
        return self.record.date

    @property
    def duration(self):
        return self.record.flight_duration_decimal

    @property
    def notes(self):
        return self.record.notes


def empty_totals():
    return {kind: Decimal("0") for kind in KINDS}


@dataclass(frozen=True)
class UnifiedHistory:
    rows: tuple
    totals: dict = field(default_factory=empty_totals)

    @property
    def is_empty(self):
        return not self.rows

    @property
    def total_hours(self):
        return sum(self.totals.values(), Decimal("0"))

    def __len__(self):
        return len(self.rows)


def format_hours(value):
    hours = Decimal(value or 0).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{hours} hs"


def sort_records(records, descending=True):
    return sorted(
        records, key=lambda r: (r.date, r.departure_time), reverse=descending
    )


def compute_totals(records):
    """Per-kind hours, counting each instructional flight once."""
    totals = empty_totals()
    seen = set()
    for record in records:
        if is_instruction(record.flight_purpose):
            key = record.join_key
            if key in seen:
                continue
            seen.add(key)
        totals[record.kind] += record.flight_duration_decimal
    return totals


def pilot_label(record, reference, focus_pilot_id=None):
    if focus_pilot_id is not None and record.instructor_id == focus_pilot_id:
        instructor = reference.pilot_name(record.instructor_id)
        student = reference.pilot_name(record.pilot_id)
        return f"{instructor} (Instr. de {student})"
    return reference.pilot_name(record.pilot_id)


def build_row(record, reference, focus_pilot_id=None):
    return UnifiedRow(
        record=record,
        aircraft_name=reference.aircraft_name(record.aircraft_id),
        pilot_label=pilot_label(record, reference, focus_pilot_id),
        instructor_label=(
            reference.pilot_name(record.instructor_id)
            if record.instructor_id is not None
            else NO_INSTRUCTOR
        ),
        purpose_name=purpose_name(record.flight_purpose),
    )


def aggregate(
    engine_records, glider_records, reference, focus_pilot_id=None, descending=True
):
    """
    Merge engine and glider records into a UnifiedHistory.

    Row count always equals len(engine_records) + len(glider_records).
    """
    merged = sort_records(
        list(engine_records) + list(glider_records), descending=descending
    )
    rows = tuple(build_row(r, reference, focus_pilot_id) for r in merged)
    return UnifiedHistory(rows=rows, totals=compute_totals(merged))


@dataclass(frozen=True)
class AircraftActivity:
    history: UnifiedHistory
    total_hours: Decimal


def aircraft_activity(engine_records, glider_records, reference):
    """Chronological history of one aircraft; the total is a plain sum."""
    history = aggregate(engine_records, glider_records, reference, descending=False)
    total = sum((row.duration for row in history.rows), Decimal("0"))
    return AircraftActivity(history=history, total_hours=total)
