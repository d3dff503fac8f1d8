"""
Flight statistics: flight counts and hours per kind, split into buckets.

With a pilot selected, that pilot's flights in command are bucketed by
purpose and flights where the pilot sat as instructor count as
instruction given. Without a pilot every flight is bucketed by purpose.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .aggregation import format_hours
from .purposes import FlightPurpose

INSTRUCTION_RECEIVED = "instruction_received"
INSTRUCTION_GIVEN = "instruction_given"
TOW = "tow"
OTHER = "other"

BUCKET_LABELS = {
    INSTRUCTION_RECEIVED: "Instruction received",
    INSTRUCTION_GIVEN: "Instruction given",
    TOW: "Tows",
    OTHER: "Other flights",
}

RECEIVED_PURPOSES = frozenset(
    {
        FlightPurpose.INSTRUCTION_RECEIVED,
        FlightPurpose.REFRESHER,
        FlightPurpose.TRAINING,
    }
)


@dataclass
class StatsBucket:
    flights: int = 0
    hours: Decimal = Decimal("0")

    def add(self, record):
        self.flights += 1
        self.hours += record.flight_duration_decimal

    @property
    def hours_display(self):
        return format_hours(self.hours)


def _empty_buckets():
    return {name: StatsBucket() for name in BUCKET_LABELS}


@dataclass
class KindStats:
    buckets: dict = field(default_factory=_empty_buckets)

    def _combined(self, names):
        combined = StatsBucket()
        for name in names:
            combined.flights += self.buckets[name].flights
            combined.hours += self.buckets[name].hours
        return combined

    @property
    def total(self):
        return self._combined(BUCKET_LABELS)

    @property
    def instruction(self):
        return self._combined((INSTRUCTION_RECEIVED, INSTRUCTION_GIVEN))

    @property
    def rows(self):
        return [(BUCKET_LABELS[name], self.buckets[name]) for name in BUCKET_LABELS]


@dataclass
class FlightStats:
    pilot_id: object
    engine: KindStats
    glider: KindStats

    @property
    def is_empty(self):
        return not (self.engine.total.flights or self.glider.total.flights)


def bucket_for(record, pilot_id=None):
    """Bucket name for a record, or None when it does not concern the pilot."""
    if pilot_id is not None and record.pilot_id != pilot_id:
        return INSTRUCTION_GIVEN if record.instructor_id == pilot_id else None
    if record.flight_purpose == FlightPurpose.INSTRUCTION_GIVEN:
        return INSTRUCTION_GIVEN
    if record.flight_purpose in RECEIVED_PURPOSES:
        return INSTRUCTION_RECEIVED
    if record.flight_purpose == FlightPurpose.TOW:
        return TOW
    return OTHER


def _kind_stats(records, pilot_id):
    stats = KindStats()
    for record in records:
        name = bucket_for(record, pilot_id)
        if name:
            stats.buckets[name].add(record)
    return stats


def flight_stats(engine_records, glider_records, pilot_id=None):
    return FlightStats(
        pilot_id=pilot_id,
        engine=_kind_stats(engine_records, pilot_id),
        glider=_kind_stats(glider_records, pilot_id),
    )
