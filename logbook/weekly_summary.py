from dataclasses import dataclass, field
from datetime import timedelta

from dateutil.relativedelta import MO, relativedelta

from .aggregation import KIND_LABELS


def last_week_range(today):
    """Monday..Sunday of the week before the one containing ``today``."""
    this_monday = today + relativedelta(weekday=MO(-1))
    start = this_monday - timedelta(days=7)
    return start, start + timedelta(days=6)


@dataclass(frozen=True)
class SummaryLine:
    date: object
    kind_label: str
    duration: object
    student_name: str = ""


@dataclass
class PilotWeek:
    pilot: object
    pic_flights: list = field(default_factory=list)
    instructed_flights: list = field(default_factory=list)

    @property
    def has_activity(self):
        return bool(self.pic_flights or self.instructed_flights)


def build_weekly_summaries(engine_records, glider_records, pilots, reference):
    """
    Group a week's flights per pilot.

    Every flight is listed for its pilot in command, and also for its
    instructor. Pilots without any flight are left out.
    """
    weeks = {pilot.pk: PilotWeek(pilot=pilot) for pilot in pilots}
    for record in list(engine_records) + list(glider_records):
        kind = KIND_LABELS[record.kind]
        if record.pilot_id in weeks:
            weeks[record.pilot_id].pic_flights.append(
                SummaryLine(record.date, kind, record.flight_duration_decimal)
            )
        if record.instructor_id in weeks:
            weeks[record.instructor_id].instructed_flights.append(
                SummaryLine(
                    record.date,
                    kind,
                    record.flight_duration_decimal,
                    student_name=reference.pilot_name(record.pilot_id),
                )
            )
    return [week for week in weeks.values() if week.has_activity]


def summary_subject(start, end):
    return (
        f"Weekly flight summary - {start.strftime('%d/%m/%y')} "
        f"to {end.strftime('%d/%m/%y')}"
    )
