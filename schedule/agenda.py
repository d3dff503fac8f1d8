import logging
from dataclasses import dataclass, field
from datetime import timedelta

from django.db import DatabaseError

from logbook.exceptions import FetchFailure
from logbook.repository import validate_range
from pilots.constants import INSTRUCTOR_CATEGORY, TOW_PILOT_CATEGORY
from pilots.models import PilotCategory

from .grouping import agenda_sort_key, day_warnings
from .models import DailyObservation, ScheduleEntry

logger = logging.getLogger(__name__)


@dataclass
class AgendaDay:
    date: object
    entries: list = field(default_factory=list)
    observation: str = ""
    warnings: list = field(default_factory=list)

    @property
    def has_content(self):
        return bool(self.entries or self.observation or self.warnings)


def days_between(start, end):
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def build_agenda_days(start, end):
    """
    One AgendaDay per date in ``start..end``, entries in agenda order.

    Raises:
        ValidationFailure: a date is missing or the range is inverted.
        FetchFailure: the agenda could not be read.
    """
    validate_range(start, end)
    try:
        entries = list(
            ScheduleEntry.objects.filter(date__gte=start, date__lte=end).select_related(
                "pilot", "pilot_category", "aircraft"
            )
        )
        observations = {
            obs.date: obs.observation_text.strip()
            for obs in DailyObservation.objects.filter(date__gte=start, date__lte=end)
        }
        category_names = set(
            PilotCategory.objects.filter(
                name__in=[INSTRUCTOR_CATEGORY, TOW_PILOT_CATEGORY]
            ).values_list("name", flat=True)
        )
    except DatabaseError as e:
        logger.error("Failed to load agenda for %s..%s", start, end, exc_info=True)
        raise FetchFailure("Could not load the agenda. Try again.") from e

    entries.sort(key=agenda_sort_key)
    by_day = {}
    for entry in entries:
        by_day.setdefault(entry.date, []).append(entry)

    days = []
    for day in days_between(start, end):
        day_entries = by_day.get(day, [])
        days.append(
            AgendaDay(
                date=day,
                entries=day_entries,
                observation=observations.get(day, ""),
                warnings=day_warnings(
                    day_entries,
                    tow_category_exists=TOW_PILOT_CATEGORY in category_names,
                    instructor_category_exists=INSTRUCTOR_CATEGORY in category_names,
                ),
            )
        )
    return days
