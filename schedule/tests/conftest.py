from datetime import date, time

import pytest

from logbook.tests.conftest import *  # noqa: F401,F403
from schedule.models import ScheduleEntry

AGENDA_DAY = date(2024, 6, 8)


@pytest.fixture
def make_entry(db, pilot, student_category):
    def _make(
        entry_pilot=None,
        category=None,
        start="10:00",
        flight_type=ScheduleEntry.FlightType.LOCAL,
        aircraft=None,
        tow_available=None,
        day=AGENDA_DAY,
    ):
        hours, minutes = start.split(":")
        return ScheduleEntry.objects.create(
            date=day,
            start_time=time(int(hours), int(minutes)),
            pilot=entry_pilot or pilot,
            pilot_category=category or student_category,
            is_tow_pilot_available=tow_available,
            flight_type=flight_type,
            aircraft=aircraft,
        )

    return _make


@pytest.fixture
def staffed_day(make_entry, instructor, instructor_category, tow_pilot,
                tow_pilot_category, glider_aircraft):
    """A Saturday with an instructor, a confirmed tow pilot and two students."""
    return [
        make_entry(start="11:00", aircraft=glider_aircraft,
                   flight_type=ScheduleEntry.FlightType.INSTRUCTION_TAKEN),
        make_entry(entry_pilot=tow_pilot, category=tow_pilot_category, start="09:00",
                   flight_type=ScheduleEntry.FlightType.TOWAGE, tow_available=True),
        make_entry(entry_pilot=instructor, category=instructor_category, start="09:30",
                   flight_type=ScheduleEntry.FlightType.INSTRUCTION_GIVEN),
        make_entry(start="14:00"),
    ]
