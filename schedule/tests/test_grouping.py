from datetime import date, time

import pytest

from logbook.models import Aircraft
from pilots.constants import INSTRUCTOR_CATEGORY, TOW_PILOT_CATEGORY
from pilots.models import Pilot, PilotCategory
from schedule.grouping import (
    NO_INSTRUCTOR_WARNING,
    NO_TOW_PILOT_WARNING,
    NO_TOWAGE_WARNING,
    agenda_sort_key,
    day_warnings,
    group_for,
    grouped,
)
from schedule.models import ScheduleEntry

FlightType = ScheduleEntry.FlightType

INSTRUCTOR = PilotCategory(pk=1, name=INSTRUCTOR_CATEGORY)
TOW = PilotCategory(pk=2, name=TOW_PILOT_CATEGORY)
STUDENT = PilotCategory(pk=3, name="Student")
GLIDER = Aircraft(pk=5, name="LV-GLD", type=Aircraft.AircraftType.GLIDER)
CUB = Aircraft(pk=6, name="LV-CUB", type=Aircraft.AircraftType.TOW_PLANE)
PILOT = Pilot(pk=1, first_name="Ana", last_name="Gomez")


def entry(category=STUDENT, start=(10, 0), flight_type=FlightType.LOCAL,
          aircraft=None, tow_available=None, day=date(2024, 6, 8)):
    return ScheduleEntry(
        date=day,
        start_time=time(*start),
        pilot=PILOT,
        pilot_category=category,
        flight_type=flight_type,
        aircraft=aircraft,
        is_tow_pilot_available=tow_available,
    )


@pytest.mark.parametrize(
    "slot, key",
    [
        (entry(category=INSTRUCTOR, aircraft=GLIDER), "instructor"),
        (entry(category=TOW, tow_available=True, aircraft=CUB), "tow_available"),
        (entry(category=TOW, tow_available=False), "tow_unavailable"),
        (entry(category=TOW), "tow_unavailable"),
        (entry(aircraft=GLIDER), "aircraft_5"),
        (entry(), "no_aircraft"),
    ],
)
def test_group_key_priority(slot, key):
    assert group_for(slot).key == key


def test_aircraft_group_label_uses_aircraft_name():
    assert group_for(entry(aircraft=GLIDER)).label == "Aircraft: LV-GLD"


def test_header_emitted_once_per_run_of_equal_keys():
    slots = [
        entry(category=INSTRUCTOR),
        entry(category=INSTRUCTOR, start=(11, 0)),
        entry(aircraft=GLIDER),
        entry(),
        entry(aircraft=GLIDER, start=(15, 0)),
    ]
    headers = [group.key for group, _ in grouped(slots) if group is not None]
    assert headers == ["instructor", "aircraft_5", "no_aircraft", "aircraft_5"]


def test_grouped_keeps_every_entry_in_order():
    slots = [entry(start=(h, 0)) for h in (9, 10, 11)]
    assert [e for _, e in grouped(slots)] == slots


def test_grouped_empty_sequence():
    assert list(grouped([])) == []


def test_agenda_sort_order():
    late_instructor = entry(category=INSTRUCTOR, start=(15, 0))
    unconfirmed_tow = entry(category=TOW, start=(8, 0), tow_available=False)
    confirmed_tow = entry(category=TOW, start=(12, 0), tow_available=True)
    glider_local = entry(aircraft=GLIDER, start=(10, 0))
    glider_sport = entry(aircraft=GLIDER, start=(10, 0), flight_type=FlightType.SPORT)
    cub = entry(aircraft=CUB, start=(9, 0))
    walk_in = entry(start=(7, 0))
    tomorrow = entry(category=INSTRUCTOR, day=date(2024, 6, 9), start=(6, 0))

    slots = [tomorrow, walk_in, glider_local, cub, unconfirmed_tow,
             glider_sport, confirmed_tow, late_instructor]
    assert sorted(slots, key=agenda_sort_key) == [
        late_instructor,
        confirmed_tow,
        unconfirmed_tow,
        cub,
        glider_sport,
        glider_local,
        walk_in,
        tomorrow,
    ]


def test_day_warnings_for_fully_staffed_day():
    slots = [
        entry(category=INSTRUCTOR),
        entry(category=TOW, tow_available=True, flight_type=FlightType.TOWAGE),
    ]
    assert day_warnings(slots) == []


def test_day_warnings_for_unstaffed_day():
    slots = [entry(category=TOW, tow_available=False)]
    assert day_warnings(slots) == [
        NO_TOW_PILOT_WARNING,
        NO_INSTRUCTOR_WARNING,
        NO_TOWAGE_WARNING,
    ]


def test_day_warnings_skip_missing_categories_and_empty_days():
    assert day_warnings([], tow_category_exists=False, instructor_category_exists=False) == []
    assert day_warnings([]) == [NO_TOW_PILOT_WARNING, NO_INSTRUCTOR_WARNING]
