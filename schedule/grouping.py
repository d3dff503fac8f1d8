"""
Agenda grouping.

Slots are shown under group headers: instructors, tow pilots (confirmed and
not confirmed), one group per reserved aircraft, and slots without
aircraft. Every export uses ``grouped`` so the headers match across text,
CSV, PDF and the on-screen agenda.
"""

from dataclasses import dataclass

from pilots.constants import INSTRUCTOR_CATEGORY, TOW_PILOT_CATEGORY

from .models import ScheduleEntry

FlightType = ScheduleEntry.FlightType


@dataclass(frozen=True)
class Group:
    key: str
    label: str
    order: int


def category_name(entry):
    category = entry.pilot_category
    return category.name if category is not None else ""


def is_instructor_slot(entry):
    return category_name(entry) == INSTRUCTOR_CATEGORY


def is_tow_pilot_slot(entry):
    return category_name(entry) == TOW_PILOT_CATEGORY


def is_confirmed_tow_pilot(entry):
    return is_tow_pilot_slot(entry) and entry.is_tow_pilot_available is True


def group_for(entry):
    if is_instructor_slot(entry):
        return Group("instructor", "Instructors", 1)
    if is_tow_pilot_slot(entry):
        if entry.is_tow_pilot_available:
            return Group("tow_available", "Tow pilots (available)", 2)
        return Group("tow_unavailable", "Tow pilots (not available)", 3)
    if entry.aircraft_id:
        return Group(f"aircraft_{entry.aircraft_id}", f"Aircraft: {entry.aircraft}", 4)
    return Group("no_aircraft", "Flights without aircraft", 5)


def grouped(entries):
    """
    Yield ``(group, entry)`` pairs; ``group`` is set only where a new header
    starts, i.e. when the key differs from the previous entry's. Entries are
    not reordered, so sort them with ``agenda_sort_key`` first.
    """
    previous_key = None
    for entry in entries:
        group = group_for(entry)
        if group.key != previous_key:
            previous_key = group.key
            yield group, entry
        else:
            yield None, entry


def agenda_sort_key(entry):
    """
    Date, then instructors, then tow pilots (confirmed first), then slots
    with an aircraft (per aircraft), then the rest; by time within each, and
    sport flights first when the time is equal.
    """
    if is_instructor_slot(entry):
        return (entry.date, 0, 0, 0, "", 0, entry.start_time, 0)
    if is_tow_pilot_slot(entry):
        confirmed = 0 if entry.is_tow_pilot_available is True else 1
        return (entry.date, 1, confirmed, 0, "", 0, entry.start_time, 0)
    if entry.aircraft_id:
        aircraft = (0, str(entry.aircraft), entry.aircraft_id)
    else:
        aircraft = (1, "", 0)
    sport = 0 if entry.flight_type == FlightType.SPORT else 1
    return (entry.date, 2, 0) + aircraft + (entry.start_time, sport)


NO_TOW_PILOT_WARNING = "Warning: no tow pilot has confirmed for this date yet."
NO_INSTRUCTOR_WARNING = "Warning: no instructor has signed up for this date yet."
NO_TOWAGE_WARNING = "Warning: no towage slot has been scheduled for this date yet."


def day_warnings(entries, tow_category_exists=True, instructor_category_exists=True):
    """
    Staffing warnings for one day's slots. Checks tied to a category are
    skipped when the club has no such category; the towage check only
    applies to days with slots.
    """
    entries = list(entries)
    warnings = []
    if tow_category_exists and not any(is_confirmed_tow_pilot(e) for e in entries):
        warnings.append(NO_TOW_PILOT_WARNING)
    if instructor_category_exists and not any(is_instructor_slot(e) for e in entries):
        warnings.append(NO_INSTRUCTOR_WARNING)
    if entries and not any(e.flight_type == FlightType.TOWAGE for e in entries):
        warnings.append(NO_TOWAGE_WARNING)
    return warnings
