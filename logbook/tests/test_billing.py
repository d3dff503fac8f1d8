from datetime import date

import pytest

from logbook.aggregation import ReferenceData
from logbook.billing import ENGINE_FLIGHT, GLIDER_TOW, INSTRUCTION_GIVEN, billing_report
from logbook.forms import EngineFlightForm

from .helpers import REFERENCE, engine, glider


def test_billing_items_and_totals():
    engines = [
        engine(day="2024-06-03", pilot=10, purpose="local", billable_minutes=40),
        engine(day="2024-06-01", pilot=10, purpose="tow", billable_minutes=15),
        engine(day="2024-06-02", pilot=10, purpose="instruction_given",
               billable_minutes=50),
        engine(day="2024-06-02", pilot=11, purpose="local", billable_minutes=60),
    ]
    gliders = [
        glider(day="2024-06-02", pilot=10, purpose="sport", tow_pilot_id=12,
               tow_aircraft_id=3),
        glider(day="2024-06-04", pilot=11, instructor=10,
               purpose="instruction_received"),
    ]

    report = billing_report(engines, gliders, 10, REFERENCE)

    assert [item.date for item in report.items] == sorted(
        item.date for item in report.items
    )
    assert [item.type for item in report.items] == [
        ENGINE_FLIGHT,
        INSTRUCTION_GIVEN,
        GLIDER_TOW,
        ENGINE_FLIGHT,
    ]
    # tow minutes and instruction given are excluded
    assert report.total_billable_minutes == 40
    assert report.total_tows == 1


def test_instruction_given_is_not_billable():
    report = billing_report(
        [engine(pilot=10, purpose="instruction_given", billable_minutes=30)],
        [],
        10,
        REFERENCE,
    )
    item = report.items[0]
    assert item.non_billable
    assert item.billable_minutes is None
    assert item.tow_count is None
    assert report.total_billable_minutes == 0


def test_glider_tow_note_names_tow_pilot_and_aircraft():
    report = billing_report(
        [], [glider(pilot=10, tow_pilot_id=12, tow_aircraft_id=3)], 10, REFERENCE
    )
    item = report.items[0]
    assert item.notes == "Towed by: Carla Ruiz in LV-T1"
    assert item.tow_count == 1


def test_other_pilots_flights_are_ignored():
    report = billing_report(
        [engine(pilot=11)], [glider(pilot=12)], 10, REFERENCE
    )
    assert report.is_empty
    assert report.total_tows == 0
    assert report.items == ()


def test_equal_dates_keep_engine_before_glider():
    report = billing_report(
        [engine(day="2024-06-01", pilot=10, billable_minutes=10)],
        [glider(day="2024-06-01", pilot=10)],
        10,
        REFERENCE,
    )
    assert [i.type for i in report.items] == [ENGINE_FLIGHT, GLIDER_TOW]
    assert report.items[0].date == date(2024, 6, 1)


@pytest.mark.django_db
def test_form_logged_flight_bills_its_duration(pilot, tow_plane):
    form = EngineFlightForm(
        data={
            "date": "2024-06-01",
            "pilot": pilot.pk,
            "departure_time": "10:00",
            "arrival_time": "11:30",
            "flight_purpose": "local",
            "engine_aircraft": tow_plane.pk,
        }
    )
    assert form.is_valid(), form.errors
    flight = form.save()

    report = billing_report([flight.to_record()], [], pilot.pk, ReferenceData.load())

    assert flight.billable_minutes == 90
    assert report.total_billable_minutes == 90
