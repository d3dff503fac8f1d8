from datetime import date, time
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from logbook.models import Aircraft, EngineFlight, GliderFlight
from pilots.constants import (
    AIRPLANE_PILOT_CATEGORY,
    GLIDER_PILOT_CATEGORY,
    INSTRUCTOR_CATEGORY,
    TOW_PILOT_CATEGORY,
)
from pilots.models import Pilot, PilotCategory

User = get_user_model()


@pytest.fixture
def instructor_category(db):
    return PilotCategory.objects.create(name=INSTRUCTOR_CATEGORY)


@pytest.fixture
def tow_pilot_category(db):
    return PilotCategory.objects.create(name=TOW_PILOT_CATEGORY)


@pytest.fixture
def student_category(db):
    return PilotCategory.objects.create(name="Student")


@pytest.fixture
def glider_pilot_category(db):
    return PilotCategory.objects.create(name=GLIDER_PILOT_CATEGORY)


@pytest.fixture
def airplane_pilot_category(db):
    return PilotCategory.objects.create(name=AIRPLANE_PILOT_CATEGORY)


@pytest.fixture
def pilot_user(db):
    return User.objects.create_user(
        username="pilot_user", password="testpass123", email="ana@example.com"
    )


@pytest.fixture
def pilot(
    db, pilot_user, student_category, glider_pilot_category, airplane_pilot_category
):
    pilot = Pilot.objects.create(
        first_name="Ana", last_name="Gomez", user=pilot_user
    )
    pilot.categories.add(
        student_category, glider_pilot_category, airplane_pilot_category
    )
    return pilot


@pytest.fixture
def instructor(db, instructor_category):
    pilot = Pilot.objects.create(
        first_name="Bruno", last_name="Diaz", email="bruno@example.com"
    )
    pilot.categories.add(instructor_category)
    return pilot


@pytest.fixture
def tow_pilot(db, tow_pilot_category):
    pilot = Pilot.objects.create(first_name="Carla", last_name="Ruiz")
    pilot.categories.add(tow_pilot_category)
    return pilot


@pytest.fixture
def club_admin_user(db):
    user = User.objects.create_user(username="club_admin", password="testpass123")
    Pilot.objects.create(first_name="Admin", last_name="Club", user=user, is_admin=True)
    return user


@pytest.fixture
def tow_plane(db):
    return Aircraft.objects.create(name="LV-TOW", type=Aircraft.AircraftType.TOW_PLANE)


@pytest.fixture
def glider_aircraft(db):
    return Aircraft.objects.create(name="LV-GLD", type=Aircraft.AircraftType.GLIDER)


@pytest.fixture
def pilot_client(db, pilot_user, pilot):
    client = Client()
    client.force_login(pilot_user)
    return client


@pytest.fixture
def club_admin_client(db, club_admin_user):
    client = Client()
    client.force_login(club_admin_user)
    return client


@pytest.fixture
def engine_flight(db, pilot, tow_plane):
    return EngineFlight.objects.create(
        date=date(2024, 6, 1),
        pilot=pilot,
        engine_aircraft=tow_plane,
        departure_time=time(10, 0),
        arrival_time=time(11, 30),
        flight_purpose="local",
        billable_minutes=90,
    )


@pytest.fixture
def instruction_flight(db, pilot, instructor, glider_aircraft, tow_pilot, tow_plane):
    return GliderFlight.objects.create(
        date=date(2024, 6, 1),
        pilot=pilot,
        instructor=instructor,
        glider_aircraft=glider_aircraft,
        tow_pilot=tow_pilot,
        tow_aircraft=tow_plane,
        departure_time=time(9, 0),
        arrival_time=time(9, 48),
        flight_duration_decimal=Decimal("0.8"),
        flight_purpose="instruction_received",
    )
