from datetime import date, time, timedelta
from io import StringIO
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from django.core import mail
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from logbook.models import GliderFlight
from logbook.weekly_summary import build_weekly_summaries, last_week_range, summary_subject
from utils.models import JobLock

from .helpers import REFERENCE, engine, glider

WEDNESDAY = "2024-06-05"


@pytest.mark.parametrize(
    "today",
    [date(2024, 6, 3), date(2024, 6, 5), date(2024, 6, 9)],
)
def test_last_week_range_is_previous_monday_to_sunday(today):
    assert last_week_range(today) == (date(2024, 5, 27), date(2024, 6, 2))


def test_summary_subject():
    assert (
        summary_subject(date(2024, 5, 27), date(2024, 6, 2))
        == "Weekly flight summary - 27/05/24 to 02/06/24"
    )


def test_build_weekly_summaries_lists_instructor_flights():
    pilots = [SimpleNamespace(pk=pk) for pk in (10, 11, 12)]
    weeks = build_weekly_summaries(
        [engine(pilot=10)],
        [glider(pilot=10, instructor=11, purpose="instruction_received")],
        pilots,
        REFERENCE,
    )

    by_pilot = {week.pilot.pk: week for week in weeks}
    assert set(by_pilot) == {10, 11}
    assert [line.kind_label for line in by_pilot[10].pic_flights] == ["Engine", "Glider"]
    assert by_pilot[11].pic_flights == []
    assert by_pilot[11].instructed_flights[0].student_name == "Ana Gomez"


def _run(**options):
    out = StringIO()
    call_command("send_weekly_summary", date=WEDNESDAY, stdout=out, **options)
    return out.getvalue()


@pytest.mark.django_db
def test_sends_one_mail_per_active_pilot(
    settings, engine_flight, instruction_flight, club_admin_user
):
    settings.EMAIL_DEV_MODE = False
    output = _run()

    recipients = sorted(message.to[0] for message in mail.outbox)
    assert recipients == ["ana@example.com", "bruno@example.com"]
    assert mail.outbox[0].subject == "Weekly flight summary - 27/05/24 to 02/06/24"

    bruno = next(m for m in mail.outbox if m.to == ["bruno@example.com"])
    assert "instruction to Ana Gomez" in bruno.body
    assert "2 sent, 0 failed, 0 without e-mail, 2 without activity" in output


@pytest.mark.django_db
def test_pilot_without_email_is_counted(
    settings, tow_pilot, glider_aircraft
):
    settings.EMAIL_DEV_MODE = False
    GliderFlight.objects.create(
        date=date(2024, 5, 28),
        pilot=tow_pilot,
        glider_aircraft=glider_aircraft,
        departure_time=time(14, 0),
        arrival_time=time(15, 0),
        flight_purpose="sport",
    )
    output = _run()
    assert mail.outbox == []
    assert "0 sent, 0 failed, 1 without e-mail, 0 without activity" in output


@pytest.mark.django_db
def test_flights_outside_last_week_are_ignored(settings, engine_flight):
    settings.EMAIL_DEV_MODE = False
    out = StringIO()
    call_command("send_weekly_summary", date="2024-06-20", stdout=out)
    assert mail.outbox == []


@pytest.mark.django_db
def test_send_failure_is_counted_and_run_continues(
    settings, engine_flight, instruction_flight
):
    settings.EMAIL_DEV_MODE = False
    with patch(
        "logbook.management.commands.send_weekly_summary.send_mail",
        side_effect=ConnectionRefusedError("smtp down"),
    ):
        output = _run()
    assert "0 sent, 2 failed" in output


@pytest.mark.django_db
def test_dry_run_sends_nothing(settings, engine_flight):
    settings.EMAIL_DEV_MODE = False
    output = _run(dry_run=True)
    assert mail.outbox == []
    assert "Would send summary to Ana Gomez" in output


@pytest.mark.django_db
def test_held_lock_skips_the_run(settings, engine_flight):
    settings.EMAIL_DEV_MODE = False
    JobLock.objects.create(
        job_name="send_weekly_summary",
        locked_by="other-host-1",
        expires_at=timezone.now() + timedelta(minutes=30),
    )
    output = _run()
    assert mail.outbox == []
    assert "already running on other-host-1" in output


@pytest.mark.django_db
def test_invalid_date_is_rejected():
    with pytest.raises(CommandError):
        call_command("send_weekly_summary", date="not-a-date", stdout=StringIO())
