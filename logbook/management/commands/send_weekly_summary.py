import logging
from datetime import date

from django.core.management.base import CommandError
from django.template.loader import render_to_string
from django.utils.timezone import localdate

from logbook.aggregation import ReferenceData
from logbook.exceptions import ReportError
from logbook.repository import DjangoFlightRepository, fetch_range
from logbook.weekly_summary import build_weekly_summaries, last_week_range, summary_subject
from pilots.models import Pilot
from siteconfig.models import SiteConfiguration
from utils.email import default_from_address, send_mail
from utils.management.commands.scheduled_job import ScheduledJobCommand

logger = logging.getLogger(__name__)


class Command(ScheduledJobCommand):
    help = "E-mail every pilot a summary of last week's flights"
    job_name = "send_weekly_summary"

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument(
            "--date",
            help="Treat this day (YYYY-MM-DD) as today when picking last week",
        )

    def execute_job(self, *args, **options):
        if options.get("date"):
            try:
                today = date.fromisoformat(options["date"])
            except ValueError:
                raise CommandError(f"Invalid --date: {options['date']}")
        else:
            today = localdate()

        start, end = last_week_range(today)
        self.log_info(f"Summarising flights from {start} to {end}")

        try:
            engine, glider = fetch_range(DjangoFlightRepository(), start, end)
        except ReportError as e:
            raise CommandError(e.message)

        pilots = list(Pilot.objects.select_related("user"))
        reference = ReferenceData.load()
        weeks = build_weekly_summaries(engine, glider, pilots, reference)

        config = SiteConfiguration.current()
        club_name = config.club_name if config and config.club_name else "Aeroclub"
        from_email = default_from_address(config.domain_name if config else None)
        subject = summary_subject(start, end)

        counts = {
            "sent": 0,
            "failed": 0,
            "no_email": 0,
            "no_activity": len(pilots) - len(weeks),
        }

        for week in weeks:
            pilot = week.pilot
            email = pilot.contact_email
            if not email:
                counts["no_email"] += 1
                self.log_warning(f"{pilot.display_name} has no e-mail address")
                continue

            context = {
                "pilot_name": pilot.display_name,
                "start": start,
                "end": end,
                "pic_flights": week.pic_flights,
                "instructed_flights": week.instructed_flights,
                "club_name": club_name,
            }

            if self.dry_run:
                self.log_info(f"Would send summary to {pilot.display_name} <{email}>")
                counts["sent"] += 1
                continue

            try:
                send_mail(
                    subject=subject,
                    message=render_to_string(
                        "logbook/emails/weekly_summary.txt", context
                    ),
                    from_email=from_email,
                    recipient_list=[email],
                    html_message=render_to_string(
                        "logbook/emails/weekly_summary.html", context
                    ),
                )
            except Exception as e:
                counts["failed"] += 1
                logger.error(
                    "Weekly summary to %s failed: %s", email, e, exc_info=True
                )
                self.log_error(f"Failed to send summary to {email}: {e}")
                continue

            counts["sent"] += 1

        self.log_success(
            "Weekly summary: {sent} sent, {failed} failed, "
            "{no_email} without e-mail, {no_activity} without activity".format(
                **counts
            )
        )
        return None
