from django.conf import settings
from django.db import models


#########################
# ScheduleEntry Model

# One slot in the agenda: a pilot signing up to fly (or to instruct, or to
# tow) on a given day. The category is chosen per slot because a pilot may
# hold several; it decides how the slot is grouped in the agenda exports.

# Fields:
# - date / start_time: when the slot starts
# - pilot / pilot_category: who, and in which role
# - is_tow_pilot_available: only meaningful for tow pilot slots; True once
#   the tow pilot has confirmed
# - flight_type: what the slot is for
# - aircraft: optional aircraft reserved for the slot


class ScheduleEntry(models.Model):
    class FlightType(models.TextChoices):
        INSTRUCTION_TAKEN = "instruction_taken", "Instruction (taken)"
        INSTRUCTION_GIVEN = "instruction_given", "Instruction (given)"
        LOCAL = "local", "Local"
        SPORT = "sport", "Sport"
        TOWAGE = "towage", "Towage"
        TRIP = "trip", "Cross-country"

    date = models.DateField()
    start_time = models.TimeField()
    pilot = models.ForeignKey(
        "pilots.Pilot", on_delete=models.CASCADE, related_name="schedule_entries"
    )
    pilot_category = models.ForeignKey(
        "pilots.PilotCategory", on_delete=models.PROTECT, related_name="+"
    )
    is_tow_pilot_available = models.BooleanField(null=True, blank=True)
    flight_type = models.CharField(max_length=30, choices=FlightType.choices)
    aircraft = models.ForeignKey(
        "logbook.Aircraft",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="schedule_entries",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date", "start_time"]
        verbose_name_plural = "Schedule entries"
        indexes = [models.Index(fields=["date"], name="scheduleentry_date_idx")]

    def __str__(self):
        return f"{self.date} {self.start_time:%H:%M} {self.pilot}"


class DailyObservation(models.Model):
    date = models.DateField(unique=True)
    observation_text = models.TextField(blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date"]

    def __str__(self):
        return f"Observation for {self.date}"
