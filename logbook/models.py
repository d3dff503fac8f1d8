from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from .purposes import (
    ENGINE_PURPOSES,
    GLIDER_PURPOSES,
    FlightPurpose,
    purpose_choices,
    purpose_name,
)
from .records import EngineFlightRecord, GliderFlightRecord


####################################################
# Aircraft model
#
# One table for every club aircraft. ``type`` decides which flight form an
# aircraft may appear in: engine flights use tow planes and airplanes,
# glider flights use gliders (and tow planes for the tow).


class Aircraft(models.Model):
    class AircraftType(models.TextChoices):
        TOW_PLANE = "tow_plane", "Tow plane"
        GLIDER = "glider", "Glider"
        AIRPLANE = "airplane", "Airplane"

    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=AircraftType.choices)
    is_out_of_service = models.BooleanField(default=False)
    out_of_service_reason = models.TextField(blank=True)
    annual_review_date = models.DateField(blank=True, null=True)
    last_oil_change_date = models.DateField(blank=True, null=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Aircraft"

    def __str__(self):
        return self.name

    @property
    def is_engine(self):
        return self.type in (self.AircraftType.TOW_PLANE, self.AircraftType.AIRPLANE)


def _elapsed(departure_time, arrival_time):
    departure = datetime.combine(date.today(), departure_time)
    arrival = datetime.combine(date.today(), arrival_time)
    if arrival < departure:
        arrival += timedelta(days=1)
    return arrival - departure


def duration_hours(departure_time, arrival_time):
    """
    Decimal hours between two times of the same day, rounded to one decimal.
    An arrival earlier than the departure is taken to be after midnight.
    """
    elapsed = _elapsed(departure_time, arrival_time)
    hours = Decimal(elapsed.total_seconds()) / Decimal(3600)
    return hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def duration_minutes(departure_time, arrival_time):
    """Whole minutes between two times, crossing midnight like duration_hours."""
    return int(_elapsed(departure_time, arrival_time).total_seconds() // 60)


####################################################
# Flight models
#
# Engine and glider flights live in separate tables and share the abstract
# base below. The pilot is the pilot in command; ``instructor`` is set for
# instructional flights. A flight may be linked to the agenda slot it was
# flown from.
#
# Methods:
# - save: fills flight_duration_decimal from the times when it was left empty.
#   Engine flights also fill billable_minutes unless the flight is a tow.
# - to_record: the immutable record used by reports.


class BaseFlight(models.Model):
    date = models.DateField()
    pilot = models.ForeignKey(
        "pilots.Pilot",
        on_delete=models.SET_NULL,
        null=True,
        related_name="%(class)s_as_pilot",
    )
    instructor = models.ForeignKey(
        "pilots.Pilot",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_as_instructor",
    )
    departure_time = models.TimeField()
    arrival_time = models.TimeField()
    flight_duration_decimal = models.DecimalField(
        max_digits=5,
        decimal_places=1,
        blank=True,
        null=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Hours, e.g. 1.5. Calculated from the times when left empty.",
    )
    notes = models.TextField(blank=True)
    schedule_entry = models.ForeignKey(
        "schedule.ScheduleEntry",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_set",
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
        abstract = True
        ordering = ["-date", "-departure_time"]

    def save(self, *args, **kwargs):
        if self.flight_duration_decimal is None:
            self.flight_duration_decimal = duration_hours(
                self.departure_time, self.arrival_time
            )
        super().save(*args, **kwargs)

    @property
    def purpose_display(self):
        return purpose_name(self.flight_purpose)

    def _common_record_fields(self):
        return {
            "id": self.pk,
            "date": self.date,
            "pilot_id": self.pilot_id,
            "instructor_id": self.instructor_id,
            "departure_time": self.departure_time,
            "arrival_time": self.arrival_time,
            "flight_duration_decimal": self.flight_duration_decimal or Decimal("0"),
            "flight_purpose": self.flight_purpose,
            "notes": self.notes or "",
            "schedule_entry_id": self.schedule_entry_id,
        }


class EngineFlight(BaseFlight):
    engine_aircraft = models.ForeignKey(
        Aircraft, on_delete=models.PROTECT, related_name="engine_flights"
    )
    flight_purpose = models.CharField(
        max_length=30, choices=purpose_choices(ENGINE_PURPOSES)
    )
    billable_minutes = models.PositiveIntegerField(blank=True, null=True)
    route_from_to = models.CharField(max_length=200, blank=True)
    landings_count = models.PositiveIntegerField(blank=True, null=True)
    tows_count = models.PositiveIntegerField(blank=True, null=True)
    oil_added_liters = models.DecimalField(
        max_digits=5, decimal_places=1, blank=True, null=True
    )
    fuel_added_liters = models.DecimalField(
        max_digits=6, decimal_places=1, blank=True, null=True
    )

    class Meta(BaseFlight.Meta):
        indexes = [
            models.Index(fields=["date"], name="engineflight_date_idx"),
            models.Index(fields=["pilot"], name="engineflight_pilot_idx"),
            models.Index(fields=["instructor"], name="engineflight_instr_idx"),
            models.Index(
                fields=["engine_aircraft", "date"], name="engineflight_aircraft_idx"
            ),
        ]

    def __str__(self):
        return f"{self.date} {self.engine_aircraft} {self.pilot}"

    def save(self, *args, **kwargs):
        # Tows are billed through the glider flight, not the tow plane time
        if self.billable_minutes is None and self.flight_purpose != FlightPurpose.TOW:
            self.billable_minutes = duration_minutes(
                self.departure_time, self.arrival_time
            )
        super().save(*args, **kwargs)

    def to_record(self):
        return EngineFlightRecord(
            **self._common_record_fields(),
            engine_aircraft_id=self.engine_aircraft_id,
            billable_minutes=self.billable_minutes,
            route_from_to=self.route_from_to or "",
            landings_count=self.landings_count,
            tows_count=self.tows_count,
            oil_added_liters=self.oil_added_liters,
            fuel_added_liters=self.fuel_added_liters,
        )


class GliderFlight(BaseFlight):
    glider_aircraft = models.ForeignKey(
        Aircraft, on_delete=models.PROTECT, related_name="glider_flights"
    )
    flight_purpose = models.CharField(
        max_length=30, choices=purpose_choices(GLIDER_PURPOSES)
    )
    tow_pilot = models.ForeignKey(
        "pilots.Pilot",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="glider_flights_as_tow_pilot",
    )
    tow_aircraft = models.ForeignKey(
        Aircraft,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tows",
    )

    class Meta(BaseFlight.Meta):
        indexes = [
            models.Index(fields=["date"], name="gliderflight_date_idx"),
            models.Index(fields=["pilot"], name="gliderflight_pilot_idx"),
            models.Index(fields=["instructor"], name="gliderflight_instr_idx"),
            models.Index(
                fields=["glider_aircraft", "date"], name="gliderflight_aircraft_idx"
            ),
        ]

    def __str__(self):
        return f"{self.date} {self.glider_aircraft} {self.pilot}"

    def to_record(self):
        return GliderFlightRecord(
            **self._common_record_fields(),
            glider_aircraft_id=self.glider_aircraft_id,
            tow_pilot_id=self.tow_pilot_id,
            tow_aircraft_id=self.tow_aircraft_id,
        )
