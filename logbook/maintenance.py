from dataclasses import dataclass, field
from decimal import Decimal

from django.db.models import F, Q, Sum

from .models import Aircraft

####################################################
# Aircraft maintenance warnings
#
# Shown on the home page. Each aircraft gets at most one group of warnings:
# - out of service, with the reason entered by an admin
# - annual review expired, or due within REVIEW_NOTICE_DAYS
# - OIL_CHANGE_HOURS or more flown since the last oil change (engines only)
# Grounded aircraft come first, then the rest by name.

OIL_CHANGE_HOURS = Decimal("20")
REVIEW_NOTICE_DAYS = 30

CRITICAL = "critical"
WARNING = "warning"


@dataclass(frozen=True)
class MaintenanceWarning:
    severity: str
    message: str


@dataclass
class AircraftWarnings:
    aircraft: Aircraft
    warnings: list = field(default_factory=list)

    @property
    def grounded(self):
        return any(w.severity == CRITICAL for w in self.warnings)


def aircraft_warnings(aircraft, today, hours_since_oil_change=None):
    """Warnings for one aircraft; an empty list when nothing is due."""
    warnings = []

    if aircraft.is_out_of_service:
        reason = aircraft.out_of_service_reason or "No reason given"
        warnings.append(
            MaintenanceWarning(CRITICAL, f"{aircraft} is out of service: {reason}")
        )

    review = aircraft.annual_review_date
    if review:
        days_left = (review - today).days
        if days_left < 0:
            warnings.append(
                MaintenanceWarning(
                    CRITICAL, f"Annual review EXPIRED on {review:%d/%m/%Y}"
                )
            )
        elif days_left <= REVIEW_NOTICE_DAYS:
            plural = "" if days_left == 1 else "s"
            warnings.append(
                MaintenanceWarning(
                    WARNING,
                    f"Annual review due in {days_left} day{plural} "
                    f"({review:%d/%m/%Y})",
                )
            )

    if aircraft.is_engine and aircraft.last_oil_change_date:
        hours = hours_since_oil_change or Decimal("0")
        if hours >= OIL_CHANGE_HOURS:
            warnings.append(
                MaintenanceWarning(
                    WARNING, f"Needs an oil change ({hours:.1f} hs flown)"
                )
            )

    return warnings


def maintenance_warnings(today):
    # Hours flown after the oil change date, summed in one query for the fleet
    fleet = Aircraft.objects.annotate(
        hours_since_oil_change=Sum(
            "engine_flights__flight_duration_decimal",
            filter=Q(engine_flights__date__gt=F("last_oil_change_date")),
        )
    )

    groups = []
    for aircraft in fleet:
        warnings = aircraft_warnings(aircraft, today, aircraft.hours_since_oil_change)
        if warnings:
            groups.append(AircraftWarnings(aircraft, warnings))

    groups.sort(key=lambda g: (not g.grounded, g.aircraft.name))
    return groups
