"""
Range fetcher.

Reads engine and glider flights for a date range. Reports go through
``fetch_range`` so that a failure in either table discards both halves.
"""

import logging
from typing import Protocol

from django.db.models import Q

from .exceptions import FetchFailure, ReportError, ValidationFailure
from .models import EngineFlight, GliderFlight

logger = logging.getLogger(__name__)


class FlightRepository(Protocol):
    def engine_flights(self, start, end, pilot_id=None, aircraft_id=None): ...

    def glider_flights(self, start, end, pilot_id=None, aircraft_id=None): ...


class DjangoFlightRepository:
    """Flight records from the database, filtered by date, pilot and aircraft."""

    def _query(self, model, aircraft_field, start, end, pilot_id, aircraft_id):
        qs = model.objects.filter(date__gte=start, date__lte=end)
        if pilot_id is not None:
            # Flights instructed by the pilot are included so that reports
            # can show them under the instructor.
            qs = qs.filter(Q(pilot_id=pilot_id) | Q(instructor_id=pilot_id))
        if aircraft_id is not None:
            qs = qs.filter(**{f"{aircraft_field}_id": aircraft_id})
        return [flight.to_record() for flight in qs.order_by("date", "departure_time")]

    def engine_flights(self, start, end, pilot_id=None, aircraft_id=None):
        return self._query(
            EngineFlight, "engine_aircraft", start, end, pilot_id, aircraft_id
        )

    def glider_flights(self, start, end, pilot_id=None, aircraft_id=None):
        return self._query(
            GliderFlight, "glider_aircraft", start, end, pilot_id, aircraft_id
        )


def validate_range(start, end):
    if start is None or end is None:
        raise ValidationFailure("Select a start date and an end date.")
    if end < start:
        raise ValidationFailure("The end date cannot be earlier than the start date.")


def fetch_range(repository, start, end, pilot_id=None, aircraft_id=None):
    """
    Fetch engine and glider records for ``start..end`` (inclusive).

    Returns:
        tuple: (engine_records, glider_records). Order is not guaranteed.

    Raises:
        ValidationFailure: a date is missing or the range is inverted.
        FetchFailure: either table could not be read.
    """
    validate_range(start, end)
    try:
        engine = list(
            repository.engine_flights(
                start, end, pilot_id=pilot_id, aircraft_id=aircraft_id
            )
        )
        glider = list(
            repository.glider_flights(
                start, end, pilot_id=pilot_id, aircraft_id=aircraft_id
            )
        )
    except ReportError:
        raise
    except Exception as e:
        logger.error(
            "Failed to fetch flights for %s..%s (pilot=%s, aircraft=%s)",
            start,
            end,
            pilot_id,
            aircraft_id,
            exc_info=True,
        )
        raise FetchFailure() from e
    logger.debug(
        "Fetched %d engine and %d glider flights for %s..%s",
        len(engine),
        len(glider),
        start,
        end,
    )
    return engine, glider
