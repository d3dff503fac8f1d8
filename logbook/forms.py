from django import forms
from django.core.exceptions import ValidationError

from pilots.constants import (
    AIRPLANE_PILOT_CATEGORY,
    GLIDER_PILOT_CATEGORY,
    INSTRUCTOR_CATEGORY,
    TOW_PILOT_CATEGORY,
)
from pilots.models import Pilot

from .models import Aircraft, EngineFlight, GliderFlight
from .purposes import FlightPurpose, is_instruction


def validate_glider_availability(flight, glider, flight_date, departure_time, arrival_time):
    """
    Reject a glider flight that overlaps another flight of the same glider
    on the same day.

    Raises:
        ValidationError: if the glider is already logged for overlapping times
    """
    if not glider or not flight_date or not departure_time or not arrival_time:
        return
    # Flights crossing midnight are not checked
    if arrival_time <= departure_time:
        return

    others = GliderFlight.objects.filter(glider_aircraft=glider, date=flight_date)
    if flight and flight.pk:
        others = others.exclude(pk=flight.pk)

    for other in others:
        if other.arrival_time <= other.departure_time:
            continue
        if departure_time < other.arrival_time and arrival_time > other.departure_time:
            raise ValidationError(
                f"{glider} is already logged on another flight from "
                f"{other.departure_time:%H:%M} to {other.arrival_time:%H:%M}."
            )


def _pilots_in(category):
    return Pilot.objects.filter(categories__name=category).distinct()


class DateRangeForm(forms.Form):
    start_date = forms.DateField(
        widget=forms.DateInput(attrs={"type": "date", "class": "form-control"})
    )
    end_date = forms.DateField(
        widget=forms.DateInput(attrs={"type": "date", "class": "form-control"})
    )

    def clean(self):
        cleaned_data = super().clean()
        start = cleaned_data.get("start_date")
        end = cleaned_data.get("end_date")
        if start and end and end < start:
            raise forms.ValidationError(
                "The end date cannot be earlier than the start date."
            )
        return cleaned_data


class HistoryFilterForm(DateRangeForm):
    """Date range plus an optional pilot; leaving the pilot empty means all pilots."""

    pilot = forms.ModelChoiceField(
        queryset=Pilot.objects.all(),
        required=False,
        empty_label="All pilots",
        widget=forms.Select(attrs={"class": "form-select"}),
    )

    def __init__(self, *args, restrict_to=None, **kwargs):
        super().__init__(*args, **kwargs)
        if restrict_to is not None:
            self.fields["pilot"].queryset = Pilot.objects.filter(pk=restrict_to.pk)
            self.fields["pilot"].required = True
            self.fields["pilot"].empty_label = None


class BillingFilterForm(HistoryFilterForm):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["pilot"].required = True
        self.fields["pilot"].empty_label = None


class AircraftActivityForm(DateRangeForm):
    aircraft = forms.ModelChoiceField(
        queryset=Aircraft.objects.all(),
        widget=forms.Select(attrs={"class": "form-select"}),
    )


TIME_WIDGET = forms.TimeInput(
    attrs={"type": "time", "class": "form-control"}, format="%H:%M"
)


MEDICAL_NOTICE_DAYS = 30


class BaseFlightForm(forms.ModelForm):
    """
    Shared validation for engine and glider flights.

    Besides errors, ``warnings`` collects notices that do not block saving,
    such as a medical certificate about to lapse.
    """

    common_fields = [
        "date",
        "pilot",
        "instructor",
        "departure_time",
        "arrival_time",
        "flight_duration_decimal",
        "flight_purpose",
        "notes",
    ]
    # Fields holding a crew member whose medical is checked
    crew_fields = ("pilot", "instructor")
    # Filled from the times on save; recalculated when only the times change
    derived_fields = ("flight_duration_decimal",)
    pilot_categories = ()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["instructor"].queryset = _pilots_in(INSTRUCTOR_CATEGORY)
        self.fields["pilot"].required = True
        self.warnings = []

    def clean(self):
        cleaned_data = super().clean()
        pilot = cleaned_data.get("pilot")
        instructor = cleaned_data.get("instructor")
        purpose = cleaned_data.get("flight_purpose")

        if pilot and instructor and pilot == instructor:
            raise forms.ValidationError(
                "The same pilot cannot be both pilot and instructor on the same flight."
            )
        if purpose == FlightPurpose.INSTRUCTION_RECEIVED and not instructor:
            self.add_error("instructor", "Instructional flights need an instructor.")
        if instructor and purpose and not is_instruction(purpose):
            self.add_error(
                "flight_purpose",
                "Only instructional flights can have an instructor.",
            )
        if pilot and self.pilot_categories and not any(
            pilot.has_category(name) for name in self.pilot_categories
        ):
            self.add_error(
                "pilot",
                f"{pilot} needs one of these categories to fly this aircraft: "
                f"{', '.join(self.pilot_categories)}.",
            )
        self._check_medicals(cleaned_data)
        self._reset_derived_fields(cleaned_data)
        return cleaned_data

    def _check_medicals(self, cleaned_data):
        flight_date = cleaned_data.get("date")
        if not flight_date:
            return
        for field in self.crew_fields:
            person = cleaned_data.get(field)
            if not person or not person.medical_expiry:
                continue
            expiry = person.medical_expiry
            if expiry < flight_date:
                self.add_error(
                    field, f"{person}'s medical expired on {expiry:%d/%m/%Y}."
                )
            elif (expiry - flight_date).days <= MEDICAL_NOTICE_DAYS:
                self.warnings.append(
                    f"{person}'s medical expires on {expiry:%d/%m/%Y}."
                )

    def _reset_derived_fields(self, cleaned_data):
        if not self.instance.pk:
            return
        changed = set(self.changed_data)
        if not changed & {"departure_time", "arrival_time"}:
            return
        for field in self.derived_fields:
            if field not in changed:
                cleaned_data[field] = None


class EngineFlightForm(BaseFlightForm):
    derived_fields = ("flight_duration_decimal", "billable_minutes")
    pilot_categories = (AIRPLANE_PILOT_CATEGORY, TOW_PILOT_CATEGORY)

    class Meta:
        model = EngineFlight
        fields = BaseFlightForm.common_fields + [
            "engine_aircraft",
            "billable_minutes",
            "route_from_to",
            "landings_count",
            "tows_count",
            "oil_added_liters",
            "fuel_added_liters",
        ]
        widgets = {
            "date": forms.DateInput(attrs={"type": "date", "class": "form-control"}),
            "departure_time": TIME_WIDGET,
            "arrival_time": TIME_WIDGET,
            "notes": forms.Textarea(attrs={"rows": 3, "class": "form-control"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["engine_aircraft"].queryset = Aircraft.objects.exclude(
            type=Aircraft.AircraftType.GLIDER
        )


class GliderFlightForm(BaseFlightForm):
    crew_fields = ("pilot", "instructor", "tow_pilot")
    pilot_categories = (GLIDER_PILOT_CATEGORY, INSTRUCTOR_CATEGORY)

    class Meta:
        model = GliderFlight
        fields = BaseFlightForm.common_fields + [
            "glider_aircraft",
            "tow_pilot",
            "tow_aircraft",
        ]
        widgets = {
            "date": forms.DateInput(attrs={"type": "date", "class": "form-control"}),
            "departure_time": TIME_WIDGET,
            "arrival_time": TIME_WIDGET,
            "notes": forms.Textarea(attrs={"rows": 3, "class": "form-control"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["glider_aircraft"].queryset = Aircraft.objects.filter(
            type=Aircraft.AircraftType.GLIDER
        )
        self.fields["tow_aircraft"].queryset = Aircraft.objects.filter(
            type=Aircraft.AircraftType.TOW_PLANE
        )
        self.fields["tow_pilot"].queryset = _pilots_in(TOW_PILOT_CATEGORY)

    def clean(self):
        cleaned_data = super().clean()
        glider = cleaned_data.get("glider_aircraft")
        if glider and glider.is_out_of_service:
            self.warnings.append(f"{glider} is marked out of service.")
        validate_glider_availability(
            self.instance,
            glider,
            cleaned_data.get("date"),
            cleaned_data.get("departure_time"),
            cleaned_data.get("arrival_time"),
        )
        return cleaned_data
