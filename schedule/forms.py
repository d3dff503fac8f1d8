from django import forms

from logbook.forms import DateRangeForm
from logbook.models import Aircraft
from pilots.constants import TOW_PILOT_CATEGORY
from pilots.models import Pilot

from .models import DailyObservation, ScheduleEntry


class AgendaRangeForm(DateRangeForm):
    pass


class ScheduleEntryForm(forms.ModelForm):
    class Meta:
        model = ScheduleEntry
        fields = [
            "date",
            "start_time",
            "pilot",
            "pilot_category",
            "is_tow_pilot_available",
            "flight_type",
            "aircraft",
        ]
        widgets = {
            "date": forms.DateInput(attrs={"type": "date", "class": "form-control"}),
            "start_time": forms.TimeInput(
                attrs={"type": "time", "class": "form-control"}, format="%H:%M"
            ),
            "pilot": forms.Select(attrs={"class": "form-select"}),
            "pilot_category": forms.Select(attrs={"class": "form-select"}),
            "flight_type": forms.Select(attrs={"class": "form-select"}),
            "aircraft": forms.Select(attrs={"class": "form-select"}),
        }
        labels = {"is_tow_pilot_available": "Tow pilot available"}

    def __init__(self, *args, pilot=None, **kwargs):
        super().__init__(*args, **kwargs)
        # Non-admin pilots may only book slots for themselves
        if pilot is not None:
            self.fields["pilot"].queryset = Pilot.objects.filter(pk=pilot.pk)
            self.fields["pilot"].initial = pilot.pk
        self.fields["aircraft"].queryset = Aircraft.objects.filter(
            is_out_of_service=False
        )
        self.fields["is_tow_pilot_available"].widget = forms.NullBooleanSelect(
            attrs={"class": "form-select"}
        )

    def clean(self):
        cleaned_data = super().clean()
        pilot = cleaned_data.get("pilot")
        category = cleaned_data.get("pilot_category")

        if pilot and category and not pilot.categories.filter(pk=category.pk).exists():
            self.add_error(
                "pilot_category",
                f"{pilot.display_name} does not hold the category {category.name}.",
            )

        if category and category.name != TOW_PILOT_CATEGORY:
            cleaned_data["is_tow_pilot_available"] = None

        aircraft = cleaned_data.get("aircraft")
        if aircraft and aircraft.is_out_of_service:
            self.add_error("aircraft", f"{aircraft} is out of service.")
        return cleaned_data


class DailyObservationForm(forms.ModelForm):
    class Meta:
        model = DailyObservation
        fields = ["observation_text"]
        widgets = {
            "observation_text": forms.Textarea(attrs={"rows": 3, "class": "form-control"})
        }
        labels = {"observation_text": "Observations"}
