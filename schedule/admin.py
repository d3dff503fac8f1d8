from django.contrib import admin
from import_export.admin import ImportExportModelAdmin
from reversion.admin import VersionAdmin

from utils.admin_helpers import AdminHelperMixin

from .models import DailyObservation, ScheduleEntry


@admin.register(ScheduleEntry)
class ScheduleEntryAdmin(AdminHelperMixin, ImportExportModelAdmin, VersionAdmin):
    list_display = (
        "date",
        "start_time",
        "pilot",
        "pilot_category",
        "flight_type",
        "aircraft",
        "is_tow_pilot_available",
    )
    list_filter = ("pilot_category", "flight_type", "aircraft")
    search_fields = ("pilot__first_name", "pilot__last_name")
    date_hierarchy = "date"
    admin_helper_message = (
        "Agenda slots. Pilots normally manage their own slots from the agenda page."
    )


@admin.register(DailyObservation)
class DailyObservationAdmin(AdminHelperMixin, VersionAdmin):
    list_display = ("date", "observation_text", "updated_by", "updated_at")
    date_hierarchy = "date"
    readonly_fields = ("updated_by", "updated_at")
