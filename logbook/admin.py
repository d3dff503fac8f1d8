from django.contrib import admin
from import_export.admin import ImportExportModelAdmin
from reversion.admin import VersionAdmin

from utils.admin_helpers import AdminHelperMixin

from .models import Aircraft, EngineFlight, GliderFlight


# Club aircraft. Out-of-service aircraft stay listed so that past flights
# keep their names in reports.
@admin.register(Aircraft)
class AircraftAdmin(AdminHelperMixin, ImportExportModelAdmin, VersionAdmin):
    list_display = (
        "name",
        "type",
        "is_out_of_service",
        "annual_review_date",
        "last_oil_change_date",
    )
    list_filter = ("type", "is_out_of_service")
    search_fields = ("name",)
    fieldsets = (
        (None, {"fields": ("name", "type")}),
        ("Status", {"fields": ("is_out_of_service", "out_of_service_reason")}),
        ("Maintenance", {"fields": ("annual_review_date", "last_oil_change_date")}),
    )
    admin_helper_message = (
        "Aircraft: tow planes and airplanes appear in engine flights, gliders in "
        "glider flights. Mark an aircraft out of service instead of deleting it."
    )


@admin.register(EngineFlight)
class EngineFlightAdmin(AdminHelperMixin, ImportExportModelAdmin, VersionAdmin):
    list_display = (
        "date",
        "departure_time",
        "engine_aircraft",
        "pilot",
        "instructor",
        "flight_purpose",
        "flight_duration_decimal",
        "billable_minutes",
    )
    list_filter = ("flight_purpose", "engine_aircraft")
    search_fields = ("pilot__first_name", "pilot__last_name", "notes")
    date_hierarchy = "date"
    raw_id_fields = ("schedule_entry",)
    admin_helper_message = "Engine flights: corrections are versioned; use History to undo."


@admin.register(GliderFlight)
class GliderFlightAdmin(AdminHelperMixin, ImportExportModelAdmin, VersionAdmin):
    list_display = (
        "date",
        "departure_time",
        "glider_aircraft",
        "pilot",
        "instructor",
        "tow_pilot",
        "flight_purpose",
        "flight_duration_decimal",
    )
    list_filter = ("flight_purpose", "glider_aircraft")
    search_fields = ("pilot__first_name", "pilot__last_name", "notes")
    date_hierarchy = "date"
    raw_id_fields = ("schedule_entry",)
    admin_helper_message = "Glider flights: corrections are versioned; use History to undo."
