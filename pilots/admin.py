from django.contrib import admin
from import_export.admin import ImportExportModelAdmin
from reversion.admin import VersionAdmin

from utils.admin_helpers import AdminHelperMixin

from .models import Pilot, PilotCategory


@admin.register(PilotCategory)
class PilotCategoryAdmin(AdminHelperMixin, admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)
    admin_helper_message = (
        "Categories pilots sign up under in the agenda. The names 'Instructor' "
        "and 'Tow pilot' drive the agenda grouping and warnings; do not rename them."
    )


# The roster can be bulk loaded from a spreadsheet (django-import-export) and
# every change is versioned (django-reversion) so an administrator can see
# who edited a pilot and restore an earlier copy.
@admin.register(Pilot)
class PilotAdmin(AdminHelperMixin, ImportExportModelAdmin, VersionAdmin):
    list_display = ("last_name", "first_name", "user", "is_admin", "medical_expiry")
    list_filter = ("is_admin", "categories")
    search_fields = ("first_name", "last_name", "email", "user__username")
    filter_horizontal = ("categories",)
    admin_helper_message = (
        "Pilots: link a login under 'User' so the pilot sees their own logbook."
    )
