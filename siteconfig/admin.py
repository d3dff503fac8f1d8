from django.contrib import admin

from utils.admin_helpers import AdminHelperMixin

from .models import SiteConfiguration


@admin.register(SiteConfiguration)
class SiteConfigurationAdmin(AdminHelperMixin, admin.ModelAdmin):
    list_display = ("club_name", "airfield_name", "latitude", "longitude")
    admin_helper_message = (
        "Club identity and airfield location. Only one configuration row is allowed."
    )

    def has_add_permission(self, request):
        # Singleton
        return not SiteConfiguration.objects.exists()
