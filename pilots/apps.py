from django.apps import AppConfig

#########################
# PilotsConfig Class

# Application configuration for the "pilots" app: the club roster, the
# pilot categories used by the agenda, and the link between a login and
# the pilot it belongs to.


class PilotsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pilots"
