from django.conf import settings
from django.db import models


class PilotCategory(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Pilot categories"

    def __str__(self):
        return self.name


#########################
# Pilot Model

# A club pilot. Logins are handled by django.contrib.auth; a pilot may be
# linked to at most one user account, and an account to at most one pilot.
# Pilots without a login still appear in the logbook (students, visiting
# tow pilots) and in the reports.

# Fields:
# - first_name / last_name: display name parts
# - categories: categories this pilot may sign up under in the agenda
# - medical_expiry: date the medical certificate lapses
# - user: optional linked login
# - is_admin: club administrator (can see every pilot's records)
# - email: address for the weekly summary; falls back to the login's e-mail


class Pilot(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    categories = models.ManyToManyField(
        PilotCategory, blank=True, related_name="pilots"
    )
    medical_expiry = models.DateField(blank=True, null=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="pilot_profile",
        null=True,
        blank=True,
    )
    is_admin = models.BooleanField(default=False)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def sort_name(self):
        return f"{self.last_name}, {self.first_name}"

    @property
    def contact_email(self):
        if self.email:
            return self.email
        if self.user and self.user.email:
            return self.user.email
        return ""

    def has_category(self, name):
        return self.categories.filter(name=name).exists()
