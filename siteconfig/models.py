from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


####################################################
# SiteConfiguration model
#
# Single-row table holding the club identity and the airfield location.
# The location drives the twilight page; the club name shows up in page
# titles, exported reports and the weekly summary e-mails.
#
# Methods:
# - current(): the configuration row, or None before the club sets one up.


class SiteConfiguration(models.Model):
    club_name = models.CharField(max_length=200)
    club_abbreviation = models.CharField(
        max_length=20, blank=True, help_text="Short abbreviation used in e-mail subjects"
    )
    domain_name = models.CharField(
        max_length=200, blank=True, help_text="Primary domain name (e.g. example.org)"
    )
    airfield_name = models.CharField(max_length=200, blank=True)
    latitude = models.DecimalField(
        max_digits=8,
        decimal_places=4,
        default=Decimal("-35.4445"),
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
        help_text="Airfield latitude in decimal degrees (south is negative)",
    )
    longitude = models.DecimalField(
        max_digits=8,
        decimal_places=4,
        default=Decimal("-60.8857"),
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
        help_text="Airfield longitude in decimal degrees (west is negative)",
    )
    timezone_name = models.CharField(
        max_length=64,
        default="America/Argentina/Buenos_Aires",
        help_text="IANA time zone used to display sun times",
    )

    class Meta:
        verbose_name = "Site Configuration"
        verbose_name_plural = "Site Configuration"

    def __str__(self):
        return f"Site Configuration for {self.club_name}"

    def clean(self):
        if SiteConfiguration.objects.exclude(id=self.id).exists():
            raise ValidationError("Only one SiteConfiguration instance allowed.")

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    @classmethod
    def current(cls):
        return cls.objects.first()
