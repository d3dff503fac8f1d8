from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SiteConfiguration",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("club_name", models.CharField(max_length=200)),
                (
                    "club_abbreviation",
                    models.CharField(
                        blank=True,
                        help_text="Short abbreviation used in e-mail subjects",
                        max_length=20,
                    ),
                ),
                (
                    "domain_name",
                    models.CharField(
                        blank=True,
                        help_text="Primary domain name (e.g. example.org)",
                        max_length=200,
                    ),
                ),
                ("airfield_name", models.CharField(blank=True, max_length=200)),
                (
                    "latitude",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("-35.4445"),
                        help_text="Airfield latitude in decimal degrees (south is negative)",
                        max_digits=8,
                        validators=[
                            django.core.validators.MinValueValidator(-90),
                            django.core.validators.MaxValueValidator(90),
                        ],
                    ),
                ),
                (
                    "longitude",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("-60.8857"),
                        help_text="Airfield longitude in decimal degrees (west is negative)",
                        max_digits=8,
                        validators=[
                            django.core.validators.MinValueValidator(-180),
                            django.core.validators.MaxValueValidator(180),
                        ],
                    ),
                ),
                (
                    "timezone_name",
                    models.CharField(
                        default="America/Argentina/Buenos_Aires",
                        help_text="IANA time zone used to display sun times",
                        max_length=64,
                    ),
                ),
            ],
            options={
                "verbose_name": "Site Configuration",
                "verbose_name_plural": "Site Configuration",
            },
        ),
    ]
