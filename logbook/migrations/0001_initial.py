import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

ENGINE_PURPOSES = [
    ("training", "Training"),
    ("refresher", "Refresher"),
    ("tow", "Tow"),
    ("instruction_received", "Instruction (Received)"),
    ("instruction_given", "Instruction (Given)"),
    ("local", "Local"),
    ("trip", "Cross-country"),
]
GLIDER_PURPOSES = [
    ("training", "Training"),
    ("refresher", "Refresher"),
    ("sport", "Sport"),
    ("instruction_received", "Instruction (Received)"),
    ("instruction_given", "Instruction (Given)"),
]


def common_flight_fields():
    return [
        (
            "id",
            models.BigAutoField(
                auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
            ),
        ),
        ("date", models.DateField()),
        ("departure_time", models.TimeField()),
        ("arrival_time", models.TimeField()),
        (
            "flight_duration_decimal",
            models.DecimalField(
                blank=True,
                decimal_places=1,
                help_text="Hours, e.g. 1.5. Calculated from the times when left empty.",
                max_digits=5,
                null=True,
                validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
            ),
        ),
        ("notes", models.TextField(blank=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        (
            "created_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]


def pilot_fields(prefix):
    return [
        (
            "pilot",
            models.ForeignKey(
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name=f"{prefix}_as_pilot",
                to="pilots.pilot",
            ),
        ),
        (
            "instructor",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name=f"{prefix}_as_instructor",
                to="pilots.pilot",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("pilots", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Aircraft",
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
                ("name", models.CharField(max_length=100)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("tow_plane", "Tow plane"),
                            ("glider", "Glider"),
                            ("airplane", "Airplane"),
                        ],
                        max_length=20,
                    ),
                ),
                ("is_out_of_service", models.BooleanField(default=False)),
                ("out_of_service_reason", models.TextField(blank=True)),
                ("annual_review_date", models.DateField(blank=True, null=True)),
                ("last_oil_change_date", models.DateField(blank=True, null=True)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "Aircraft",
            },
        ),
        migrations.CreateModel(
            name="EngineFlight",
            fields=common_flight_fields()
            + pilot_fields("engineflight")
            + [
                (
                    "engine_aircraft",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="engine_flights",
                        to="logbook.aircraft",
                    ),
                ),
                (
                    "flight_purpose",
                    models.CharField(choices=ENGINE_PURPOSES, max_length=30),
                ),
                ("billable_minutes", models.PositiveIntegerField(blank=True, null=True)),
                ("route_from_to", models.CharField(blank=True, max_length=200)),
                ("landings_count", models.PositiveIntegerField(blank=True, null=True)),
                ("tows_count", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "oil_added_liters",
                    models.DecimalField(
                        blank=True, decimal_places=1, max_digits=5, null=True
                    ),
                ),
                (
                    "fuel_added_liters",
                    models.DecimalField(
                        blank=True, decimal_places=1, max_digits=6, null=True
                    ),
                ),
            ],
            options={
                "ordering": ["-date", "-departure_time"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["date"], name="engineflight_date_idx"),
                    models.Index(fields=["pilot"], name="engineflight_pilot_idx"),
                    models.Index(fields=["instructor"], name="engineflight_instr_idx"),
                    models.Index(
                        fields=["engine_aircraft", "date"],
                        name="engineflight_aircraft_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="GliderFlight",
            fields=common_flight_fields()
            + pilot_fields("gliderflight")
            + [
                (
                    "glider_aircraft",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="glider_flights",
                        to="logbook.aircraft",
                    ),
                ),
                (
                    "flight_purpose",
                    models.CharField(choices=GLIDER_PURPOSES, max_length=30),
                ),
                (
                    "tow_pilot",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="glider_flights_as_tow_pilot",
                        to="pilots.pilot",
                    ),
                ),
                (
                    "tow_aircraft",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="tows",
                        to="logbook.aircraft",
                    ),
                ),
            ],
            options={
                "ordering": ["-date", "-departure_time"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["date"], name="gliderflight_date_idx"),
                    models.Index(fields=["pilot"], name="gliderflight_pilot_idx"),
                    models.Index(fields=["instructor"], name="gliderflight_instr_idx"),
                    models.Index(
                        fields=["glider_aircraft", "date"],
                        name="gliderflight_aircraft_idx",
                    ),
                ],
            },
        ),
    ]
