import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="JobLock",
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
                (
                    "job_name",
                    models.CharField(
                        help_text="Unique identifier for the scheduled job",
                        max_length=100,
                        unique=True,
                    ),
                ),
                (
                    "locked_by",
                    models.CharField(
                        help_text="Host identifier (hostname + process ID)",
                        max_length=100,
                    ),
                ),
                (
                    "locked_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="When the lock was acquired",
                    ),
                ),
                (
                    "expires_at",
                    models.DateTimeField(
                        help_text="When the lock expires (a crashed run must not block the job forever)"
                    ),
                ),
            ],
            options={
                "verbose_name": "Job lock",
                "verbose_name_plural": "Job locks",
                "db_table": "job_locks",
            },
        ),
    ]
