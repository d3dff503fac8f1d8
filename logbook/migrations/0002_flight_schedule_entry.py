import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("logbook", "0001_initial"),
        ("schedule", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="engineflight",
            name="schedule_entry",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="engineflight_set",
                to="schedule.scheduleentry",
            ),
        ),
        migrations.AddField(
            model_name="gliderflight",
            name="schedule_entry",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="gliderflight_set",
                to="schedule.scheduleentry",
            ),
        ),
    ]
