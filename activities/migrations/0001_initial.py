import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import model_utils.fields

import activities.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("groups", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "created",
                    model_utils.fields.AutoCreatedField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                        verbose_name="created",
                    ),
                ),
                (
                    "modified",
                    model_utils.fields.AutoLastModifiedField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                        verbose_name="modified",
                    ),
                ),
                ("meta", models.JSONField(blank=True, default=dict, verbose_name="meta")),
                ("name", models.CharField(max_length=255)),
                (
                    "recurrence_rule",
                    models.CharField(
                        max_length=512,
                        validators=[activities.models.recurrence_rule_validator],
                    ),
                ),
                ("location", models.CharField(blank=True, max_length=255)),
                ("time", models.TimeField()),
                (
                    "starts_on",
                    models.DateField(default=activities.models.default_starts_on),
                ),
                (
                    "group",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to="groups.group",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "activities",
            },
        ),
    ]
