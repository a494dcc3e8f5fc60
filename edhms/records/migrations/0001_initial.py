import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hospitals", "0001_initial"),
        ("patients", "0001_initial"),
        ("practitioners", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="MedicalRecord",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("diagnosis", models.TextField()),
                ("symptoms", models.JSONField(blank=True, default=list)),
                ("treatment", models.TextField(blank=True, default="")),
                ("medications", models.JSONField(blank=True, default=list)),
                ("vital_signs", models.JSONField(blank=True, default=dict)),
                ("test_results", models.JSONField(blank=True, default=dict)),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "severity_level",
                    models.CharField(
                        blank=True,
                        choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("critical", "Critical")],
                        default="",
                        max_length=16,
                    ),
                ),
                (
                    "visit_type",
                    models.CharField(
                        choices=[
                            ("emergency", "Emergency"),
                            ("outpatient", "Outpatient"),
                            ("inpatient", "Inpatient"),
                            ("follow-up", "Follow-up"),
                        ],
                        db_index=True,
                        default="emergency",
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("discharged", "Discharged"), ("transferred", "Transferred")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("visit_date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("discharge_date", models.DateTimeField(blank=True, null=True)),
                (
                    "hospital",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="medical_records",
                        to="hospitals.hospital",
                    ),
                ),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="medical_records",
                        to="patients.patient",
                    ),
                ),
                (
                    "practitioner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="medical_records",
                        to="practitioners.practitioner",
                    ),
                ),
            ],
            options={
                "db_table": "records_medical_record",
                "indexes": [
                    models.Index(fields=["patient", "visit_date"], name="record_patient_visit_idx"),
                ],
            },
        ),
    ]
