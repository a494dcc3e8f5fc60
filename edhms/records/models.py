# edhms/records/models.py
from django.db import models
from django.utils import timezone

from edhms.common.models import EntityModel, SeverityLevel


class VisitType(models.TextChoices):
    EMERGENCY = "emergency", "Emergency"
    OUTPATIENT = "outpatient", "Outpatient"
    INPATIENT = "inpatient", "Inpatient"
    FOLLOW_UP = "follow-up", "Follow-up"


class RecordStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    DISCHARGED = "discharged", "Discharged"
    TRANSFERRED = "transferred", "Transferred"


class MedicalRecord(EntityModel):
    """One visit of a patient to a hospital."""
    patient = models.ForeignKey("patients.Patient", on_delete=models.PROTECT, related_name="medical_records")
    hospital = models.ForeignKey("hospitals.Hospital", on_delete=models.PROTECT, related_name="medical_records")
    practitioner = models.ForeignKey(
        "practitioners.Practitioner",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="medical_records",
    )

    diagnosis = models.TextField()
    symptoms = models.JSONField(default=list, blank=True)
    treatment = models.TextField(blank=True, default="")
    medications = models.JSONField(default=list, blank=True)
    vital_signs = models.JSONField(default=dict, blank=True)
    test_results = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True, default="")

    severity_level = models.CharField(max_length=16, choices=SeverityLevel.choices, blank=True, default="")
    visit_type = models.CharField(
        max_length=16,
        choices=VisitType.choices,
        default=VisitType.EMERGENCY,
        db_index=True,
    )
    status = models.CharField(max_length=16, choices=RecordStatus.choices, default=RecordStatus.ACTIVE)

    visit_date = models.DateTimeField(default=timezone.now, db_index=True)
    discharge_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "records_medical_record"
        indexes = [
            models.Index(fields=["patient", "visit_date"], name="record_patient_visit_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.diagnosis[:40]} ({self.visit_type})"
