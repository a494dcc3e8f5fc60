# edhms/alerts/models.py
from __future__ import annotations

from django.db import models

from edhms.common.models import EntityModel, SeverityLevel


class AlertType(models.TextChoices):
    BED_SHORTAGE = "bed_shortage", "Bed shortage"
    EQUIPMENT_FAILURE = "equipment_failure", "Equipment failure"
    STAFF_SHORTAGE = "staff_shortage", "Staff shortage"
    PATIENT_EMERGENCY = "patient_emergency", "Patient emergency"
    DISASTER = "disaster", "Disaster"


class AlertStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    ACKNOWLEDGED = "acknowledged", "Acknowledged"
    RESOLVED = "resolved", "Resolved"


# resolved is terminal; nothing re-opens an alert.
ALLOWED_TRANSITIONS = {
    AlertStatus.ACTIVE: {AlertStatus.ACKNOWLEDGED, AlertStatus.RESOLVED},
    AlertStatus.ACKNOWLEDGED: {AlertStatus.RESOLVED},
    AlertStatus.RESOLVED: set(),
}


class EmergencyAlert(EntityModel):
    hospital = models.ForeignKey("hospitals.Hospital", on_delete=models.PROTECT, related_name="alerts")
    patient = models.ForeignKey(
        "patients.Patient",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="alerts",
    )

    alert_type = models.CharField(
        max_length=32,
        choices=AlertType.choices,
        default=AlertType.PATIENT_EMERGENCY,
        db_index=True,
    )
    severity = models.CharField(
        max_length=16,
        choices=SeverityLevel.choices,
        default=SeverityLevel.MEDIUM,
        db_index=True,
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    status = models.CharField(
        max_length=16,
        choices=AlertStatus.choices,
        default=AlertStatus.ACTIVE,
        db_index=True,
    )

    created_by = models.ForeignKey(
        "practitioners.Practitioner",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="alerts_created",
    )
    resolved_by = models.ForeignKey(
        "practitioners.Practitioner",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="alerts_resolved",
    )
    resolved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "alerts_emergency_alert"
        indexes = [
            models.Index(fields=["status", "severity"], name="alert_status_severity_idx"),
        ]

    def __str__(self) -> str:
        return f"[{self.severity}] {self.title}"
