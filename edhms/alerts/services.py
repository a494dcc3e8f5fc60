# edhms/alerts/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from edhms.alerts.models import ALLOWED_TRANSITIONS, AlertStatus, AlertType, EmergencyAlert
from edhms.audit.services import AuditService
from edhms.common.api.exceptions import ConflictError
from edhms.common.models import SeverityLevel
from edhms.hospitals.models import Hospital
from edhms.patients.models import Patient
from edhms.practitioners.models import Practitioner

logger = logging.getLogger(__name__)


class AlertService:
    """
    Alert writes.

    Lifecycle: active -> acknowledged -> resolved, or active -> resolved.
    Status only moves through acknowledge()/resolve(); the edit form
    (update) cannot touch it.
    """

    EDITABLE = {"hospital_id", "patient_id", "alert_type", "severity", "title", "description"}

    @staticmethod
    def _check_refs(*, hospital_id: UUID | None = None, patient_id: UUID | None = None) -> None:
        if hospital_id and not Hospital.objects.filter(id=hospital_id).exists():
            raise ValidationError({"hospital_id": "Hospital not found."})
        if patient_id and not Patient.objects.filter(id=patient_id).exists():
            raise ValidationError({"patient_id": "Patient not found."})

    @staticmethod
    def _practitioner(practitioner_id: UUID | None, field: str) -> Practitioner | None:
        if not practitioner_id:
            return None
        practitioner = Practitioner.objects.filter(id=practitioner_id).first()
        if practitioner is None:
            raise ValidationError({field: "Practitioner not found."})
        return practitioner

    @staticmethod
    @transaction.atomic
    def create_alert(
        *,
        actor_user_id: int | None,
        hospital_id: UUID,
        title: str,
        description: str = "",
        alert_type: str = AlertType.PATIENT_EMERGENCY,
        severity: str = SeverityLevel.MEDIUM,
        patient_id: UUID | None = None,
        created_by_id: UUID | None = None,
    ) -> EmergencyAlert:
        AlertService._check_refs(hospital_id=hospital_id, patient_id=patient_id)
        alert = EmergencyAlert.objects.create(
            hospital_id=hospital_id,
            patient_id=patient_id,
            alert_type=alert_type,
            severity=severity,
            title=title,
            description=description or "",
            status=AlertStatus.ACTIVE,
            created_by=AlertService._practitioner(created_by_id, "created_by_id"),
        )
        AuditService.log(
            event_code="alert.created",
            entity_type="EmergencyAlert",
            entity_id=alert.id,
            actor_user_id=actor_user_id,
            metadata={"severity": severity, "alert_type": alert_type},
        )
        return alert

    @staticmethod
    @transaction.atomic
    def update_alert(*, alert_id: UUID, data: dict) -> EmergencyAlert:
        alert = EmergencyAlert.objects.select_for_update().get(id=alert_id)
        updates = {k: v for k, v in data.items() if k in AlertService.EDITABLE}
        AlertService._check_refs(hospital_id=updates.get("hospital_id"), patient_id=updates.get("patient_id"))
        for k, v in updates.items():
            setattr(alert, k, v)
        alert.save()
        return alert

    @staticmethod
    def _transition(*, alert: EmergencyAlert, to_status: str) -> None:
        current = AlertStatus(alert.status)
        if to_status not in ALLOWED_TRANSITIONS[current]:
            raise ConflictError(f"Alert is {current.value}; cannot move to {to_status}.")
        alert.status = to_status

    @staticmethod
    @transaction.atomic
    def acknowledge(*, actor_user_id: int | None, alert_id: UUID) -> EmergencyAlert:
        alert = EmergencyAlert.objects.select_for_update().get(id=alert_id)
        AlertService._transition(alert=alert, to_status=AlertStatus.ACKNOWLEDGED)
        alert.save(update_fields=["status", "updated_at"])

        AuditService.log(
            event_code="alert.acknowledged",
            entity_type="EmergencyAlert",
            entity_id=alert.id,
            actor_user_id=actor_user_id,
        )
        return alert

    @staticmethod
    @transaction.atomic
    def resolve(
        *,
        actor_user_id: int | None,
        alert_id: UUID,
        resolved_by_id: UUID | None = None,
    ) -> EmergencyAlert:
        alert = EmergencyAlert.objects.select_for_update().get(id=alert_id)
        AlertService._transition(alert=alert, to_status=AlertStatus.RESOLVED)
        alert.resolved_at = timezone.now()
        alert.resolved_by = AlertService._practitioner(resolved_by_id, "resolved_by_id")
        alert.save(update_fields=["status", "resolved_at", "resolved_by", "updated_at"])

        logger.info("Alert %s resolved", alert.id)
        AuditService.log(
            event_code="alert.resolved",
            entity_type="EmergencyAlert",
            entity_id=alert.id,
            actor_user_id=actor_user_id,
        )
        return alert
