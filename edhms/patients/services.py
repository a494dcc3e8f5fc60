# edhms/patients/services.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from edhms.audit.services import AuditService
from edhms.common.lists import ListEntryError, add_entry, remove_entry, unique_list
from edhms.hospitals.models import Hospital
from edhms.hospitals.selectors import first_hospital
from edhms.patients.models import Patient
from edhms.records.models import MedicalRecord
from edhms.records.services import MedicalRecordService

logger = logging.getLogger(__name__)

NO_HOSPITAL_MSG = "No hospitals found. Please add a hospital first."

LIST_FIELDS = {"allergies", "chronic_conditions"}


def generate_patient_code(now_ms: int | None = None) -> str:
    """
    PAT-<epoch milliseconds>. Time-seeded, so two intakes in the same
    millisecond share a code; storage uniqueness turns that into an upsert.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"PAT-{now_ms}"


@dataclass(frozen=True)
class IntakeResult:
    patient: Patient
    created: bool
    record: Optional[MedicalRecord]


class PatientService:
    EDITABLE = {
        "name",
        "age",
        "gender",
        "phone",
        "email",
        "address",
        "blood_type",
        "allergies",
        "chronic_conditions",
        "emergency_contact_name",
        "emergency_contact_phone",
        "insurance_info",
    }

    @staticmethod
    def _clean(data: dict) -> dict:
        values = {k: v for k, v in (data or {}).items() if k in PatientService.EDITABLE}
        for k in LIST_FIELDS & values.keys():
            values[k] = unique_list(values[k])
        return values

    @staticmethod
    def _intake_hospital(hospital_id: UUID | None) -> Hospital:
        if hospital_id:
            hospital = Hospital.objects.filter(id=hospital_id).first()
            if hospital is None:
                raise ValidationError({"hospital_id": "Hospital not found."})
            return hospital
        hospital = first_hospital()
        if hospital is None:
            raise ValidationError({"detail": NO_HOSPITAL_MSG})
        return hospital

    @staticmethod
    @transaction.atomic
    def intake(
        *,
        actor_user_id: int | None,
        patient: dict,
        record: dict | None = None,
        hospital_id: UUID | None = None,
    ) -> IntakeResult:
        """
        Register a patient (or find the existing one by patient_code) and
        attach a medical record when a diagnosis is given.

        An existing patient's stored fields are left as they are.
        """
        record = record or {}
        wants_record = bool((record.get("diagnosis") or "").strip())

        # Resolve before writing anything so a missing hospital creates nothing.
        hospital = PatientService._intake_hospital(hospital_id) if wants_record else None

        code = (patient.get("patient_code") or "").strip() or generate_patient_code()
        obj, created = Patient.objects.get_or_create(
            patient_code=code,
            defaults=PatientService._clean(patient),
        )

        if created:
            AuditService.log(
                event_code="patient.created",
                entity_type="Patient",
                entity_id=obj.id,
                actor_user_id=actor_user_id,
                metadata={"patient_code": code},
            )
        else:
            logger.info("Intake matched existing patient %s", code)

        medical_record = None
        if wants_record:
            medical_record = MedicalRecordService.create(patient=obj, hospital=hospital, **record)

        return IntakeResult(patient=obj, created=created, record=medical_record)

    @staticmethod
    @transaction.atomic
    def update_patient(*, actor_user_id: int | None, patient_id: UUID, data: dict) -> Patient:
        patient = Patient.objects.select_for_update().get(id=patient_id)

        updates = PatientService._clean(data)
        if "patient_code" in (data or {}):
            updates["patient_code"] = (data["patient_code"] or "").strip()
            if not updates["patient_code"]:
                raise ValidationError({"patient_code": "Patient ID cannot be blank."})

        for k, v in updates.items():
            setattr(patient, k, v)

        try:
            with transaction.atomic():
                patient.save()
        except IntegrityError:
            raise ValidationError({"patient_code": "Patient ID already exists."})

        AuditService.log(
            event_code="patient.updated",
            entity_type="Patient",
            entity_id=patient.id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates.keys())},
        )
        return patient

    # -------------------------
    # Allergy / condition editors
    # -------------------------
    @staticmethod
    @transaction.atomic
    def add_list_entry(*, patient_id: UUID, field: str, value: str) -> Patient:
        if field not in LIST_FIELDS:
            raise ValueError(f"{field} is not a list field")
        patient = Patient.objects.select_for_update().get(id=patient_id)
        try:
            setattr(patient, field, add_entry(getattr(patient, field), value))
        except ListEntryError as e:
            raise ValidationError({"value": str(e)})
        patient.save(update_fields=[field, "updated_at"])
        return patient

    @staticmethod
    @transaction.atomic
    def remove_list_entry(*, patient_id: UUID, field: str, value: str) -> Patient:
        if field not in LIST_FIELDS:
            raise ValueError(f"{field} is not a list field")
        patient = Patient.objects.select_for_update().get(id=patient_id)
        setattr(patient, field, remove_entry(getattr(patient, field), value))
        patient.save(update_fields=[field, "updated_at"])
        return patient
