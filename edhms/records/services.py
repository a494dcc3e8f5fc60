# edhms/records/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from edhms.common.lists import split_comma_list
from edhms.hospitals.models import Hospital
from edhms.patients.models import Patient
from edhms.practitioners.models import Practitioner
from edhms.records.models import MedicalRecord


class MedicalRecordService:
    EDITABLE = {
        "diagnosis",
        "symptoms",
        "treatment",
        "medications",
        "vital_signs",
        "test_results",
        "notes",
        "severity_level",
        "visit_type",
        "status",
        "visit_date",
        "discharge_date",
    }

    @staticmethod
    def _clean(data: dict) -> dict:
        values = {k: v for k, v in data.items() if k in MedicalRecordService.EDITABLE}
        if "symptoms" in values:
            values["symptoms"] = split_comma_list(values["symptoms"])
        # visit_date falls back to the model default (now)
        if values.get("visit_date") is None:
            values.pop("visit_date", None)
        return values

    @staticmethod
    @transaction.atomic
    def create(
        *,
        patient: Patient,
        hospital: Hospital,
        practitioner_id: UUID | None = None,
        **data,
    ) -> MedicalRecord:
        if not (data.get("diagnosis") or "").strip():
            raise ValidationError({"diagnosis": "Diagnosis is required to create a medical record."})

        practitioner = None
        if practitioner_id:
            practitioner = Practitioner.objects.filter(id=practitioner_id).first()
            if practitioner is None:
                raise ValidationError({"practitioner_id": "Practitioner not found."})

        return MedicalRecord.objects.create(
            patient=patient,
            hospital=hospital,
            practitioner=practitioner,
            **MedicalRecordService._clean(data),
        )

    @staticmethod
    @transaction.atomic
    def update(*, record_id: UUID, data: dict) -> MedicalRecord:
        record = MedicalRecord.objects.select_for_update().get(id=record_id)
        for k, v in MedicalRecordService._clean(data).items():
            setattr(record, k, v)
        record.save()
        return record
