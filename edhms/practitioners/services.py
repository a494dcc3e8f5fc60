# edhms/practitioners/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from edhms.hospitals.models import Department, Hospital
from edhms.practitioners.models import Practitioner


class PractitionerService:
    EDITABLE = {
        "name",
        "email",
        "phone",
        "specialization",
        "license_number",
        "experience_years",
        "availability_status",
        "department_id",
    }

    @staticmethod
    def _check_department(*, hospital_id: UUID, department_id: UUID | None) -> None:
        if department_id and not Department.objects.filter(id=department_id, hospital_id=hospital_id).exists():
            raise ValidationError({"department_id": "Department does not belong to this hospital."})

    @staticmethod
    @transaction.atomic
    def create(*, hospital_id: UUID, user_id: int | None = None, **data) -> Practitioner:
        hospital = Hospital.objects.get(id=hospital_id)
        PractitionerService._check_department(hospital_id=hospital.id, department_id=data.get("department_id"))
        values = {k: v for k, v in data.items() if k in PractitionerService.EDITABLE}
        return Practitioner.objects.create(hospital=hospital, user_id=user_id, **values)

    @staticmethod
    @transaction.atomic
    def update(*, practitioner_id: UUID, data: dict) -> Practitioner:
        practitioner = Practitioner.objects.select_for_update().get(id=practitioner_id)
        if "department_id" in data:
            PractitionerService._check_department(
                hospital_id=practitioner.hospital_id,
                department_id=data["department_id"],
            )
        for k, v in data.items():
            if k in PractitionerService.EDITABLE:
                setattr(practitioner, k, v)
        practitioner.save()
        return practitioner
