# edhms/hospitals/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import ValidationError

from edhms.audit.services import AuditService
from edhms.common.api.exceptions import ConflictError
from edhms.common.lists import split_comma_list
from edhms.hospitals.models import Department, Hospital

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HospitalUpdate:
    """Partial update: None means "leave unchanged"."""
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    emergency_contact: Optional[str] = None
    bed_capacity: Optional[int] = None
    available_beds: Optional[int] = None
    specialties: Optional[list] = None
    status: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None


class HospitalService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        actor_user_id: int | None,
        name: str,
        address: str,
        phone: str,
        emergency_contact: str,
        bed_capacity: int = 0,
        available_beds: int = 0,
        email: str = "",
        specialties=None,
        status: str = "active",
        latitude: Decimal | None = None,
        longitude: Decimal | None = None,
    ) -> Hospital:
        hospital = Hospital.objects.create(
            name=name,
            address=address,
            phone=phone,
            email=email or "",
            emergency_contact=emergency_contact,
            bed_capacity=bed_capacity,
            available_beds=available_beds,
            specialties=split_comma_list(specialties),
            status=status,
            latitude=latitude,
            longitude=longitude,
        )
        AuditService.log(
            event_code="hospital.created",
            entity_type="Hospital",
            entity_id=hospital.id,
            actor_user_id=actor_user_id,
            metadata={"name": hospital.name},
        )
        return hospital

    @staticmethod
    @transaction.atomic
    def update(*, actor_user_id: int | None, hospital_id: UUID, patch: HospitalUpdate) -> Hospital:
        # Last write wins; there is no version check.
        hospital = Hospital.objects.select_for_update().get(id=hospital_id)

        changed = []
        for f in fields(patch):
            value = getattr(patch, f.name)
            if value is None:
                continue
            if f.name == "specialties":
                value = split_comma_list(value)
            setattr(hospital, f.name, value)
            changed.append(f.name)

        if changed:
            hospital.save()
            AuditService.log(
                event_code="hospital.updated",
                entity_type="Hospital",
                entity_id=hospital.id,
                actor_user_id=actor_user_id,
                metadata={"updated_fields": sorted(changed)},
            )
        return hospital

    @staticmethod
    @transaction.atomic
    def delete(*, actor_user_id: int | None, hospital_id: UUID, confirm: bool) -> None:
        """
        Irreversible. Departments go with the hospital; records, alerts and
        practitioners pointing at it block the delete.
        """
        if not confirm:
            raise ValidationError({"detail": "Deleting a hospital is irreversible; pass confirm=true."})

        hospital = Hospital.objects.select_for_update().get(id=hospital_id)
        name = hospital.name
        try:
            hospital.delete()
        except ProtectedError:
            logger.info("Refused delete of hospital %s: still referenced", hospital_id)
            raise ConflictError("Hospital is still referenced by records, alerts or practitioners.")

        AuditService.log(
            event_code="hospital.deleted",
            entity_type="Hospital",
            entity_id=hospital_id,
            actor_user_id=actor_user_id,
            metadata={"name": name},
        )


class DepartmentService:
    EDITABLE = {"name", "head_doctor", "phone", "bed_count", "available_beds", "equipment", "status"}

    @staticmethod
    @transaction.atomic
    def create(*, hospital_id: UUID, data: dict) -> Department:
        hospital = Hospital.objects.get(id=hospital_id)
        values = {k: v for k, v in data.items() if k in DepartmentService.EDITABLE}
        values["equipment"] = split_comma_list(values.get("equipment"))
        return Department.objects.create(hospital=hospital, **values)

    @staticmethod
    @transaction.atomic
    def update(*, hospital_id: UUID, department_id: UUID, data: dict) -> Department:
        department = Department.objects.select_for_update().get(id=department_id, hospital_id=hospital_id)
        for k, v in data.items():
            if k not in DepartmentService.EDITABLE:
                continue
            if k == "equipment":
                v = split_comma_list(v)
            setattr(department, k, v)
        department.save()
        return department
