# edhms/hospitals/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from edhms.hospitals.models import Department, Hospital


def get_hospital(*, hospital_id: UUID) -> Hospital:
    return Hospital.objects.get(id=hospital_id)


def list_hospitals(*, q: str | None = None, status: str | None = None) -> QuerySet[Hospital]:
    """Ordered by name; q matches name or address, case-insensitive."""
    qs = Hospital.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(name__icontains=qv) | Q(address__icontains=qv))
    if status:
        qs = qs.filter(status=status)

    return qs.order_by("name")


def first_hospital() -> Hospital | None:
    return Hospital.objects.order_by("name", "created_at").first()


def list_departments(*, hospital_id: UUID) -> QuerySet[Department]:
    return Department.objects.filter(hospital_id=hospital_id).order_by("name")
