# edhms/practitioners/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from edhms.practitioners.models import Practitioner


def list_practitioners(
    *,
    hospital_id: UUID | None = None,
    availability_status: str | None = None,
) -> QuerySet[Practitioner]:
    qs = Practitioner.objects.select_related("hospital", "department")
    if hospital_id:
        qs = qs.filter(hospital_id=hospital_id)
    if availability_status:
        qs = qs.filter(availability_status=availability_status)
    return qs.order_by("name")
