# edhms/records/selectors.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from django.db.models import QuerySet

from edhms.records.models import MedicalRecord


def records_qs() -> QuerySet[MedicalRecord]:
    return MedicalRecord.objects.select_related("hospital", "patient", "practitioner")


def patient_history(*, patient_id: UUID) -> QuerySet[MedicalRecord]:
    """Most recent visit first."""
    return records_qs().filter(patient_id=patient_id).order_by("-visit_date")


def records_in_window(*, start: datetime, end: datetime) -> QuerySet[MedicalRecord]:
    return MedicalRecord.objects.filter(visit_date__gte=start, visit_date__lte=end)
