# edhms/analytics/selectors.py
from __future__ import annotations

from edhms.alerts.selectors import alerts_in_window
from edhms.analytics.metrics import TimeWindow
from edhms.hospitals.models import Hospital
from edhms.patients.models import Patient
from edhms.records.selectors import records_in_window

HOSPITAL_COLUMNS = ("id", "name", "status", "bed_capacity", "available_beds")


def hospital_rows() -> list[dict]:
    return list(Hospital.objects.order_by("name").values(*HOSPITAL_COLUMNS))


def patient_count() -> int:
    return Patient.objects.count()


def record_rows(window: TimeWindow) -> list[dict]:
    return list(records_in_window(start=window.start, end=window.end).values("visit_date", "visit_type"))


def alert_rows(window: TimeWindow) -> list[dict]:
    return list(alerts_in_window(start=window.start, end=window.end).values("hospital_id", "alert_type", "status"))
