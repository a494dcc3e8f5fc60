# edhms/analytics/services.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.db.models import Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from edhms.alerts.selectors import latest_active
from edhms.analytics import selectors
from edhms.analytics.metrics import AnalyticsSnapshot, TimeWindow, build_snapshot, resolve_window
from edhms.hospitals.models import Hospital

logger = logging.getLogger(__name__)


def window_or_400(range_key: str | None, *, now: datetime | None = None) -> TimeWindow:
    try:
        return resolve_window(range_key, now=now)
    except ValueError as exc:
        raise ValidationError({"range": str(exc)})


def export_filename(window: TimeWindow) -> str:
    return f"emergency-analytics-{window.key}-{window.end_date.isoformat()}.json"


class AnalyticsService:
    @staticmethod
    def snapshot(*, window: TimeWindow) -> AnalyticsSnapshot:
        return build_snapshot(
            window=window,
            patient_count=selectors.patient_count(),
            hospitals=selectors.hospital_rows(),
            records=selectors.record_rows(window),
            alerts=selectors.alert_rows(window),
        )

    @staticmethod
    def export_document(*, window: TimeWindow, now: datetime | None = None) -> dict[str, Any]:
        snap = AnalyticsService.snapshot(window=window)
        return {
            "generatedAt": (now or timezone.now()).isoformat(),
            "timeRange": window.key,
            "metrics": snap.as_dict(),
        }


class DashboardService:
    RECENT_ALERTS = 10

    @staticmethod
    def overview() -> dict[str, Any]:
        hospitals = list(Hospital.objects.order_by("name"))
        available = Hospital.objects.aggregate(total=Sum("available_beds"))["total"] or 0
        return {
            "total_hospitals": len(hospitals),
            "total_patients": selectors.patient_count(),
            "available_beds": available,
            "recent_alerts": latest_active(limit=DashboardService.RECENT_ALERTS),
            "hospitals": hospitals,
        }
