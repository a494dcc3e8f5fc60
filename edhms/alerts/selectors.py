# edhms/alerts/selectors.py
from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable

from django.db.models import Count, Max, QuerySet

from edhms.alerts.models import AlertStatus, EmergencyAlert

ALL = "all"


def alerts_qs() -> QuerySet[EmergencyAlert]:
    return EmergencyAlert.objects.select_related("hospital", "patient")


def fetch_alerts() -> list[EmergencyAlert]:
    """Full alert list, newest first, with hospital and patient joined."""
    return list(alerts_qs().order_by("-created_at"))


def filter_alerts(
    alerts: Iterable[EmergencyAlert],
    *,
    status: str | None = None,
    severity: str | None = None,
) -> list[EmergencyAlert]:
    """In-memory filter over an already-fetched list; "all" or empty means no filter."""
    rows = list(alerts)
    if status and status != ALL:
        rows = [a for a in rows if a.status == status]
    if severity and severity != ALL:
        rows = [a for a in rows if a.severity == severity]
    return rows


def status_counts(alerts: Iterable[EmergencyAlert]) -> dict[str, int]:
    counts = Counter(a.status for a in alerts)
    return {s: counts.get(s, 0) for s in AlertStatus.values}


def latest_active(*, limit: int = 10) -> list[EmergencyAlert]:
    return list(alerts_qs().filter(status=AlertStatus.ACTIVE).order_by("-created_at")[:limit])


def alerts_in_window(*, start: datetime, end: datetime) -> QuerySet[EmergencyAlert]:
    return EmergencyAlert.objects.filter(created_at__gte=start, created_at__lte=end)


def feed_fingerprint() -> str:
    """
    Changes whenever an alert is inserted, updated or deleted:
    row count covers deletes, latest updated_at covers the rest.
    """
    agg = EmergencyAlert.objects.aggregate(n=Count("id"), last=Max("updated_at"))
    last = agg["last"].isoformat() if agg["last"] else "-"
    return f"{agg['n']}:{last}"
