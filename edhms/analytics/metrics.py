# edhms/analytics/metrics.py
"""
Derived metrics over rows that have already been fetched.

Everything here is a pure reduction: the same input rows always give the
same output, nothing touches the database. Rows are mappings as returned by
``QuerySet.values()``:

- hospitals: id, name, status, bed_capacity, available_beds
- records:   visit_date, visit_type
- alerts:    hospital_id, alert_type, status
"""
from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Mapping, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

Row = Mapping[str, Any]

WINDOWS = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
}
DEFAULT_RANGE = "7d"

HIGH_OCCUPANCY = 0.90
ELEVATED_OCCUPANCY = 0.75


@dataclass(frozen=True)
class TimeWindow:
    key: str
    start: datetime
    end: datetime

    @property
    def start_date(self) -> date:
        return _as_date(self.start)

    @property
    def end_date(self) -> date:
        return _as_date(self.end)


def resolve_window(range_key: str | None, *, now: datetime | None = None) -> TimeWindow:
    key = range_key or DEFAULT_RANGE
    if key not in WINDOWS:
        raise ValueError(f"Unknown time range '{key}'. Use one of: {', '.join(WINDOWS)}.")
    end = now or timezone.now()
    return TimeWindow(key=key, start=end - WINDOWS[key], end=end)


def _as_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            return parse_date(value)
        value = parsed
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localdate(value)
        return value.date()
    return value


# -------------------------------------------------------------------
# Occupancy
# -------------------------------------------------------------------

def occupancy_rate(capacity: int | None, available: int | None) -> Optional[float]:
    """
    (capacity - available) / capacity as a fraction.

    None when capacity is zero or missing. available > capacity gives a
    negative rate; that data error is passed through, not corrected.
    """
    capacity = capacity or 0
    if capacity <= 0:
        return None
    return (capacity - (available or 0)) / capacity


def as_percent(rate: Optional[float]) -> Optional[float]:
    return None if rate is None else round(rate * 100, 1)


def capacity_badge(*, status: str, capacity: int | None, available: int | None) -> str:
    """critical / warning / normal, as shown next to each hospital."""
    if status != "active":
        return "critical"
    rate = occupancy_rate(capacity, available)
    if rate is None:
        return "normal"
    if rate >= HIGH_OCCUPANCY:
        return "critical"
    if rate >= ELEVATED_OCCUPANCY:
        return "warning"
    return "normal"


def bed_totals(hospitals: Iterable[Row]) -> dict[str, Any]:
    total = 0
    available = 0
    for h in hospitals:
        total += h.get("bed_capacity") or 0
        available += h.get("available_beds") or 0
    rate = occupancy_rate(total, available)
    return {
        "total_beds": total,
        "available_beds": available,
        "occupied_beds": total - available,
        "occupancy_rate": rate,
    }


# -------------------------------------------------------------------
# Counts
# -------------------------------------------------------------------

def count_where(rows: Iterable[Row], key: str, value: Any) -> int:
    return sum(1 for r in rows if r.get(key) == value)


def alerts_by_type(alerts: Iterable[Row]) -> dict[str, int]:
    return dict(Counter(a.get("alert_type") for a in alerts if a.get("alert_type")))


def daily_admissions(records: Iterable[Row], start: date, end: date) -> list[dict[str, Any]]:
    """
    One entry per calendar day in [start, end], zero-filled, counting records
    by the date part of visit_date. Records outside the range are ignored.
    """
    start_d = _as_date(start)
    end_d = _as_date(end)
    if start_d is None or end_d is None or end_d < start_d:
        return []

    buckets: dict[date, int] = {}
    day = start_d
    while day <= end_d:
        buckets[day] = 0
        day += timedelta(days=1)

    for r in records:
        visit_day = _as_date(r.get("visit_date"))
        if visit_day in buckets:
            buckets[visit_day] += 1

    return [{"date": d.isoformat(), "count": n} for d, n in buckets.items()]


def hospital_performance(hospitals: Iterable[Row], alerts: Iterable[Row]) -> list[dict[str, Any]]:
    per_hospital = Counter(str(a.get("hospital_id")) for a in alerts)
    rows = []
    for h in hospitals:
        rate = occupancy_rate(h.get("bed_capacity"), h.get("available_beds"))
        rows.append(
            {
                "id": str(h.get("id")),
                "name": h.get("name"),
                "occupancy_rate": rate,
                "occupancy_percent": as_percent(rate),
                "available_beds": h.get("available_beds") or 0,
                "total_beds": h.get("bed_capacity") or 0,
                "alert_count": per_hospital.get(str(h.get("id")), 0),
            }
        )
    return rows


# -------------------------------------------------------------------
# Snapshot
# -------------------------------------------------------------------

@dataclass(frozen=True)
class AnalyticsSnapshot:
    time_range: str
    total_patients: int
    total_hospitals: int
    total_beds: int
    available_beds: int
    bed_occupancy_rate: Optional[float]
    emergency_visits: int
    active_alerts: int
    alerts_by_type: dict = field(default_factory=dict)
    daily_admissions: list = field(default_factory=list)
    hospital_performance: list = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_snapshot(
    *,
    window: TimeWindow,
    patient_count: int,
    hospitals: Iterable[Row],
    records: Iterable[Row],
    alerts: Iterable[Row],
) -> AnalyticsSnapshot:
    hospitals = list(hospitals)
    records = list(records)
    alerts = list(alerts)

    beds = bed_totals(hospitals)
    return AnalyticsSnapshot(
        time_range=window.key,
        total_patients=patient_count,
        total_hospitals=len(hospitals),
        total_beds=beds["total_beds"],
        available_beds=beds["available_beds"],
        bed_occupancy_rate=beds["occupancy_rate"],
        emergency_visits=count_where(records, "visit_type", "emergency"),
        active_alerts=count_where(alerts, "status", "active"),
        alerts_by_type=alerts_by_type(alerts),
        daily_admissions=daily_admissions(records, window.start_date, window.end_date),
        hospital_performance=hospital_performance(hospitals, alerts),
    )
