from datetime import date, datetime, timezone

import pytest

from edhms.analytics.metrics import (
    alerts_by_type,
    bed_totals,
    build_snapshot,
    capacity_badge,
    daily_admissions,
    hospital_performance,
    occupancy_rate,
    resolve_window,
)

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_occupancy_undefined_for_zero_capacity():
    assert occupancy_rate(0, 0) is None
    assert occupancy_rate(None, 5) is None
    assert occupancy_rate(100, 25) == pytest.approx(0.75)


def test_occupancy_out_of_range_is_representable():
    assert occupancy_rate(10, 15) == pytest.approx(-0.5)


@pytest.mark.parametrize(
    "status,capacity,available,badge",
    [
        ("active", 100, 5, "critical"),
        ("active", 100, 25, "warning"),
        ("active", 100, 50, "normal"),
        ("active", 0, 0, "normal"),
        ("maintenance", 100, 90, "critical"),
    ],
)
def test_capacity_badge(status, capacity, available, badge):
    assert capacity_badge(status=status, capacity=capacity, available=available) == badge


def test_daily_admissions_zero_fills_each_day():
    records = [{"visit_date": datetime(2025, 3, 2, 8, 30, tzinfo=timezone.utc)}]
    assert daily_admissions(records, date(2025, 3, 1), date(2025, 3, 3)) == [
        {"date": "2025-03-01", "count": 0},
        {"date": "2025-03-02", "count": 1},
        {"date": "2025-03-03", "count": 0},
    ]


def test_daily_admissions_ignores_out_of_range_records():
    records = [
        {"visit_date": "2025-02-28T23:59:00+00:00"},
        {"visit_date": "2025-03-01T00:00:00+00:00"},
        {"visit_date": "2025-03-04T00:00:00+00:00"},
    ]
    result = daily_admissions(records, date(2025, 3, 1), date(2025, 3, 3))
    assert [d["count"] for d in result] == [1, 0, 0]


def test_resolve_window():
    w = resolve_window("24h", now=NOW)
    assert w.start == datetime(2025, 3, 9, 12, 0, tzinfo=timezone.utc)
    assert resolve_window(None, now=NOW).key == "7d"

    week = resolve_window("7d", now=NOW)
    assert len(daily_admissions([], week.start_date, week.end_date)) == 8

    with pytest.raises(ValueError):
        resolve_window("1y", now=NOW)


def test_bed_totals_and_alerts_by_type():
    hospitals = [
        {"id": "h1", "name": "A", "status": "active", "bed_capacity": 100, "available_beds": 20},
        {"id": "h2", "name": "B", "status": "active", "bed_capacity": 0, "available_beds": 0},
    ]
    totals = bed_totals(hospitals)
    assert totals["total_beds"] == 100
    assert totals["available_beds"] == 20
    assert totals["occupancy_rate"] == pytest.approx(0.8)

    alerts = [{"alert_type": "bed_shortage"}, {"alert_type": "bed_shortage"}, {"alert_type": "disaster"}]
    assert alerts_by_type(alerts) == {"bed_shortage": 2, "disaster": 1}


def test_hospital_performance_counts_alerts_per_hospital():
    hospitals = [
        {"id": "h1", "name": "A", "bed_capacity": 10, "available_beds": 1},
        {"id": "h2", "name": "B", "bed_capacity": 0, "available_beds": 0},
    ]
    alerts = [{"hospital_id": "h1"}, {"hospital_id": "h1"}]
    rows = {r["id"]: r for r in hospital_performance(hospitals, alerts)}

    assert rows["h1"]["alert_count"] == 2
    assert rows["h1"]["occupancy_percent"] == 90.0
    assert rows["h2"]["alert_count"] == 0
    assert rows["h2"]["occupancy_rate"] is None


def test_snapshot_is_deterministic():
    kwargs = dict(
        window=resolve_window("24h", now=NOW),
        patient_count=3,
        hospitals=[{"id": "h1", "name": "A", "status": "active", "bed_capacity": 10, "available_beds": 5}],
        records=[
            {"visit_date": NOW, "visit_type": "emergency"},
            {"visit_date": NOW, "visit_type": "outpatient"},
        ],
        alerts=[{"hospital_id": "h1", "alert_type": "disaster", "status": "active"}],
    )
    a = build_snapshot(**kwargs)
    assert a == build_snapshot(**kwargs)
    assert a.emergency_visits == 1
    assert a.active_alerts == 1
    assert a.bed_occupancy_rate == pytest.approx(0.5)
    assert a.as_dict()["daily_admissions"][-1] == {"date": "2025-03-10", "count": 2}
