from datetime import timedelta

import pytest
from django.utils import timezone

from edhms.alerts.models import EmergencyAlert

pytestmark = pytest.mark.django_db

URL = "/api/v1/alerts/"


@pytest.fixture
def alerts(hospital, other_hospital):
    rows = [
        EmergencyAlert.objects.create(hospital=hospital, title="Bed shortage", alert_type="bed_shortage", severity="critical"),
        EmergencyAlert.objects.create(hospital=other_hospital, title="Generator", alert_type="equipment_failure", severity="low"),
        EmergencyAlert.objects.create(
            hospital=hospital, title="Old", alert_type="staff_shortage", severity="critical", status="resolved"
        ),
    ]
    now = timezone.now()
    for i, a in enumerate(rows):
        EmergencyAlert.objects.filter(id=a.id).update(created_at=now + timedelta(minutes=i))
    return rows


def test_list_is_newest_first_with_counts(api_client, alerts):
    r = api_client.get(URL)
    assert r.status_code == 200, r.data
    assert [a["title"] for a in r.data["results"]] == ["Old", "Generator", "Bed shortage"]
    assert r.data["counts"] == {"active": 2, "acknowledged": 0, "resolved": 1}


def test_list_filters_in_memory_and_all_means_any(api_client, alerts):
    r = api_client.get(URL, {"status": "active", "severity": "critical"})
    assert [a["title"] for a in r.data["results"]] == ["Bed shortage"]
    # counts describe the unfiltered list
    assert r.data["counts"]["resolved"] == 1

    r = api_client.get(URL, {"status": "all", "severity": "all"})
    assert len(r.data["results"]) == 3


def test_list_joins_hospital_and_patient(api_client, alert):
    row = api_client.get(URL).data["results"][0]
    assert row["hospital_name"] == "City General"
    assert row["patient_name"] == "Jane Doe"
    assert row["patient_code"] == "PAT-1000"


def test_create_defaults(nurse_client, hospital):
    r = nurse_client.post(URL, {"hospital_id": str(hospital.id), "title": "Fall in ward"}, format="json")
    assert r.status_code == 201, r.data
    assert r.data["status"] == "active"
    assert r.data["severity"] == "medium"
    assert r.data["alert_type"] == "patient_emergency"
    assert r.data["patient_name"] is None


def test_edit_form_cannot_change_status(api_client, alert):
    r = api_client.patch(f"{URL}{alert.id}/", {"status": "resolved"}, format="json")
    assert r.status_code == 400
    assert "status" in r.json()["error"]["details"]

    r = api_client.patch(f"{URL}{alert.id}/", {"severity": "critical"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["severity"] == "critical"
    assert r.data["status"] == "active"


def test_acknowledge_then_resolve_endpoints(api_client, alert):
    r = api_client.post(f"{URL}{alert.id}/acknowledge/")
    assert r.status_code == 200, r.data
    assert r.data["status"] == "acknowledged"

    r = api_client.post(f"{URL}{alert.id}/resolve/", {}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["status"] == "resolved"
    assert r.data["resolved_at"] is not None

    r = api_client.post(f"{URL}{alert.id}/acknowledge/")
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "conflict"


def test_readonly_cannot_acknowledge(readonly_client, alert):
    r = readonly_client.post(f"{URL}{alert.id}/acknowledge/")
    assert r.status_code == 403


def test_changes_endpoint_tracks_fingerprint(api_client, alert):
    r = api_client.get(f"{URL}changes/")
    assert r.status_code == 200
    assert r.data["changed"] is False
    first = r.data["fingerprint"]

    r = api_client.get(f"{URL}changes/", {"since": first})
    assert r.data["changed"] is False

    api_client.post(f"{URL}{alert.id}/acknowledge/")

    r = api_client.get(f"{URL}changes/", {"since": first})
    assert r.data["changed"] is True
    assert r.data["fingerprint"] != first
