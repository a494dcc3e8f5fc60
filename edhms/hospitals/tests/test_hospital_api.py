import pytest

from edhms.audit.models import AuditEvent
from edhms.hospitals.models import Department, Hospital
from edhms.records.models import MedicalRecord

pytestmark = pytest.mark.django_db

URL = "/api/v1/hospitals/"


def _payload(**overrides):
    data = {
        "name": "St. Mary",
        "address": "9 Hill Road",
        "phone": "555-0300",
        "emergency_contact": "555-0399",
        "bed_capacity": 50,
        "available_beds": 10,
        "specialties": "Cardiology, Pediatrics,  ,Trauma",
    }
    data.update(overrides)
    return data


def test_create_hospital_splits_specialties_and_audits(api_client):
    r = api_client.post(URL, _payload(), format="json")
    assert r.status_code == 201, r.data

    assert r.data["specialties"] == ["Cardiology", "Pediatrics", "Trauma"]
    assert r.data["occupancy_rate"] == pytest.approx(0.8)
    assert r.data["occupancy_percent"] == 80.0
    assert r.data["capacity_badge"] == "warning"
    assert AuditEvent.objects.filter(event_code="hospital.created", entity_id=r.data["id"]).exists()


def test_zero_capacity_has_no_occupancy(api_client):
    r = api_client.post(URL, _payload(bed_capacity=0, available_beds=0), format="json")
    assert r.status_code == 201, r.data
    assert r.data["occupancy_rate"] is None
    assert r.data["occupancy_percent"] is None
    assert r.data["capacity_badge"] == "normal"


def test_list_search_matches_name_or_address(api_client, hospital, other_hospital):
    r = api_client.get(URL, {"q": "river"})
    assert r.status_code == 200, r.data
    assert [h["name"] for h in r.data] == ["Riverside Clinic"]

    r = api_client.get(URL, {"q": "MAIN street"})
    assert [h["name"] for h in r.data] == ["City General"]

    r = api_client.get(URL)
    assert [h["name"] for h in r.data] == ["City General", "Riverside Clinic"]


def test_list_filters_by_status(api_client, hospital, other_hospital):
    Hospital.objects.filter(id=other_hospital.id).update(status="maintenance")
    r = api_client.get(URL, {"status": "maintenance"})
    assert [h["id"] for h in r.data] == [str(other_hospital.id)]
    assert r.data[0]["capacity_badge"] == "critical"


def test_partial_update_is_last_write_wins(api_client, hospital):
    r = api_client.patch(f"{URL}{hospital.id}/", {"available_beds": 5}, format="json")
    assert r.status_code == 200, r.data
    r = api_client.patch(f"{URL}{hospital.id}/", {"available_beds": 7}, format="json")
    assert r.data["available_beds"] == 7

    hospital.refresh_from_db()
    assert hospital.available_beds == 7


def test_empty_patch_is_rejected(api_client, hospital):
    r = api_client.patch(f"{URL}{hospital.id}/", {}, format="json")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "validation_error"


def test_delete_requires_confirm(api_client, hospital):
    r = api_client.delete(f"{URL}{hospital.id}/")
    assert r.status_code == 400
    assert Hospital.objects.filter(id=hospital.id).exists()

    r = api_client.delete(f"{URL}{hospital.id}/?confirm=true")
    assert r.status_code == 204
    assert not Hospital.objects.filter(id=hospital.id).exists()
    assert AuditEvent.objects.filter(event_code="hospital.deleted", entity_id=hospital.id).exists()


def test_delete_cascades_departments(api_client, hospital):
    Department.objects.create(hospital=hospital, name="ER")
    r = api_client.delete(f"{URL}{hospital.id}/?confirm=true")
    assert r.status_code == 204
    assert Department.objects.count() == 0


def test_delete_referenced_hospital_is_conflict(api_client, hospital, patient):
    MedicalRecord.objects.create(patient=patient, hospital=hospital, diagnosis="Fracture")
    r = api_client.delete(f"{URL}{hospital.id}/?confirm=true")
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "conflict"
    assert Hospital.objects.filter(id=hospital.id).exists()


def test_departments_create_list_update(api_client, hospital):
    r = api_client.post(
        f"{URL}{hospital.id}/departments/",
        {"name": "Emergency", "bed_count": 12, "available_beds": 4, "equipment": "Defibrillator, Ventilator"},
        format="json",
    )
    assert r.status_code == 201, r.data
    dept_id = r.data["id"]
    assert r.data["equipment"] == ["Defibrillator", "Ventilator"]

    r = api_client.get(f"{URL}{hospital.id}/departments/")
    assert r.status_code == 200
    assert [d["name"] for d in r.data] == ["Emergency"]

    r = api_client.patch(f"{URL}{hospital.id}/departments/{dept_id}/", {"available_beds": 0}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["available_beds"] == 0


def test_readonly_can_list_but_not_add_department(readonly_client, hospital):
    assert readonly_client.get(f"{URL}{hospital.id}/departments/").status_code == 200
    r = readonly_client.post(f"{URL}{hospital.id}/departments/", {"name": "ICU"}, format="json")
    assert r.status_code == 403
