import pytest

from edhms.hospitals.models import Department

pytestmark = pytest.mark.django_db

URL = "/api/v1/practitioners/"


def test_create_and_filter_by_hospital(api_client, hospital, other_hospital):
    r = api_client.post(URL, {"hospital_id": str(hospital.id), "name": "Dr. House"}, format="json")
    assert r.status_code == 201, r.data
    assert r.data["hospital_name"] == "City General"
    assert r.data["availability_status"] == "available"

    api_client.post(URL, {"hospital_id": str(other_hospital.id), "name": "Dr. Wilson"}, format="json")

    r = api_client.get(URL, {"hospital_id": str(hospital.id)})
    assert [p["name"] for p in r.data] == ["Dr. House"]


def test_department_must_belong_to_hospital(api_client, hospital, other_hospital):
    foreign = Department.objects.create(hospital=other_hospital, name="ICU")
    r = api_client.post(
        URL,
        {"hospital_id": str(hospital.id), "department_id": str(foreign.id), "name": "Dr. Cuddy"},
        format="json",
    )
    assert r.status_code == 400
    assert "department_id" in r.json()["error"]["details"]


def test_nurse_can_update_availability(nurse_client, practitioner):
    r = nurse_client.patch(f"{URL}{practitioner.id}/", {"availability_status": "on_call"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["availability_status"] == "on_call"


def test_nurse_cannot_create(nurse_client, hospital):
    r = nurse_client.post(URL, {"hospital_id": str(hospital.id), "name": "Dr. X"}, format="json")
    assert r.status_code == 403
