import pytest

from edhms.patients.models import Patient
from edhms.records.models import MedicalRecord

pytestmark = pytest.mark.django_db

URL = "/api/v1/patients/"


@pytest.fixture
def patients(db):
    return [
        Patient.objects.create(patient_code="PAT-100", name="Alice Smith", phone="111-2222"),
        Patient.objects.create(patient_code="PAT-200", name="Bob Jones", phone="333-4444"),
    ]


def test_search_is_or_across_name_code_phone(api_client, patients):
    assert [p["name"] for p in api_client.get(URL, {"q": "alice"}).data] == ["Alice Smith"]
    assert [p["name"] for p in api_client.get(URL, {"q": "pat-200"}).data] == ["Bob Jones"]
    assert [p["name"] for p in api_client.get(URL, {"q": "333"}).data] == ["Bob Jones"]
    assert len(api_client.get(URL).data) == 2


def test_search_respects_limit(api_client, patients):
    assert len(api_client.get(URL, {"limit": 1}).data) == 1


def test_history_is_newest_first(api_client, hospital, patient):
    old = MedicalRecord.objects.create(patient=patient, hospital=hospital, diagnosis="Old")
    new = MedicalRecord.objects.create(patient=patient, hospital=hospital, diagnosis="New")
    MedicalRecord.objects.filter(id=old.id).update(visit_date="2024-01-01T00:00:00Z")

    r = api_client.get(f"{URL}{patient.id}/records/")
    assert r.status_code == 200
    assert [x["id"] for x in r.data] == [str(new.id), str(old.id)]


def test_allergy_editor_rejects_empty_and_duplicates(api_client, patient):
    url = f"{URL}{patient.id}/allergies/"

    r = api_client.post(url, {"value": " Penicillin "}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["allergies"] == ["Penicillin"]

    r = api_client.post(url, {"value": "Penicillin"}, format="json")
    assert r.status_code == 400
    assert "value" in r.json()["error"]["details"]

    r = api_client.post(url, {"value": "   "}, format="json")
    assert r.status_code == 400


def test_condition_removal_is_idempotent(api_client, patient):
    Patient.objects.filter(id=patient.id).update(chronic_conditions=["Diabetes", "Asthma"])
    url = f"{URL}{patient.id}/conditions/"

    r = api_client.delete(url, {"value": "Diabetes"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["chronic_conditions"] == ["Asthma"]

    r = api_client.delete(f"{url}?value=Diabetes")
    assert r.status_code == 200
    assert r.data["chronic_conditions"] == ["Asthma"]


def test_patch_duplicate_code_is_validation_error(api_client, patient):
    Patient.objects.create(patient_code="PAT-TAKEN", name="Other")
    r = api_client.patch(f"{URL}{patient.id}/", {"patient_code": "PAT-TAKEN"}, format="json")
    assert r.status_code == 400
    assert "patient_code" in r.json()["error"]["details"]


def test_patch_drops_repeated_allergies(api_client, patient):
    r = api_client.patch(f"{URL}{patient.id}/", {"allergies": "Latex,Latex"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["allergies"] == ["Latex"]
    patient.refresh_from_db()
    assert patient.allergies == ["Latex"]


def test_allergy_removal_trims_value(api_client, patient):
    url = f"{URL}{patient.id}/allergies/"
    api_client.post(url, {"value": " Penicillin "}, format="json")

    r = api_client.delete(url, {"value": " Penicillin "}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["allergies"] == []
