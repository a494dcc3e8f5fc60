import pytest

pytestmark = pytest.mark.django_db

URL = "/api/v1/audit/events/"


def test_admin_lists_events_filtered_by_entity(api_client, hospital):
    api_client.patch(f"/api/v1/hospitals/{hospital.id}/", {"name": "City General East"}, format="json")

    r = api_client.get(URL, {"entity_type": "Hospital", "entity_id": str(hospital.id)})
    assert r.status_code == 200, r.data
    assert [e["event_code"] for e in r.data] == ["hospital.updated"]
    assert r.data[0]["metadata"] == {"updated_fields": ["name"]}


def test_invalid_entity_id_is_400(api_client):
    r = api_client.get(URL, {"entity_id": "nope"})
    assert r.status_code == 400


def test_nurse_cannot_read_audit(nurse_client):
    assert nurse_client.get(URL).status_code == 403
