import json

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from edhms.preferences.models import ConsolePreferences

pytestmark = pytest.mark.django_db

URL = "/api/v1/preferences/"


def test_get_defaults(readonly_client):
    r = readonly_client.get(URL)
    assert r.status_code == 200, r.data
    assert r.data["systemSettings"]["refreshInterval"] == 30
    assert r.data["hasApiKey"] is False


def test_patch_toggle(api_client):
    r = api_client.patch(URL, {"notifications": {"weeklyReports": False}}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["notifications"]["weeklyReports"] is False
    assert r.data["notifications"]["emergencyAlerts"] is True


def test_refresh_interval_bounds(api_client):
    r = api_client.patch(URL, {"systemSettings": {"refreshInterval": 1}}, format="json")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "validation_error"


def test_export_download(api_client):
    r = api_client.get(f"{URL}export/")
    assert r.status_code == 200
    assert r["Content-Disposition"].startswith('attachment; filename="edhms-settings-')
    body = json.loads(r.content)
    assert set(body) == {"notifications", "systemSettings", "exportDate"}


def test_import_json_body(api_client):
    doc = {"notifications": {"bedUpdates": False}, "systemSettings": {"darkMode": True}}
    r = api_client.post(f"{URL}import/", doc, format="json")
    assert r.status_code == 200, r.data
    assert r.data["notifications"]["bedUpdates"] is False
    assert r.data["systemSettings"]["darkMode"] is True


def test_import_uploaded_file(api_client):
    exported = json.loads(api_client.get(f"{URL}export/").content)
    exported["systemSettings"]["refreshInterval"] = 45
    upload = SimpleUploadedFile("settings.json", json.dumps(exported).encode(), content_type="application/json")

    r = api_client.post(f"{URL}import/", {"file": upload}, format="multipart")
    assert r.status_code == 200, r.data
    assert r.data["systemSettings"]["refreshInterval"] == 45


def test_import_garbage_file_is_rejected(api_client):
    upload = SimpleUploadedFile("settings.json", b"{not json", content_type="application/json")
    r = api_client.post(f"{URL}import/", {"file": upload}, format="multipart")
    assert r.status_code == 400
    assert "file" in r.json()["error"]["details"]


def test_api_key_store_clear_and_reset(api_client, user):
    r = api_client.post(f"{URL}api-key/", {"apiKey": "abc123"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["hasApiKey"] is True
    assert "abc123" not in json.dumps(r.data)
    assert ConsolePreferences.objects.get(user=user).gemini_api_key == "abc123"

    r = api_client.delete(f"{URL}api-key/")
    assert r.data["hasApiKey"] is False

    api_client.patch(URL, {"systemSettings": {"darkMode": True}}, format="json")
    r = api_client.post(f"{URL}reset/")
    assert r.status_code == 200
    assert r.data["systemSettings"]["darkMode"] is False
    assert not ConsolePreferences.objects.filter(user=user).exists()
