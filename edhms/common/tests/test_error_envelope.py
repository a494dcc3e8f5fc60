import pytest
from django.db.models import ProtectedError
from rest_framework.exceptions import ValidationError
from rest_framework.test import APIRequestFactory

from edhms.common.api.exceptions import ConflictError, UpstreamUnavailable, api_exception_handler

pytestmark = pytest.mark.django_db


def _context():
    return {"request": APIRequestFactory().get("/api/v1/hospitals/")}


def test_unknown_hospital_returns_not_found_envelope(api_client):
    r = api_client.get("/api/v1/hospitals/00000000-0000-0000-0000-000000000000/")
    assert r.status_code == 404, r.data

    body = r.json()
    assert body["error"]["code"] == "not_found"
    assert body["error"]["request_id"]


def test_non_uuid_path_is_404_not_500(api_client):
    r = api_client.get("/api/v1/patients/not-a-uuid/")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_validation_error_keeps_field_details():
    resp = api_exception_handler(ValidationError({"name": ["This field is required."]}), _context())
    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "validation_error"
    assert resp.data["error"]["message"] == "Request failed."
    assert "name" in resp.data["error"]["details"]


def test_detail_message_becomes_message():
    resp = api_exception_handler(ValidationError({"detail": "No hospitals found."}), _context())
    assert resp.data["error"]["message"] == "No hospitals found."
    assert resp.data["error"]["details"] is None


def test_conflict_and_protected_error_map_to_409():
    assert api_exception_handler(ConflictError("nope"), _context()).data["error"]["code"] == "conflict"

    resp = api_exception_handler(ProtectedError("in use", set()), _context())
    assert resp.status_code == 409
    assert resp.data["error"]["code"] == "conflict"


def test_upstream_failure_is_502():
    resp = api_exception_handler(UpstreamUnavailable(), _context())
    assert resp.status_code == 502
    assert resp.data["error"]["code"] == "ai_unavailable"


def test_unhandled_error_is_generic_500():
    resp = api_exception_handler(RuntimeError("boom"), _context())
    assert resp.status_code == 500
    assert resp.data["error"]["code"] == "server_error"
    assert resp.data["error"]["message"] == "Unexpected server error."


def test_unauthenticated_request_is_rejected(client):
    r = client.get("/api/v1/hospitals/")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "not_authenticated"
