import json

import httpx
import pytest

from edhms.insights import services
from edhms.insights.client import GeminiClient
from edhms.preferences.services import PreferenceService, resolve_api_key
from edhms.records.models import MedicalRecord

pytestmark = pytest.mark.django_db


def _gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def gemini(monkeypatch):
    """
    Route GeminiClient through httpx.MockTransport.
    Set gemini.reply / gemini.status per test; gemini.requests records calls.
    """

    class Fake:
        def __init__(self):
            self.reply = "{}"
            self.status = 200
            self.requests = []

    fake = Fake()

    def handler(request: httpx.Request) -> httpx.Response:
        fake.requests.append(request)
        return httpx.Response(fake.status, json=_gemini_reply(fake.reply))

    def build_client(console):
        return GeminiClient(api_key=resolve_api_key(console), transport=httpx.MockTransport(handler))

    monkeypatch.setattr(services, "build_client", build_client)
    return fake


@pytest.fixture
def history(patient, hospital):
    return MedicalRecord.objects.create(patient=patient, hospital=hospital, diagnosis="Chest pain", severity_level="high")


RISK = {
    "riskLevel": "Critical",
    "emergencyConditions": ["MI"],
    "medicalPatterns": [],
    "immediateActions": ["ECG"],
    "specialistReferrals": ["Cardiology"],
    "confidence": 0.9,
}


def test_patient_analysis(api_client, patient, history, gemini):
    gemini.reply = "```json\n" + json.dumps(RISK) + "\n```"

    r = api_client.post(f"/api/v1/insights/patients/{patient.id}/")
    assert r.status_code == 200, r.data
    assert r.data["kind"] == "patient_risk"
    assert r.data["model"] == "gemini-2.0-flash"
    assert r.data["result"]["riskLevel"] == "Critical"

    sent = gemini.requests[0]
    assert sent.url.path.endswith("/models/gemini-2.0-flash:generateContent")
    assert sent.url.params["key"] == "test-key"
    prompt = json.loads(sent.content)["contents"][0]["parts"][0]["text"]
    assert "Chest pain" in prompt
    assert patient.patient_code in prompt


def test_user_key_wins_over_deployment_key(api_client, user, patient, history, gemini):
    PreferenceService.set_api_key(user, "mine")
    gemini.reply = json.dumps(RISK)
    api_client.post(f"/api/v1/insights/patients/{patient.id}/")
    assert gemini.requests[0].url.params["key"] == "mine"


def test_missing_key_is_validation_error(api_client, patient, history, gemini, settings):
    settings.GEMINI_API_KEY = ""
    r = api_client.post(f"/api/v1/insights/patients/{patient.id}/")
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Gemini API key is required"
    assert gemini.requests == []


def test_patient_without_records_is_rejected(api_client, patient, gemini):
    r = api_client.post(f"/api/v1/insights/patients/{patient.id}/")
    assert r.status_code == 400
    assert gemini.requests == []


def test_malformed_output_is_502_and_changes_nothing(api_client, patient, history, gemini):
    gemini.reply = "I cannot help with that."
    r = api_client.post(f"/api/v1/insights/patients/{patient.id}/")
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "malformed_ai_response"
    assert MedicalRecord.objects.count() == 1


def test_upstream_http_error_is_502(api_client, patient, history, gemini):
    gemini.status = 503
    r = api_client.post(f"/api/v1/insights/patients/{patient.id}/")
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "ai_unavailable"


def test_bed_forecast(api_client, hospital, gemini):
    gemini.reply = json.dumps(
        {
            "predictions": [{"hospitalId": str(hospital.id), "expectedOccupancy": 92.5, "availableBeds": 3}],
            "alerts": [],
            "recommendations": ["Open overflow ward"],
        }
    )
    r = api_client.post("/api/v1/insights/bed-availability/?range=24h")
    assert r.status_code == 200, r.data
    assert r.data["model"] == "gemini-pro"
    assert r.data["timeRange"] == "24h"
    assert r.data["demand"] == {"currentOccupancy": 60.0, "emergencyVisits": 0, "activeAlerts": 0}
    assert r.data["result"]["predictions"][0]["critical"] is True

    prompt = json.loads(gemini.requests[0].content)["contents"][0]["parts"][0]["text"]
    assert "City General" in prompt


def test_alert_insight(api_client, alert, gemini):
    gemini.reply = json.dumps({"severityClassification": "Critical", "treatmentProtocols": ["ACLS"]})
    r = api_client.post(f"/api/v1/insights/alerts/{alert.id}/")
    assert r.status_code == 200, r.data
    assert r.data["result"]["treatmentProtocols"] == ["ACLS"]


def test_readonly_cannot_call_ai(readonly_client, alert, gemini):
    r = readonly_client.post(f"/api/v1/insights/alerts/{alert.id}/")
    assert r.status_code == 403
    assert gemini.requests == []
