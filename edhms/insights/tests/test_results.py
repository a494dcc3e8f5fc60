import json

from edhms.insights.results import (
    MalformedResponse,
    ParsedInsight,
    parse_bed_forecast,
    parse_emergency_insight,
    parse_patient_risk,
    strip_fences,
)

RISK = {
    "riskLevel": "high",
    "emergencyConditions": ["Sepsis"],
    "medicalPatterns": ["Recurring infections"],
    "immediateActions": ["Blood cultures"],
    "specialistReferrals": ["Infectious disease"],
    "confidence": 0.82,
}


def test_strip_fences():
    assert strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_fences("```\n[]\n```") == "[]"
    assert strip_fences('  {"a": 1} ') == '{"a": 1}'


def test_patient_risk_parses_and_normalizes_level():
    result = parse_patient_risk("```json\n" + json.dumps(RISK) + "\n```")
    assert isinstance(result, ParsedInsight)
    assert result.data["riskLevel"] == "High"
    assert result.data["confidence"] == 0.82


def test_confidence_is_echoed_not_thresholded():
    result = parse_patient_risk(json.dumps({**RISK, "confidence": 0.01}))
    assert isinstance(result, ParsedInsight)
    assert result.data["confidence"] == 0.01


def test_non_json_is_malformed():
    result = parse_patient_risk("The patient looks fine to me.")
    assert isinstance(result, MalformedResponse)
    assert result.raw == "The patient looks fine to me."
    assert result.reason.startswith("not JSON")


def test_wrong_shape_is_malformed():
    assert isinstance(parse_patient_risk(json.dumps({"riskLevel": "Apocalyptic"})), MalformedResponse)
    assert isinstance(parse_patient_risk(json.dumps([RISK])), MalformedResponse)
    assert isinstance(parse_bed_forecast(json.dumps({"predictions": "many"})), MalformedResponse)


def test_bed_forecast_flags_high_occupancy():
    raw = json.dumps(
        {
            "predictions": [
                {"hospitalId": "h1", "expectedOccupancy": 95, "availableBeds": 2},
                {"hospitalId": "h2", "expectedOccupancy": 60, "availableBeds": 30},
            ],
            "alerts": [{"hospitalId": "h1", "severity": "high", "message": "Near capacity"}],
            "recommendations": ["Divert ambulances to h2"],
        }
    )
    result = parse_bed_forecast(raw)
    assert isinstance(result, ParsedInsight)
    assert [p["critical"] for p in result.data["predictions"]] == [True, False]
    assert result.data["alerts"][0]["message"] == "Near capacity"


def test_emergency_insight_defaults_missing_lists():
    result = parse_emergency_insight(json.dumps({"severityClassification": "Critical"}))
    assert isinstance(result, ParsedInsight)
    assert result.data["riskFactors"] == []
