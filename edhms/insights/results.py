# edhms/insights/results.py
"""
Parsing of generated text into checked results.

Every parse_* function returns either ParsedInsight (JSON that matched the
expected shape) or MalformedResponse (anything else). Callers branch on the
type; nothing downstream reads unchecked model output.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Type, Union

from rest_framework import serializers

from edhms.insights.api.serializers import (
    BedForecastSerializer,
    EmergencyInsightSerializer,
    PatientRiskSerializer,
)

PATIENT_RISK = "patient_risk"
BED_FORECAST = "bed_forecast"
EMERGENCY_INSIGHT = "emergency_insight"

# Predicted occupancy (percent) above which a hospital is flagged.
CRITICAL_OCCUPANCY = 90

_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


@dataclass(frozen=True)
class ParsedInsight:
    kind: str
    data: dict


@dataclass(frozen=True)
class MalformedResponse:
    kind: str
    raw: str
    reason: str


InsightResult = Union[ParsedInsight, MalformedResponse]


def strip_fences(text: str) -> str:
    """Models like to wrap JSON in ```json fences."""
    m = _FENCE.match(text or "")
    return m.group(1).strip() if m else (text or "").strip()


def _plain(value: Any) -> Any:
    # validated_data nests OrderedDicts
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def _parse(kind: str, raw: str, serializer_class: Type[serializers.Serializer]) -> InsightResult:
    try:
        payload = json.loads(strip_fences(raw))
    except json.JSONDecodeError as exc:
        return MalformedResponse(kind=kind, raw=raw, reason=f"not JSON: {exc.msg}")

    if not isinstance(payload, dict):
        return MalformedResponse(kind=kind, raw=raw, reason="expected a JSON object")

    s = serializer_class(data=payload)
    if not s.is_valid():
        return MalformedResponse(kind=kind, raw=raw, reason=f"unexpected shape: {', '.join(sorted(s.errors))}")

    return ParsedInsight(kind=kind, data=_plain(s.validated_data))


def parse_patient_risk(raw: str) -> InsightResult:
    return _parse(PATIENT_RISK, raw, PatientRiskSerializer)


def parse_bed_forecast(raw: str) -> InsightResult:
    result = _parse(BED_FORECAST, raw, BedForecastSerializer)
    if isinstance(result, MalformedResponse):
        return result

    data = dict(result.data)
    data["predictions"] = [
        {**p, "critical": p["expectedOccupancy"] > CRITICAL_OCCUPANCY} for p in data["predictions"]
    ]
    return ParsedInsight(kind=result.kind, data=data)


def parse_emergency_insight(raw: str) -> InsightResult:
    return _parse(EMERGENCY_INSIGHT, raw, EmergencyInsightSerializer)
