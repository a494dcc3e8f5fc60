# edhms/insights/prompts.py
from __future__ import annotations

import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder


def _dump(value: Any) -> str:
    return json.dumps(value, cls=DjangoJSONEncoder)


def patient_analysis_prompt(patient: dict, history: list[dict]) -> str:
    return f"""
Analyze the following patient data and medical history for emergency healthcare insights:

Patient Data: {_dump(patient)}
Medical History: {_dump(history)}

Please provide:
1. Risk assessment (Low/Medium/High/Critical)
2. Potential emergency conditions to watch for
3. Relevant medical history patterns
4. Recommended immediate actions
5. Specialist referral recommendations

Format the response as JSON with the following structure:
{{
  "riskLevel": "string",
  "emergencyConditions": ["string"],
  "medicalPatterns": ["string"],
  "immediateActions": ["string"],
  "specialistReferrals": ["string"],
  "confidence": number
}}
""".strip()


def bed_forecast_prompt(hospitals: list[dict], demand: dict) -> str:
    return f"""
Analyze hospital bed availability and predict capacity for the next 24 hours:

Hospital Data: {_dump(hospitals)}
Current Demand: {_dump(demand)}

Provide predictions for:
1. Expected bed occupancy rates
2. Critical capacity alerts
3. Resource redistribution recommendations
4. Emergency surge preparation

Return as JSON:
{{
  "predictions": [{{"hospitalId": "string", "expectedOccupancy": number, "availableBeds": number}}],
  "alerts": [{{"hospitalId": "string", "severity": "string", "message": "string"}}],
  "recommendations": ["string"]
}}
""".strip()


def emergency_insight_prompt(emergency: dict) -> str:
    return f"""
Generate emergency healthcare insights based on:
{_dump(emergency)}

Analyze and provide:
1. Severity classification
2. Resource requirements
3. Treatment protocols
4. Risk factors
5. Monitoring recommendations

Return as JSON:
{{
  "severityClassification": "string",
  "resourceRequirements": ["string"],
  "treatmentProtocols": ["string"],
  "riskFactors": ["string"],
  "monitoringRecommendations": ["string"]
}}
""".strip()
