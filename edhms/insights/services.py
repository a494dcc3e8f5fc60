# edhms/insights/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from django.conf import settings
from rest_framework.exceptions import ValidationError

from edhms.alerts.api.serializers import AlertSerializer
from edhms.alerts.selectors import alerts_qs
from edhms.analytics.metrics import TimeWindow, as_percent
from edhms.analytics.services import AnalyticsService
from edhms.insights import prompts
from edhms.insights.client import GeminiClient
from edhms.insights.results import (
    InsightResult,
    parse_bed_forecast,
    parse_emergency_insight,
    parse_patient_risk,
)
from edhms.patients.api.serializers import PatientSerializer
from edhms.patients.selectors import get_patient
from edhms.preferences.config import ConsoleSettings
from edhms.preferences.services import resolve_api_key
from edhms.records.api.serializers import MedicalRecordSerializer
from edhms.records.selectors import patient_history

logger = logging.getLogger(__name__)

NO_HISTORY_MSG = "Patient has no medical records to analyze."


@dataclass(frozen=True)
class Insight:
    model: str
    result: InsightResult
    context: dict | None = None


def build_client(console: ConsoleSettings | None) -> GeminiClient:
    return GeminiClient(api_key=resolve_api_key(console))


def _generate(console: ConsoleSettings | None, model: str, prompt: str) -> str:
    with build_client(console) as client:
        return client.generate(model, prompt)


class InsightService:
    """Advisory only: nothing here writes to the database."""

    @staticmethod
    def patient_risk(*, console: ConsoleSettings | None, patient_id: UUID) -> Insight:
        patient = get_patient(patient_id=patient_id)
        history = list(patient_history(patient_id=patient.id))
        if not history:
            raise ValidationError({"detail": NO_HISTORY_MSG})

        model = settings.GEMINI_PATIENT_MODEL
        prompt = prompts.patient_analysis_prompt(
            PatientSerializer(patient).data,
            MedicalRecordSerializer(history, many=True).data,
        )
        raw = _generate(console, model, prompt)
        return Insight(model=model, result=parse_patient_risk(raw))

    @staticmethod
    def bed_forecast(*, console: ConsoleSettings | None, window: TimeWindow) -> Insight:
        snap = AnalyticsService.snapshot(window=window)
        demand = {
            "currentOccupancy": as_percent(snap.bed_occupancy_rate),
            "emergencyVisits": snap.emergency_visits,
            "activeAlerts": snap.active_alerts,
        }

        model = settings.GEMINI_FORECAST_MODEL
        raw = _generate(console, model, prompts.bed_forecast_prompt(snap.hospital_performance, demand))
        return Insight(model=model, result=parse_bed_forecast(raw), context={"timeRange": window.key, "demand": demand})

    @staticmethod
    def alert_insight(*, console: ConsoleSettings | None, alert_id: UUID) -> Insight:
        alert = alerts_qs().get(id=alert_id)

        model = settings.GEMINI_FORECAST_MODEL
        raw = _generate(console, model, prompts.emergency_insight_prompt(AlertSerializer(alert).data))
        return Insight(model=model, result=parse_emergency_insight(raw))
