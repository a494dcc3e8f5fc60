# edhms/insights/api/views.py
from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from edhms.analytics.api.views import RANGE_PARAM
from edhms.analytics.services import window_or_400
from edhms.common.api.exceptions import MalformedUpstreamResponse
from edhms.common.api.params import path_uuid
from edhms.common.permissions import InsightPermission
from edhms.insights.api.serializers import BedForecastResponseSerializer, InsightResponseSerializer
from edhms.insights.results import MalformedResponse
from edhms.insights.services import Insight, InsightService
from edhms.preferences.services import PreferenceService

logger = logging.getLogger(__name__)


def _respond(insight: Insight) -> Response:
    result = insight.result
    if isinstance(result, MalformedResponse):
        logger.warning("Discarded %s from %s: %s", result.kind, insight.model, result.reason)
        raise MalformedUpstreamResponse()

    body = {"kind": result.kind, "model": insight.model, "result": result.data}
    if insight.context:
        body.update(insight.context)
    return Response(body, status=status.HTTP_200_OK)


class InsightViewSet(viewsets.ViewSet):
    permission_classes = [InsightPermission]

    @extend_schema(tags=["Insights"], request=None, responses={200: InsightResponseSerializer})
    @action(detail=False, methods=["post"], url_path=r"patients/(?P<patient_id>[^/.]+)")
    def patient(self, request, patient_id=None):
        insight = InsightService.patient_risk(
            console=PreferenceService.load(request.user),
            patient_id=path_uuid(patient_id, what="Patient"),
        )
        return _respond(insight)

    @extend_schema(tags=["Insights"], request=None, parameters=[RANGE_PARAM], responses={200: BedForecastResponseSerializer})
    @action(detail=False, methods=["post"], url_path="bed-availability")
    def bed_availability(self, request):
        insight = InsightService.bed_forecast(
            console=PreferenceService.load(request.user),
            window=window_or_400(request.query_params.get("range")),
        )
        return _respond(insight)

    @extend_schema(tags=["Insights"], request=None, responses={200: InsightResponseSerializer})
    @action(detail=False, methods=["post"], url_path=r"alerts/(?P<alert_id>[^/.]+)")
    def alert(self, request, alert_id=None):
        insight = InsightService.alert_insight(
            console=PreferenceService.load(request.user),
            alert_id=path_uuid(alert_id, what="Alert"),
        )
        return _respond(insight)
