# edhms/analytics/api/views.py
from __future__ import annotations

from django.http import JsonResponse
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from edhms.analytics.api.serializers import (
    AnalyticsExportSerializer,
    AnalyticsSnapshotSerializer,
    DashboardSerializer,
)
from edhms.analytics.metrics import WINDOWS
from edhms.analytics.services import AnalyticsService, DashboardService, export_filename, window_or_400
from edhms.common.permissions import AnalyticsPermission

RANGE_PARAM = OpenApiParameter(
    "range",
    OpenApiTypes.STR,
    OpenApiParameter.QUERY,
    required=False,
    enum=list(WINDOWS),
    description="Time window; defaults to 7d.",
)


class AnalyticsViewSet(viewsets.ViewSet):
    permission_classes = [AnalyticsPermission]

    @extend_schema(tags=["Analytics"], parameters=[RANGE_PARAM], responses={200: AnalyticsSnapshotSerializer})
    def list(self, request):
        window = window_or_400(request.query_params.get("range"))
        snap = AnalyticsService.snapshot(window=window)
        return Response(snap.as_dict(), status=status.HTTP_200_OK)

    @extend_schema(tags=["Analytics"], parameters=[RANGE_PARAM], responses={200: AnalyticsExportSerializer})
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        now = timezone.now()
        window = window_or_400(request.query_params.get("range"), now=now)
        document = AnalyticsService.export_document(window=window, now=now)

        response = JsonResponse(document, json_dumps_params={"indent": 2})
        response["Content-Disposition"] = f'attachment; filename="{export_filename(window)}"'
        return response


class DashboardView(APIView):
    permission_classes = [AnalyticsPermission]

    @extend_schema(tags=["Analytics"], responses={200: DashboardSerializer})
    def get(self, request):
        return Response(DashboardSerializer(DashboardService.overview()).data, status=status.HTTP_200_OK)
