# edhms/alerts/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from edhms.alerts.api.serializers import (
    AlertChangesSerializer,
    AlertCreateSerializer,
    AlertListResponseSerializer,
    AlertResolveSerializer,
    AlertSerializer,
    AlertUpdateSerializer,
)
from edhms.alerts.models import EmergencyAlert
from edhms.alerts.selectors import alerts_qs, feed_fingerprint, fetch_alerts, filter_alerts, status_counts
from edhms.alerts.services import AlertService
from edhms.common.api.params import path_uuid
from edhms.common.permissions import AlertPermission


def _actor_id(request) -> int | None:
    return request.user.id if request.user and request.user.is_authenticated else None


class AlertViewSet(viewsets.ViewSet):
    permission_classes = [AlertPermission]

    serializer_class = AlertSerializer
    queryset = EmergencyAlert.objects.none()

    @extend_schema(
        tags=["Alerts"],
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description='Status filter; "all" disables it.'),
            OpenApiParameter("severity", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description='Severity filter; "all" disables it.'),
        ],
        responses={200: AlertListResponseSerializer},
    )
    def list(self, request):
        alerts = fetch_alerts()
        visible = filter_alerts(
            alerts,
            status=request.query_params.get("status"),
            severity=request.query_params.get("severity"),
        )
        return Response(
            {"counts": status_counts(alerts), "results": AlertSerializer(visible, many=True).data},
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Alerts"], responses={200: AlertSerializer})
    def retrieve(self, request, pk=None):
        alert = alerts_qs().get(id=path_uuid(pk, what="Alert"))
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Alerts"], request=AlertCreateSerializer, responses={201: AlertSerializer})
    def create(self, request):
        s = AlertCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        alert = AlertService.create_alert(actor_user_id=_actor_id(request), **s.validated_data)
        return Response(AlertSerializer(alert).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Alerts"], request=AlertUpdateSerializer, responses={200: AlertSerializer})
    def partial_update(self, request, pk=None):
        s = AlertUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        alert = AlertService.update_alert(alert_id=path_uuid(pk, what="Alert"), data=s.validated_data)
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Alerts"], request=None, responses={200: AlertSerializer})
    @action(methods=["POST"], detail=True, url_path="acknowledge")
    def acknowledge(self, request, pk=None):
        alert = AlertService.acknowledge(actor_user_id=_actor_id(request), alert_id=path_uuid(pk, what="Alert"))
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Alerts"], request=AlertResolveSerializer, responses={200: AlertSerializer})
    @action(methods=["POST"], detail=True, url_path="resolve")
    def resolve(self, request, pk=None):
        s = AlertResolveSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        alert = AlertService.resolve(
            actor_user_id=_actor_id(request),
            alert_id=path_uuid(pk, what="Alert"),
            resolved_by_id=s.validated_data.get("resolved_by_id"),
        )
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Alerts"],
        parameters=[
            OpenApiParameter("since", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description="Fingerprint from the previous call."),
        ],
        responses={200: AlertChangesSerializer},
    )
    @action(methods=["GET"], detail=False, url_path="changes")
    def changes(self, request):
        """Polling transport for browsers: re-fetch the list when changed is true."""
        current = feed_fingerprint()
        since = request.query_params.get("since")
        return Response({"changed": bool(since) and since != current, "fingerprint": current})
