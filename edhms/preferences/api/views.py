# edhms/preferences/api/views.py
from __future__ import annotations

import json
import logging

from django.http import JsonResponse
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from edhms.preferences.api.serializers import (
    ApiKeySerializer,
    PreferencesPatchSerializer,
    PreferencesSerializer,
    SettingsDocumentSerializer,
    SettingsImportFileSerializer,
)
from edhms.preferences.config import ConsoleSettings
from edhms.preferences.services import PreferenceService, settings_filename

logger = logging.getLogger(__name__)


def _payload(console: ConsoleSettings) -> dict:
    return {
        "notifications": console.notifications.to_dict(),
        "systemSettings": console.system.to_dict(),
        "hasApiKey": console.has_api_key,
    }


class PreferencesView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Preferences"], responses={200: PreferencesSerializer})
    def get(self, request):
        return Response(_payload(PreferenceService.load(request.user)), status=status.HTTP_200_OK)

    @extend_schema(tags=["Preferences"], request=PreferencesPatchSerializer, responses={200: PreferencesSerializer})
    def patch(self, request):
        console = PreferenceService.update(request.user, request.data)
        return Response(_payload(console), status=status.HTTP_200_OK)


class PreferencesExportView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Preferences"], responses={200: SettingsDocumentSerializer})
    def get(self, request):
        now = timezone.now()
        document = PreferenceService.export_document(request.user, now=now)
        response = JsonResponse(document, json_dumps_params={"indent": 2})
        response["Content-Disposition"] = f'attachment; filename="{settings_filename(now)}"'
        return response


class PreferencesImportView(APIView):
    """Accepts the exported document as a JSON body or as an uploaded `file`."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser]

    @extend_schema(
        tags=["Preferences"],
        request={
            "application/json": SettingsDocumentSerializer,
            "multipart/form-data": SettingsImportFileSerializer,
        },
        responses={200: PreferencesSerializer},
    )
    def post(self, request):
        upload = request.FILES.get("file")
        if upload is not None:
            try:
                document = json.loads(upload.read().decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError):
                logger.info("Rejected settings import: file is not valid JSON")
                raise ValidationError({"file": "Settings file is not valid JSON."})
        else:
            document = request.data

        console = PreferenceService.import_document(request.user, document)
        return Response(_payload(console), status=status.HTTP_200_OK)


class ApiKeyView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Preferences"], request=ApiKeySerializer, responses={200: PreferencesSerializer})
    def post(self, request):
        s = ApiKeySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        console = PreferenceService.set_api_key(request.user, s.validated_data["apiKey"])
        return Response(_payload(console), status=status.HTTP_200_OK)

    @extend_schema(tags=["Preferences"], request=None, responses={200: PreferencesSerializer})
    def delete(self, request):
        console = PreferenceService.clear_api_key(request.user)
        return Response(_payload(console), status=status.HTTP_200_OK)


class PreferencesResetView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Preferences"], request=None, responses={200: PreferencesSerializer})
    def post(self, request):
        return Response(_payload(PreferenceService.reset(request.user)), status=status.HTTP_200_OK)
