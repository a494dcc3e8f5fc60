# edhms/patients/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from edhms.common.api.params import path_uuid, query_limit
from edhms.common.permissions import PatientPermission
from edhms.patients.api.serializers import (
    ListEntrySerializer,
    PatientIntakeResponseSerializer,
    PatientIntakeSerializer,
    PatientSerializer,
    PatientUpdateSerializer,
)
from edhms.patients.models import Patient
from edhms.patients.selectors import get_patient, search_patients
from edhms.patients.services import PatientService
from edhms.records.api.serializers import MedicalRecordSerializer
from edhms.records.selectors import patient_history


def _actor_id(request) -> int | None:
    return request.user.id if request.user and request.user.is_authenticated else None


class PatientViewSet(viewsets.ViewSet):
    permission_classes = [PatientPermission]

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    @extend_schema(
        tags=["Patients"],
        parameters=[
            OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description="Substring match on name, patient ID or phone."),
            OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False,
                             description="Max rows (default 200)."),
        ],
        responses={200: PatientSerializer(many=True)},
    )
    def list(self, request):
        qs = search_patients(q=request.query_params.get("q", ""))
        limit = query_limit(request, default=200, maximum=200)
        return Response(PatientSerializer(qs[:limit], many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], responses={200: PatientSerializer})
    def retrieve(self, request, pk=None):
        patient = get_patient(patient_id=path_uuid(pk, what="Patient"))
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Patients"],
        request=PatientIntakeSerializer,
        responses={201: PatientIntakeResponseSerializer, 200: PatientIntakeResponseSerializer},
        description="Register a patient, or attach a visit to the one already holding patient_code.",
    )
    def create(self, request):
        ser = PatientIntakeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data

        result = PatientService.intake(
            actor_user_id=_actor_id(request),
            patient=dict(d["patient"]),
            record=dict(d.get("record") or {}),
            hospital_id=d.get("hospital_id"),
        )

        body = {
            "patient": PatientSerializer(result.patient).data,
            "created": result.created,
            "record": MedicalRecordSerializer(result.record).data if result.record else None,
        }
        return Response(body, status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], request=PatientUpdateSerializer, responses={200: PatientSerializer})
    def partial_update(self, request, pk=None):
        ser = PatientUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.update_patient(
            actor_user_id=_actor_id(request),
            patient_id=path_uuid(pk, what="Patient"),
            data=ser.validated_data,
        )
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], responses={200: MedicalRecordSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="records")
    def records(self, request, pk=None):
        patient = get_patient(patient_id=path_uuid(pk, what="Patient"))
        qs = patient_history(patient_id=patient.id)
        return Response(MedicalRecordSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    # ---------------------------------------------------------------
    # List editors: POST adds, DELETE removes (body or ?value=)
    # ---------------------------------------------------------------

    def _edit_list(self, request, pk, field: str) -> Response:
        raw = request.data if request.method == "POST" else (request.data or request.query_params)
        ser = ListEntrySerializer(data={"value": raw.get("value", "")})
        ser.is_valid(raise_exception=True)

        patient_id = path_uuid(pk, what="Patient")
        if request.method == "POST":
            patient = PatientService.add_list_entry(patient_id=patient_id, field=field, value=ser.validated_data["value"])
        else:
            patient = PatientService.remove_list_entry(
                patient_id=patient_id,
                field=field,
                value=ser.validated_data["value"],
            )
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], request=ListEntrySerializer, responses={200: PatientSerializer})
    @action(detail=True, methods=["post", "delete"], url_path="allergies")
    def allergies(self, request, pk=None):
        return self._edit_list(request, pk, "allergies")

    @extend_schema(tags=["Patients"], request=ListEntrySerializer, responses={200: PatientSerializer})
    @action(detail=True, methods=["post", "delete"], url_path="conditions")
    def conditions(self, request, pk=None):
        return self._edit_list(request, pk, "chronic_conditions")
