# edhms/records/api/views.py
from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.response import Response

from edhms.common.api.params import path_uuid
from edhms.common.permissions import MedicalRecordPermission
from edhms.hospitals.models import Hospital
from edhms.patients.models import Patient
from edhms.records.api.serializers import (
    MedicalRecordCreateSerializer,
    MedicalRecordSerializer,
    MedicalRecordUpdateSerializer,
)
from edhms.records.filters import MedicalRecordFilter
from edhms.records.selectors import records_qs
from edhms.records.services import MedicalRecordService


class MedicalRecordViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Visits across all patients. Filter by patient_id, hospital_id, visit_type,
    severity_level, status and a visit_from / visit_to timestamp range.
    """
    permission_classes = [MedicalRecordPermission]
    serializer_class = MedicalRecordSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = MedicalRecordFilter
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_queryset(self):
        return records_qs().order_by("-visit_date")

    def create(self, request):
        s = MedicalRecordCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = dict(s.validated_data)

        patient = Patient.objects.get(id=d.pop("patient_id"))
        hospital = Hospital.objects.get(id=d.pop("hospital_id"))

        record = MedicalRecordService.create(patient=patient, hospital=hospital, **d)
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = MedicalRecordUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        record = MedicalRecordService.update(record_id=path_uuid(pk, what="Medical record"), data=s.validated_data)
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_200_OK)
