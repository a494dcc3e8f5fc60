# edhms/practitioners/api/views.py
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.response import Response

from edhms.common.api.params import path_uuid, query_uuid
from edhms.common.permissions import PractitionerPermission
from edhms.practitioners.api.serializers import (
    PractitionerCreateSerializer,
    PractitionerSerializer,
    PractitionerUpdateSerializer,
)
from edhms.practitioners.models import Practitioner
from edhms.practitioners.selectors import list_practitioners
from edhms.practitioners.services import PractitionerService


class PractitionerViewSet(viewsets.ViewSet):
    permission_classes = [PractitionerPermission]

    serializer_class = PractitionerSerializer
    queryset = Practitioner.objects.none()

    def list(self, request):
        qs = list_practitioners(
            hospital_id=query_uuid(request, "hospital_id"),
            availability_status=request.query_params.get("availability_status") or None,
        )
        return Response(PractitionerSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    def retrieve(self, request, pk=None):
        obj = list_practitioners().get(id=path_uuid(pk, what="Practitioner"))
        return Response(PractitionerSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = PractitionerCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = PractitionerService.create(**s.validated_data)
        return Response(PractitionerSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = PractitionerUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = PractitionerService.update(practitioner_id=path_uuid(pk, what="Practitioner"), data=s.validated_data)
        return Response(PractitionerSerializer(obj).data, status=status.HTTP_200_OK)
