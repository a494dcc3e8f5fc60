# edhms/hospitals/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from edhms.common.api.params import path_uuid, query_flag
from edhms.common.permissions import HospitalPermission
from edhms.hospitals.api.serializers import (
    DepartmentSerializer,
    DepartmentWriteSerializer,
    HospitalCreateSerializer,
    HospitalSerializer,
    HospitalUpdateSerializer,
)
from edhms.hospitals.models import Hospital
from edhms.hospitals.selectors import get_hospital, list_departments, list_hospitals
from edhms.hospitals.services import DepartmentService, HospitalService, HospitalUpdate

def _actor_id(request) -> int | None:
    return request.user.id if request.user and request.user.is_authenticated else None


class HospitalViewSet(viewsets.ViewSet):
    permission_classes = [HospitalPermission]

    serializer_class = HospitalSerializer
    queryset = Hospital.objects.none()

    @extend_schema(
        tags=["Hospitals"],
        parameters=[
            OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description="Substring match on name or address."),
            OpenApiParameter("status", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: HospitalSerializer(many=True)},
    )
    def list(self, request):
        qs = list_hospitals(
            q=request.query_params.get("q"),
            status=request.query_params.get("status") or None,
        )
        return Response(HospitalSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], responses={200: HospitalSerializer})
    def retrieve(self, request, pk=None):
        obj = get_hospital(hospital_id=path_uuid(pk, what="Hospital"))
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], request=HospitalCreateSerializer, responses={201: HospitalSerializer})
    def create(self, request):
        s = HospitalCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = HospitalService.create(actor_user_id=_actor_id(request), **s.validated_data)
        return Response(HospitalSerializer(obj).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Hospitals"], request=HospitalUpdateSerializer, responses={200: HospitalSerializer})
    def partial_update(self, request, pk=None):
        s = HospitalUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = HospitalService.update(
            actor_user_id=_actor_id(request),
            hospital_id=path_uuid(pk, what="Hospital"),
            patch=HospitalUpdate(**s.validated_data),
        )
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Hospitals"],
        parameters=[
            OpenApiParameter("confirm", OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=True,
                             description="Must be true; deletion cannot be undone."),
        ],
        responses={204: None},
    )
    def destroy(self, request, pk=None):
        HospitalService.delete(
            actor_user_id=_actor_id(request),
            hospital_id=path_uuid(pk, what="Hospital"),
            confirm=query_flag(request, "confirm"),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ---------------------------------------------------------------
    # Departments (nested under a hospital)
    # ---------------------------------------------------------------

    @extend_schema(tags=["Hospitals"], responses={200: DepartmentSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="departments")
    def departments(self, request, pk=None):
        hospital = get_hospital(hospital_id=path_uuid(pk, what="Hospital"))
        qs = list_departments(hospital_id=hospital.id)
        return Response(DepartmentSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], request=DepartmentWriteSerializer, responses={201: DepartmentSerializer})
    @departments.mapping.post
    def create_department(self, request, pk=None):
        s = DepartmentWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = DepartmentService.create(hospital_id=path_uuid(pk, what="Hospital"), data=s.validated_data)
        return Response(DepartmentSerializer(obj).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Hospitals"], request=DepartmentWriteSerializer, responses={200: DepartmentSerializer})
    @action(detail=True, methods=["patch"], url_path=r"departments/(?P<department_id>[^/.]+)")
    def update_department(self, request, pk=None, department_id=None):
        s = DepartmentWriteSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        obj = DepartmentService.update(
            hospital_id=path_uuid(pk, what="Hospital"),
            department_id=path_uuid(department_id, what="Department"),
            data=s.validated_data,
        )
        return Response(DepartmentSerializer(obj).data, status=status.HTTP_200_OK)
