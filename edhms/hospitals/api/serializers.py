# edhms/hospitals/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from edhms.analytics.metrics import as_percent, capacity_badge, occupancy_rate
from edhms.common.api.fields import CommaSeparatedListField
from edhms.common.models import OperationalStatus
from edhms.hospitals.models import Department, Hospital


class HospitalSerializer(serializers.ModelSerializer):
    occupancy_rate = serializers.SerializerMethodField()
    occupancy_percent = serializers.SerializerMethodField()
    capacity_badge = serializers.SerializerMethodField()

    class Meta:
        model = Hospital
        fields = [
            "id",
            "name",
            "address",
            "phone",
            "email",
            "emergency_contact",
            "bed_capacity",
            "available_beds",
            "specialties",
            "status",
            "latitude",
            "longitude",
            "occupancy_rate",
            "occupancy_percent",
            "capacity_badge",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_occupancy_rate(self, obj: Hospital) -> float | None:
        return occupancy_rate(obj.bed_capacity, obj.available_beds)

    def get_occupancy_percent(self, obj: Hospital) -> float | None:
        return as_percent(occupancy_rate(obj.bed_capacity, obj.available_beds))

    def get_capacity_badge(self, obj: Hospital) -> str:
        return capacity_badge(status=obj.status, capacity=obj.bed_capacity, available=obj.available_beds)


class HospitalCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    address = serializers.CharField()
    phone = serializers.CharField(max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    emergency_contact = serializers.CharField(max_length=32)
    bed_capacity = serializers.IntegerField(min_value=0, default=0)
    available_beds = serializers.IntegerField(min_value=0, default=0)
    specialties = CommaSeparatedListField(required=False, default=list)
    status = serializers.ChoiceField(choices=OperationalStatus.choices, default=OperationalStatus.ACTIVE)
    latitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)
    longitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)


class HospitalUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    address = serializers.CharField(required=False)
    phone = serializers.CharField(max_length=32, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    emergency_contact = serializers.CharField(max_length=32, required=False)
    bed_capacity = serializers.IntegerField(min_value=0, required=False)
    available_beds = serializers.IntegerField(min_value=0, required=False)
    specialties = CommaSeparatedListField(required=False)
    status = serializers.ChoiceField(choices=OperationalStatus.choices, required=False)
    latitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False)
    longitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class DepartmentSerializer(serializers.ModelSerializer):
    hospital_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Department
        fields = [
            "id",
            "hospital_id",
            "name",
            "head_doctor",
            "phone",
            "bed_count",
            "available_beds",
            "equipment",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class DepartmentWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    head_doctor = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    bed_count = serializers.IntegerField(min_value=0, required=False)
    available_beds = serializers.IntegerField(min_value=0, required=False)
    equipment = CommaSeparatedListField(required=False)
    status = serializers.ChoiceField(choices=OperationalStatus.choices, required=False)
