# edhms/practitioners/api/serializers.py
from rest_framework import serializers

from edhms.practitioners.models import AvailabilityStatus, Practitioner


class PractitionerSerializer(serializers.ModelSerializer):
    hospital_id = serializers.UUIDField(read_only=True)
    hospital_name = serializers.CharField(source="hospital.name", read_only=True)
    department_id = serializers.UUIDField(read_only=True, allow_null=True)
    user_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Practitioner
        fields = [
            "id",
            "user_id",
            "hospital_id",
            "hospital_name",
            "department_id",
            "name",
            "email",
            "phone",
            "specialization",
            "license_number",
            "experience_years",
            "availability_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PractitionerCreateSerializer(serializers.Serializer):
    hospital_id = serializers.UUIDField()
    department_id = serializers.UUIDField(required=False, allow_null=True)
    user_id = serializers.IntegerField(required=False, allow_null=True)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    specialization = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    license_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    experience_years = serializers.IntegerField(min_value=0, required=False, default=0)
    availability_status = serializers.ChoiceField(
        choices=AvailabilityStatus.choices,
        default=AvailabilityStatus.AVAILABLE,
    )


class PractitionerUpdateSerializer(serializers.Serializer):
    department_id = serializers.UUIDField(required=False, allow_null=True)
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    specialization = serializers.CharField(max_length=128, required=False, allow_blank=True)
    license_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    experience_years = serializers.IntegerField(min_value=0, required=False)
    availability_status = serializers.ChoiceField(choices=AvailabilityStatus.choices, required=False)
