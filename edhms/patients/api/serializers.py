# edhms/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from edhms.common.api.fields import CommaSeparatedListField
from edhms.patients.models import BloodType, Patient
from edhms.records.api.serializers import MedicalRecordSerializer, RecordInputSerializer


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "patient_code",
            "name",
            "age",
            "gender",
            "phone",
            "email",
            "address",
            "blood_type",
            "allergies",
            "chronic_conditions",
            "emergency_contact_name",
            "emergency_contact_phone",
            "insurance_info",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PatientInputSerializer(serializers.Serializer):
    """Patient half of the intake form. patient_code is generated when omitted."""
    patient_code = serializers.CharField(max_length=64, required=False, allow_blank=True)
    name = serializers.CharField(max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150, required=False, allow_null=True)
    gender = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    blood_type = serializers.ChoiceField(choices=BloodType.choices, required=False, allow_blank=True, default="")
    allergies = CommaSeparatedListField(required=False, default=list)
    chronic_conditions = CommaSeparatedListField(required=False, default=list)
    emergency_contact_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    emergency_contact_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    insurance_info = serializers.JSONField(required=False, default=dict)


class PatientIntakeSerializer(serializers.Serializer):
    patient = PatientInputSerializer()
    record = RecordInputSerializer(required=False)
    hospital_id = serializers.UUIDField(required=False, allow_null=True)


class PatientIntakeResponseSerializer(serializers.Serializer):
    patient = PatientSerializer()
    created = serializers.BooleanField()
    record = MedicalRecordSerializer(allow_null=True)


class PatientUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH).
    """
    patient_code = serializers.CharField(max_length=64, required=False)
    name = serializers.CharField(max_length=255, required=False)
    age = serializers.IntegerField(min_value=0, max_value=150, required=False, allow_null=True)
    gender = serializers.CharField(max_length=32, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    blood_type = serializers.ChoiceField(choices=BloodType.choices, required=False, allow_blank=True)
    allergies = CommaSeparatedListField(required=False)
    chronic_conditions = CommaSeparatedListField(required=False)
    emergency_contact_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    emergency_contact_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    insurance_info = serializers.JSONField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class ListEntrySerializer(serializers.Serializer):
    value = serializers.CharField(allow_blank=True, trim_whitespace=False)
