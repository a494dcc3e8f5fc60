# edhms/records/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from edhms.common.api.fields import CommaSeparatedListField
from edhms.common.models import SeverityLevel
from edhms.records.models import MedicalRecord, RecordStatus, VisitType


class MedicalRecordSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    patient_code = serializers.CharField(source="patient.patient_code", read_only=True)
    hospital_id = serializers.UUIDField(read_only=True)
    hospital_name = serializers.CharField(source="hospital.name", read_only=True)
    practitioner_id = serializers.UUIDField(read_only=True, allow_null=True)
    practitioner_name = serializers.CharField(source="practitioner.name", read_only=True, default=None)

    class Meta:
        model = MedicalRecord
        fields = [
            "id",
            "patient_id",
            "patient_code",
            "hospital_id",
            "hospital_name",
            "practitioner_id",
            "practitioner_name",
            "diagnosis",
            "symptoms",
            "treatment",
            "medications",
            "vital_signs",
            "test_results",
            "notes",
            "severity_level",
            "visit_type",
            "status",
            "visit_date",
            "discharge_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RecordInputSerializer(serializers.Serializer):
    """The medical-record half of the intake form; also used for direct creation."""
    practitioner_id = serializers.UUIDField(required=False, allow_null=True)
    diagnosis = serializers.CharField(required=False, allow_blank=True, default="")
    symptoms = CommaSeparatedListField(required=False, default=list)
    treatment = serializers.CharField(required=False, allow_blank=True, default="")
    medications = serializers.JSONField(required=False, default=list)
    vital_signs = serializers.JSONField(required=False, default=dict)
    test_results = serializers.JSONField(required=False, default=dict)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    severity_level = serializers.ChoiceField(choices=SeverityLevel.choices, required=False, allow_blank=True, default="")
    visit_type = serializers.ChoiceField(choices=VisitType.choices, default=VisitType.EMERGENCY)
    visit_date = serializers.DateTimeField(required=False, allow_null=True)


class MedicalRecordCreateSerializer(RecordInputSerializer):
    patient_id = serializers.UUIDField()
    hospital_id = serializers.UUIDField()
    diagnosis = serializers.CharField()


class MedicalRecordUpdateSerializer(serializers.Serializer):
    diagnosis = serializers.CharField(required=False)
    symptoms = CommaSeparatedListField(required=False)
    treatment = serializers.CharField(required=False, allow_blank=True)
    medications = serializers.JSONField(required=False)
    vital_signs = serializers.JSONField(required=False)
    test_results = serializers.JSONField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    severity_level = serializers.ChoiceField(choices=SeverityLevel.choices, required=False, allow_blank=True)
    visit_type = serializers.ChoiceField(choices=VisitType.choices, required=False)
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False)
    visit_date = serializers.DateTimeField(required=False)
    discharge_date = serializers.DateTimeField(required=False, allow_null=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs
