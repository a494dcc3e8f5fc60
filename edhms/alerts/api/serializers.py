# edhms/alerts/api/serializers.py
from rest_framework import serializers

from edhms.alerts.models import AlertType, EmergencyAlert
from edhms.common.models import SeverityLevel


class AlertSerializer(serializers.ModelSerializer):
    hospital_id = serializers.UUIDField(read_only=True)
    hospital_name = serializers.CharField(source="hospital.name", read_only=True)
    patient_id = serializers.UUIDField(read_only=True, allow_null=True)
    patient_name = serializers.CharField(source="patient.name", read_only=True, default=None)
    patient_code = serializers.CharField(source="patient.patient_code", read_only=True, default=None)
    created_by_id = serializers.UUIDField(read_only=True, allow_null=True)
    resolved_by_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = EmergencyAlert
        fields = [
            "id",
            "hospital_id",
            "hospital_name",
            "patient_id",
            "patient_name",
            "patient_code",
            "alert_type",
            "severity",
            "title",
            "description",
            "status",
            "created_by_id",
            "resolved_by_id",
            "resolved_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AlertCreateSerializer(serializers.Serializer):
    hospital_id = serializers.UUIDField()
    patient_id = serializers.UUIDField(required=False, allow_null=True)
    alert_type = serializers.ChoiceField(choices=AlertType.choices, default=AlertType.PATIENT_EMERGENCY)
    severity = serializers.ChoiceField(choices=SeverityLevel.choices, default=SeverityLevel.MEDIUM)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    created_by_id = serializers.UUIDField(required=False, allow_null=True)


class AlertUpdateSerializer(serializers.Serializer):
    """Edit form. Status changes go through acknowledge/resolve."""
    hospital_id = serializers.UUIDField(required=False)
    patient_id = serializers.UUIDField(required=False, allow_null=True)
    alert_type = serializers.ChoiceField(choices=AlertType.choices, required=False)
    severity = serializers.ChoiceField(choices=SeverityLevel.choices, required=False)
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if "status" in self.initial_data:
            raise serializers.ValidationError({"status": "Use acknowledge or resolve to change status."})
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class AlertResolveSerializer(serializers.Serializer):
    resolved_by_id = serializers.UUIDField(required=False, allow_null=True)


class AlertListResponseSerializer(serializers.Serializer):
    counts = serializers.DictField(child=serializers.IntegerField())
    results = AlertSerializer(many=True)


class AlertChangesSerializer(serializers.Serializer):
    changed = serializers.BooleanField()
    fingerprint = serializers.CharField()
