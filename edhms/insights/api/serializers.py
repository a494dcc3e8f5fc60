# edhms/insights/api/serializers.py
"""
Expected shapes of model output (validated before anything renders it)
plus the request/response shapes of the insight endpoints.
"""
from rest_framework import serializers

RISK_LEVELS = ("Low", "Medium", "High", "Critical")


def _strings():
    return serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)


class PatientRiskSerializer(serializers.Serializer):
    riskLevel = serializers.CharField()
    emergencyConditions = _strings()
    medicalPatterns = _strings()
    immediateActions = _strings()
    specialistReferrals = _strings()
    confidence = serializers.FloatField(required=False, allow_null=True, default=None)

    def validate_riskLevel(self, value):
        for level in RISK_LEVELS:
            if value.strip().lower() == level.lower():
                return level
        raise serializers.ValidationError(f"Expected one of {', '.join(RISK_LEVELS)}.")


class BedPredictionSerializer(serializers.Serializer):
    hospitalId = serializers.CharField()
    expectedOccupancy = serializers.FloatField()
    availableBeds = serializers.IntegerField(required=False, allow_null=True, default=None)


class CapacityAlertSerializer(serializers.Serializer):
    hospitalId = serializers.CharField(required=False, allow_blank=True, default="")
    severity = serializers.CharField()
    message = serializers.CharField()


class BedForecastSerializer(serializers.Serializer):
    predictions = BedPredictionSerializer(many=True)
    alerts = CapacityAlertSerializer(many=True, required=False, default=list)
    recommendations = _strings()


class EmergencyInsightSerializer(serializers.Serializer):
    severityClassification = serializers.CharField()
    resourceRequirements = _strings()
    treatmentProtocols = _strings()
    riskFactors = _strings()
    monitoringRecommendations = _strings()


class DemandSerializer(serializers.Serializer):
    currentOccupancy = serializers.FloatField(allow_null=True)
    emergencyVisits = serializers.IntegerField()
    activeAlerts = serializers.IntegerField()


class InsightResponseSerializer(serializers.Serializer):
    kind = serializers.CharField()
    model = serializers.CharField()
    result = serializers.DictField()


class BedForecastResponseSerializer(InsightResponseSerializer):
    timeRange = serializers.CharField()
    demand = DemandSerializer()
