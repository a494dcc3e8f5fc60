# edhms/analytics/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from edhms.alerts.api.serializers import AlertSerializer
from edhms.hospitals.api.serializers import HospitalSerializer


class DailyAdmissionSerializer(serializers.Serializer):
    date = serializers.DateField()
    count = serializers.IntegerField()


class HospitalPerformanceSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    occupancy_rate = serializers.FloatField(allow_null=True)
    occupancy_percent = serializers.FloatField(allow_null=True)
    available_beds = serializers.IntegerField()
    total_beds = serializers.IntegerField()
    alert_count = serializers.IntegerField()


class AnalyticsSnapshotSerializer(serializers.Serializer):
    time_range = serializers.CharField()
    total_patients = serializers.IntegerField()
    total_hospitals = serializers.IntegerField()
    total_beds = serializers.IntegerField()
    available_beds = serializers.IntegerField()
    bed_occupancy_rate = serializers.FloatField(allow_null=True)
    emergency_visits = serializers.IntegerField()
    active_alerts = serializers.IntegerField()
    alerts_by_type = serializers.DictField(child=serializers.IntegerField())
    daily_admissions = DailyAdmissionSerializer(many=True)
    hospital_performance = HospitalPerformanceSerializer(many=True)


class AnalyticsExportSerializer(serializers.Serializer):
    generatedAt = serializers.DateTimeField()
    timeRange = serializers.CharField()
    metrics = AnalyticsSnapshotSerializer()


class DashboardSerializer(serializers.Serializer):
    total_hospitals = serializers.IntegerField()
    total_patients = serializers.IntegerField()
    available_beds = serializers.IntegerField()
    recent_alerts = AlertSerializer(many=True)
    hospitals = HospitalSerializer(many=True)
