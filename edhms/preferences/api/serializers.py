# edhms/preferences/api/serializers.py
from __future__ import annotations

from rest_framework import serializers


class NotificationSettingsSerializer(serializers.Serializer):
    emergencyAlerts = serializers.BooleanField(default=True)
    bedUpdates = serializers.BooleanField(default=True)
    systemMaintenance = serializers.BooleanField(default=False)
    weeklyReports = serializers.BooleanField(default=True)


class SystemSettingsSerializer(serializers.Serializer):
    autoRefresh = serializers.BooleanField(default=True)
    refreshInterval = serializers.IntegerField(default=30, min_value=5, max_value=3600)
    darkMode = serializers.BooleanField(default=False)
    soundAlerts = serializers.BooleanField(default=True)


class PreferencesSerializer(serializers.Serializer):
    """Read shape. The key itself is never echoed back."""
    notifications = NotificationSettingsSerializer()
    systemSettings = SystemSettingsSerializer()
    hasApiKey = serializers.BooleanField()


class PreferencesPatchSerializer(serializers.Serializer):
    """Toggle-level edits: only the keys sent are changed."""
    notifications = NotificationSettingsSerializer(required=False)
    systemSettings = SystemSettingsSerializer(required=False)


class SettingsDocumentSerializer(serializers.Serializer):
    """
    The export/import document. On import each section present replaces
    the stored one; missing keys inside a section take their defaults.
    """
    notifications = NotificationSettingsSerializer(required=False)
    systemSettings = SystemSettingsSerializer(required=False)
    exportDate = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        if "notifications" not in attrs and "systemSettings" not in attrs:
            raise serializers.ValidationError("Settings file has neither notifications nor systemSettings.")
        return attrs


class SettingsImportFileSerializer(serializers.Serializer):
    file = serializers.FileField()


class ApiKeySerializer(serializers.Serializer):
    apiKey = serializers.CharField(max_length=255, trim_whitespace=True)
