# edhms/preferences/services.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping

from django.conf import settings as django_settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from edhms.preferences.api.serializers import PreferencesPatchSerializer, SettingsDocumentSerializer
from edhms.preferences.config import ConsoleSettings, NotificationSettings, SystemSettings
from edhms.preferences.models import ConsolePreferences

logger = logging.getLogger(__name__)

API_KEY_REQUIRED_MSG = "Gemini API key is required"


def settings_filename(now: datetime) -> str:
    return f"edhms-settings-{now.date().isoformat()}.json"


def resolve_api_key(console: ConsoleSettings | None) -> str:
    """User-stored key first, then the deployment key."""
    key = (console.gemini_api_key if console else "") or getattr(django_settings, "GEMINI_API_KEY", "")
    if not key:
        raise ValidationError({"detail": API_KEY_REQUIRED_MSG})
    return key


class PreferenceService:
    @staticmethod
    def load(user) -> ConsoleSettings:
        if user is None or not getattr(user, "is_authenticated", False):
            return ConsoleSettings.defaults()

        row = ConsolePreferences.objects.filter(user_id=user.id).first()
        if row is None:
            return ConsoleSettings.defaults()
        return ConsoleSettings(
            notifications=NotificationSettings.from_dict(row.notifications),
            system=SystemSettings.from_dict(row.system_settings),
            gemini_api_key=row.gemini_api_key,
        )

    @staticmethod
    @transaction.atomic
    def save(user, console: ConsoleSettings) -> ConsoleSettings:
        ConsolePreferences.objects.update_or_create(
            user_id=user.id,
            defaults={
                "notifications": console.notifications.to_dict(),
                "system_settings": console.system.to_dict(),
                "gemini_api_key": console.gemini_api_key,
            },
        )
        return console

    @staticmethod
    def update(user, data: Mapping[str, Any]) -> ConsoleSettings:
        s = PreferencesPatchSerializer(data=data, partial=True)
        s.is_valid(raise_exception=True)

        current = PreferenceService.load(user)
        updated = ConsoleSettings(
            notifications=current.notifications.merged(s.validated_data.get("notifications")),
            system=current.system.merged(s.validated_data.get("systemSettings")),
            gemini_api_key=current.gemini_api_key,
        )
        return PreferenceService.save(user, updated)

    @staticmethod
    def export_document(user, *, now: datetime | None = None) -> dict[str, Any]:
        return PreferenceService.load(user).export_document(now=now or timezone.now())

    @staticmethod
    def import_document(user, document: Any) -> ConsoleSettings:
        if not isinstance(document, Mapping):
            raise ValidationError({"detail": "Settings file must contain a JSON object."})

        s = SettingsDocumentSerializer(data=document)
        s.is_valid(raise_exception=True)

        current = PreferenceService.load(user)
        data = s.validated_data
        updated = ConsoleSettings(
            notifications=(
                NotificationSettings.from_dict(data["notifications"])
                if "notifications" in data else current.notifications
            ),
            system=(
                SystemSettings.from_dict(data["systemSettings"])
                if "systemSettings" in data else current.system
            ),
            gemini_api_key=current.gemini_api_key,
        )
        logger.info("Imported console settings for user %s", user.id)
        return PreferenceService.save(user, updated)

    @staticmethod
    def set_api_key(user, api_key: str) -> ConsoleSettings:
        current = PreferenceService.load(user)
        return PreferenceService.save(
            user,
            ConsoleSettings(notifications=current.notifications, system=current.system, gemini_api_key=api_key),
        )

    @staticmethod
    def clear_api_key(user) -> ConsoleSettings:
        return PreferenceService.set_api_key(user, "")

    @staticmethod
    def reset(user) -> ConsoleSettings:
        ConsolePreferences.objects.filter(user_id=user.id).delete()
        return ConsoleSettings.defaults()
