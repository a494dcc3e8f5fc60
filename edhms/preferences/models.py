# edhms/preferences/models.py
from django.conf import settings
from django.db import models

from edhms.common.models import TimeStampedModel


class ConsolePreferences(TimeStampedModel):
    """
    Persisted form of ConsoleSettings, one row per console user.
    A user without a row runs on defaults.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="console_preferences",
    )
    notifications = models.JSONField(default=dict, blank=True)
    system_settings = models.JSONField(default=dict, blank=True)

    # Secondary copy of the AI key; never included in exports.
    gemini_api_key = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "preferences_console_preferences"

    def __str__(self) -> str:
        return f"Preferences<{self.user_id}>"
