from django.contrib import admin

from edhms.preferences.models import ConsolePreferences


@admin.register(ConsolePreferences)
class ConsolePreferencesAdmin(admin.ModelAdmin):
    list_display = ("user", "updated_at")
    exclude = ("gemini_api_key",)
