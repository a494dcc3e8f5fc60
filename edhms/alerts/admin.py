from django.contrib import admin

from edhms.alerts.models import EmergencyAlert


@admin.register(EmergencyAlert)
class EmergencyAlertAdmin(admin.ModelAdmin):
    list_display = ("title", "hospital", "alert_type", "severity", "status", "created_at", "resolved_at")
    list_filter = ("status", "severity", "alert_type")
    search_fields = ("title", "description")
    ordering = ("-created_at",)
