from django.contrib import admin

from edhms.records.models import MedicalRecord


@admin.register(MedicalRecord)
class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ("patient", "hospital", "visit_type", "severity_level", "status", "visit_date")
    list_filter = ("visit_type", "severity_level", "status")
    search_fields = ("diagnosis", "patient__name", "patient__patient_code")
    ordering = ("-visit_date",)
