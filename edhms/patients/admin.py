# edhms/patients/admin.py
from django.contrib import admin

from edhms.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("name", "patient_code", "age", "gender", "phone", "blood_type", "created_at")
    search_fields = ("name", "patient_code", "phone", "email")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
