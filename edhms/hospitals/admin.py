# edhms/hospitals/admin.py
from django.contrib import admin

from edhms.hospitals.models import Department, Hospital


class DepartmentInline(admin.TabularInline):
    model = Department
    extra = 0
    fields = ("name", "head_doctor", "bed_count", "available_beds", "status")


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ("name", "status", "bed_capacity", "available_beds", "phone", "updated_at")
    list_filter = ("status",)
    search_fields = ("name", "address")
    readonly_fields = ("created_at", "updated_at")
    inlines = [DepartmentInline]
