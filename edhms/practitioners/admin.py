from django.contrib import admin

from edhms.practitioners.models import Practitioner


@admin.register(Practitioner)
class PractitionerAdmin(admin.ModelAdmin):
    list_display = ("name", "hospital", "specialization", "availability_status")
    list_filter = ("availability_status", "hospital")
    search_fields = ("name", "license_number", "email")
