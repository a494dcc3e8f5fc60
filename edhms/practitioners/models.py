# edhms/practitioners/models.py
from django.conf import settings
from django.db import models

from edhms.common.models import EntityModel


class AvailabilityStatus(models.TextChoices):
    AVAILABLE = "available", "Available"
    BUSY = "busy", "Busy"
    ON_CALL = "on_call", "On call"
    OFF_DUTY = "off_duty", "Off duty"


class Practitioner(EntityModel):
    """Clinician attached to a hospital; optionally linked to a console login."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="practitioner_profiles",
    )
    hospital = models.ForeignKey("hospitals.Hospital", on_delete=models.PROTECT, related_name="practitioners")
    department = models.ForeignKey(
        "hospitals.Department",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="practitioners",
    )

    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    specialization = models.CharField(max_length=128, blank=True, default="")
    license_number = models.CharField(max_length=64, blank=True, default="")
    experience_years = models.PositiveSmallIntegerField(default=0)
    availability_status = models.CharField(
        max_length=16,
        choices=AvailabilityStatus.choices,
        default=AvailabilityStatus.AVAILABLE,
        db_index=True,
    )

    class Meta:
        db_table = "practitioners_practitioner"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
