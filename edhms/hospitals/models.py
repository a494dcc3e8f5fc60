# edhms/hospitals/models.py
from __future__ import annotations

from django.db import models

from edhms.common.models import EntityModel, OperationalStatus


class Hospital(EntityModel):
    """
    A receiving facility. Bed counts are maintained by hand from the console;
    available_beds <= bed_capacity is assumed, not enforced.
    """
    name = models.CharField(max_length=255)
    address = models.TextField()
    phone = models.CharField(max_length=32)
    email = models.EmailField(blank=True, default="")
    emergency_contact = models.CharField(max_length=32)

    bed_capacity = models.PositiveIntegerField(default=0)
    available_beds = models.PositiveIntegerField(default=0)

    specialties = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=16,
        choices=OperationalStatus.choices,
        default=OperationalStatus.ACTIVE,
        db_index=True,
    )

    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    class Meta:
        db_table = "hospitals_hospital"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="hospital_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Department(EntityModel):
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name="departments")

    name = models.CharField(max_length=255)
    head_doctor = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")

    bed_count = models.PositiveIntegerField(default=0)
    available_beds = models.PositiveIntegerField(default=0)
    equipment = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=16,
        choices=OperationalStatus.choices,
        default=OperationalStatus.ACTIVE,
    )

    class Meta:
        db_table = "hospitals_department"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.hospital_id})"
