# edhms/patients/models.py
from django.db import models

from edhms.common.models import EntityModel


class BloodType(models.TextChoices):
    A_POS = "A+", "A+"
    A_NEG = "A-", "A-"
    B_POS = "B+", "B+"
    B_NEG = "B-", "B-"
    AB_POS = "AB+", "AB+"
    AB_NEG = "AB-", "AB-"
    O_POS = "O+", "O+"
    O_NEG = "O-", "O-"


class Patient(EntityModel):
    """
    A person seen by the emergency network.

    patient_code is the human-facing business identifier (PAT-<epoch ms>).
    It is unique in storage so intake can upsert on it atomically.
    """
    patient_code = models.CharField(max_length=64, unique=True)

    name = models.CharField(max_length=255)
    age = models.PositiveSmallIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=32, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")
    blood_type = models.CharField(max_length=3, choices=BloodType.choices, blank=True, default="")

    allergies = models.JSONField(default=list, blank=True)
    chronic_conditions = models.JSONField(default=list, blank=True)

    emergency_contact_name = models.CharField(max_length=255, blank=True, default="")
    emergency_contact_phone = models.CharField(max_length=32, blank=True, default="")
    insurance_info = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["name"], name="patient_name_idx"),
            models.Index(fields=["phone"], name="patient_phone_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.patient_code})"
