# edhms/conftest.py
import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from edhms.alerts.models import EmergencyAlert
from edhms.hospitals.models import Hospital
from edhms.patients.models import Patient
from edhms.practitioners.models import Practitioner

API = "/api/v1"


@pytest.fixture
def make_user(db):
    """
    make_user("nurse1", "NURSE") -> user in that role group.
    role=None leaves the user without groups (READONLY).
    """
    User = get_user_model()

    def _make(username: str, role: str | None = None):
        u = User.objects.create_user(username=username, password="testpass", is_active=True)
        if role:
            group, _ = Group.objects.get_or_create(name=role)
            u.groups.add(group)
        return u

    return _make


@pytest.fixture
def client_for():
    def _client(user):
        c = APIClient()
        c.force_authenticate(user=user)
        return c

    return _client


@pytest.fixture
def user(make_user):
    return make_user("testuser", "ADMIN")


@pytest.fixture
def api_client(user, client_for):
    return client_for(user)


@pytest.fixture
def readonly_client(make_user, client_for):
    return client_for(make_user("viewer"))


@pytest.fixture
def nurse_client(make_user, client_for):
    return client_for(make_user("nurse", "NURSE"))


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(
        name="City General",
        address="1 Main Street",
        phone="555-0100",
        emergency_contact="555-0199",
        bed_capacity=100,
        available_beds=40,
        specialties=["Cardiology", "Trauma"],
    )


@pytest.fixture
def other_hospital(db):
    return Hospital.objects.create(
        name="Riverside Clinic",
        address="22 River Road",
        phone="555-0200",
        emergency_contact="555-0299",
        bed_capacity=20,
        available_beds=1,
    )


@pytest.fixture
def patient(db):
    return Patient.objects.create(patient_code="PAT-1000", name="Jane Doe", age=42, phone="555-1234")


@pytest.fixture
def practitioner(hospital):
    return Practitioner.objects.create(hospital=hospital, name="Dr. Grey", specialization="Emergency Medicine")


@pytest.fixture
def alert(hospital, patient):
    return EmergencyAlert.objects.create(
        hospital=hospital,
        patient=patient,
        alert_type="patient_emergency",
        severity="high",
        title="Cardiac arrest in ER",
        description="Code blue, bay 3",
    )
