import pytest
from django.contrib.auth.models import Group
from django.core.management import call_command

from edhms.common.permissions import ROLE_ADMIN, ROLE_READONLY, user_roles

pytestmark = pytest.mark.django_db


def test_ensure_roles_is_idempotent():
    call_command("ensure_roles")
    call_command("ensure_roles")
    assert set(Group.objects.values_list("name", flat=True)) >= {"ADMIN", "DOCTOR", "NURSE", "RECEPTION", "READONLY"}


def test_user_without_groups_is_readonly(make_user):
    assert user_roles(make_user("plain")) == {ROLE_READONLY}


def test_superuser_is_admin(django_user_model):
    su = django_user_model.objects.create_superuser(username="root", password="x", email="r@example.com")
    assert user_roles(su) == {ROLE_ADMIN}


def test_readonly_cannot_create_hospital(readonly_client):
    r = readonly_client.post("/api/v1/hospitals/", {"name": "X"}, format="json")
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "permission_denied"
