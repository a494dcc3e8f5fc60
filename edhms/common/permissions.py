# edhms/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import BasePermission, SAFE_METHODS

# Group/role names (Django auth Group names)
ROLE_ADMIN = "ADMIN"
ROLE_DOCTOR = "DOCTOR"
ROLE_NURSE = "NURSE"
ROLE_RECEPTION = "RECEPTION"
ROLE_READONLY = "READONLY"

ALL_ROLES = {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE, ROLE_RECEPTION, ROLE_READONLY}
CLINICAL_ROLES = {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE}


def user_roles(user) -> Set[str]:
    """
    Resolve roles from Django groups.

    - Superuser is treated as ADMIN.
    - Authenticated users without any group are READONLY.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(ROLE_ADMIN)
        return roles

    if hasattr(user, "groups"):
        roles.update(user.groups.values_list("name", flat=True))

    if not roles:
        roles.add(ROLE_READONLY)

    return roles


class BaseRolePermission(BasePermission):
    """
    Role-based access control keyed by ViewSet action.

    - ADMIN bypass.
    - Uses allowed_roles_per_action for strict RBAC.
    - If the action is unknown and the request is SAFE, fall back to
      list/retrieve instead of denying.
    """
    message = "You do not have permission to perform this action."

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        roles = user_roles(user)

        if ROLE_ADMIN in roles:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            is_detail = "pk" in kwargs or "id" in kwargs
            read_action = "retrieve" if is_detail else "list"
            allowed = self.allowed_roles_per_action.get(read_action)

        if allowed is not None:
            return bool(roles & allowed)

        # Unknown action => deny
        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class HospitalPermission(BaseRolePermission):
    """Hospitals and departments: everyone reads, ADMIN writes."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "departments": ALL_ROLES,
        "create_department": {ROLE_ADMIN},
        "update_department": {ROLE_ADMIN},
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }


class PractitionerPermission(BaseRolePermission):
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": {ROLE_ADMIN},
        "partial_update": CLINICAL_ROLES,
        "destroy": set(),
    }


class PatientPermission(BaseRolePermission):
    """Permissions for patient intake and history"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "records": ALL_ROLES,
        "create": CLINICAL_ROLES | {ROLE_RECEPTION},
        "update": CLINICAL_ROLES,
        "partial_update": CLINICAL_ROLES,
        "allergies": CLINICAL_ROLES,
        "conditions": CLINICAL_ROLES,
        "destroy": set(),
    }


class MedicalRecordPermission(BaseRolePermission):
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": CLINICAL_ROLES,
        "update": CLINICAL_ROLES,
        "partial_update": CLINICAL_ROLES,
        "destroy": set(),
    }


class AlertPermission(BaseRolePermission):
    """Permissions for emergency alerts"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "changes": ALL_ROLES,
        "create": CLINICAL_ROLES | {ROLE_RECEPTION},
        "update": CLINICAL_ROLES,
        "partial_update": CLINICAL_ROLES,
        "acknowledge": CLINICAL_ROLES,
        "resolve": CLINICAL_ROLES,
        "destroy": set(),
    }


class AnalyticsPermission(BaseRolePermission):
    """Read-only metrics and the dashboard."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "export": CLINICAL_ROLES,
    }


class InsightPermission(BaseRolePermission):
    """AI advisory calls: clinical staff only."""
    allowed_roles_per_action = {
        "patient": CLINICAL_ROLES,
        "bed_availability": CLINICAL_ROLES,
        "alert": CLINICAL_ROLES,
    }


class AuditPermission(BaseRolePermission):
    """Permissions for Audit log access"""
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN},
        "retrieve": {ROLE_ADMIN},
    }
