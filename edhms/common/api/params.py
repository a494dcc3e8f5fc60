# edhms/common/api/params.py
from __future__ import annotations

from uuid import UUID

from rest_framework.exceptions import NotFound, ValidationError

TRUTHY = {"1", "true", "yes", "y", "on"}


def path_uuid(value, *, what: str = "Record") -> UUID:
    """Path ids that are not UUIDs can never match a row: 404, not 500."""
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise NotFound(f"{what} not found.")


def query_uuid(request, name: str) -> UUID | None:
    raw = request.query_params.get(name)
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        raise ValidationError({name: "Invalid UUID."})


def query_flag(request, name: str) -> bool:
    return (request.query_params.get(name) or "").strip().lower() in TRUTHY


def query_limit(request, *, default: int, maximum: int) -> int:
    raw = request.query_params.get("limit")
    try:
        n = int(raw) if raw else default
    except ValueError:
        n = default
    return max(1, min(n, maximum))
