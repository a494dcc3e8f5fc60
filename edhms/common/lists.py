# edhms/common/lists.py
"""
Helpers for the free-text list columns (specialties, equipment, symptoms,
allergies, chronic conditions).
"""
from __future__ import annotations

from typing import Iterable


def split_comma_list(raw: str | Iterable[str] | None) -> list[str]:
    """
    "a, b,,c " -> ["a", "b", "c"].

    Lists are accepted as well and get the same trim/drop-empty treatment.
    Order is kept; duplicates are not removed.
    """
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    return [str(p).strip() for p in parts if str(p).strip()]


class ListEntryError(ValueError):
    pass


def add_entry(entries: Iterable[str], value: str) -> list[str]:
    """
    Append a trimmed value. Empty and already-present values are rejected,
    so the resulting list never holds duplicates it did not already have.
    """
    current = list(entries or [])
    candidate = (value or "").strip()
    if not candidate:
        raise ListEntryError("Value cannot be empty.")
    if candidate in current:
        raise ListEntryError(f"'{candidate}' is already in the list.")
    return current + [candidate]


def unique_list(raw: str | Iterable[str] | None) -> list[str]:
    """split_comma_list, then drop repeats keeping the first occurrence."""
    return list(dict.fromkeys(split_comma_list(raw)))


def remove_entry(entries: Iterable[str], value: str) -> list[str]:
    """Remove every occurrence of the trimmed value; absent values leave the list unchanged."""
    candidate = (value or "").strip()
    return [e for e in (entries or []) if e != candidate]
