# edhms/preferences/config.py
"""
ConsoleSettings: the console's user preferences as one immutable value.

Loaded once (PreferenceService.load), handed to whatever needs it, and
replaced wholesale on change. The wire format uses the console's camelCase
keys; attributes are snake_case.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Mapping


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.title() for p in rest)


class _Section:
    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None):
        """Unknown keys are ignored; missing keys take the default."""
        data = data or {}
        kwargs = {f.name: data[_camel(f.name)] for f in fields(cls) if _camel(f.name) in data}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    def merged(self, data: Mapping[str, Any] | None):
        """Copy with only the keys present in data changed."""
        data = data or {}
        return replace(self, **{f.name: data[_camel(f.name)] for f in fields(self) if _camel(f.name) in data})


@dataclass(frozen=True)
class NotificationSettings(_Section):
    emergency_alerts: bool = True
    bed_updates: bool = True
    system_maintenance: bool = False
    weekly_reports: bool = True


@dataclass(frozen=True)
class SystemSettings(_Section):
    auto_refresh: bool = True
    refresh_interval: int = 30  # seconds
    dark_mode: bool = False
    sound_alerts: bool = True


@dataclass(frozen=True)
class ConsoleSettings:
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    system: SystemSettings = field(default_factory=SystemSettings)
    gemini_api_key: str = ""

    @classmethod
    def defaults(cls) -> "ConsoleSettings":
        return cls()

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    def export_document(self, *, now: datetime) -> dict[str, Any]:
        return {
            "notifications": self.notifications.to_dict(),
            "systemSettings": self.system.to_dict(),
            "exportDate": now.isoformat(),
        }
