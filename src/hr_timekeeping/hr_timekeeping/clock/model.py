from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from ..common.datetime_utils import parse_optional_utc_datetime, to_utc_iso
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ClockConfiguration:
    """Persisted state of the virtual system clock.

    ``custom_datetime`` is the simulated instant chosen by the operator and
    ``server_ref_datetime`` the real instant captured by the same write. Both are
    aware UTC datetimes, both set or both ``None``.
    """

    enabled: bool = False
    custom_datetime: Optional[datetime] = None
    server_ref_datetime: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[Any] = None

    @property
    def is_complete(self) -> bool:
        return self.custom_datetime is not None and self.server_ref_datetime is not None

    @property
    def is_active(self) -> bool:
        return self.enabled and self.is_complete

    @property
    def offset(self) -> timedelta:
        if not self.is_active:
            return timedelta(0)
        return self.custom_datetime - self.server_ref_datetime

    def to_json(self) -> str:
        return json.dumps(
            {
                "enabled": self.enabled,
                "custom_datetime": _iso_precise(self.custom_datetime),
                "server_ref_datetime": _iso_precise(self.server_ref_datetime),
                "updated_at": _iso_precise(self.updated_at),
                "updated_by": self.updated_by,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "ClockConfiguration":
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("system clock setting is not a JSON object")
            return cls(
                enabled=bool(data.get("enabled", False)),
                custom_datetime=parse_optional_utc_datetime(data.get("custom_datetime")),
                server_ref_datetime=parse_optional_utc_datetime(data.get("server_ref_datetime")),
                updated_at=parse_optional_utc_datetime(data.get("updated_at")),
                updated_by=data.get("updated_by"),
            )
        except ValidationError as e:
            raise ValueError(f"Corrupted system clock setting: {e}") from e


@dataclass(frozen=True)
class ClockConfigurationView:
    """Configuration plus the live values shown to operators."""

    configuration: ClockConfiguration
    current_server_time: datetime
    current_system_time: Optional[datetime] = None
    offset_minutes: Optional[int] = None

    def to_dict(self) -> dict:
        c = self.configuration
        out = {
            "enabled": c.enabled,
            "customDatetime": to_utc_iso(c.custom_datetime),
            "serverRefDatetime": to_utc_iso(c.server_ref_datetime),
            "currentServerTime": to_utc_iso(self.current_server_time),
            "updatedAt": to_utc_iso(c.updated_at),
            "updatedBy": c.updated_by,
        }
        if self.current_system_time is not None:
            out["currentSystemTime"] = to_utc_iso(self.current_system_time)
            out["offsetMinutes"] = self.offset_minutes
        return out


def _iso_precise(value: Optional[datetime]) -> Optional[str]:
    # Microseconds are kept in storage so the offset round-trips exactly.
    return value.isoformat() if value is not None else None
