from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_utc_iso
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_DEDUCT_BREAK
from ..core.enums import AnomalyType, AttendanceSource, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock event or one synthetic absence.

    ``clock_time`` is an aware UTC datetime; ``attendance_date`` its UTC calendar day.
    """

    record_id: int
    employee_id: int
    attendance_date: date
    clock_time: datetime
    status: AttendanceStatus
    source: AttendanceSource
    notes: Optional[str] = None
    is_anomaly: bool = False
    anomaly_type: Optional[AnomalyType] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "attendance_date": self.attendance_date.isoformat(),
            "clock_time": to_utc_iso(self.clock_time),
            "status": self.status.value,
            "source": self.source.value,
            "notes": self.notes,
            "is_anomaly": self.is_anomaly,
            "anomaly_type": self.anomaly_type.value if self.anomaly_type else None,
        }


@dataclass(frozen=True)
class BreakRules:
    default_break_minutes: int = DEFAULT_BREAK_MINUTES
    deduct_break_automatically: bool = DEFAULT_DEDUCT_BREAK

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "BreakRules":
        if not raw:
            return cls()
        data = json.loads(raw)
        return cls(
            default_break_minutes=int(data.get("default_break_minutes") or 0),
            deduct_break_automatically=bool(data.get("deduct_break_automatically", DEFAULT_DEDUCT_BREAK)),
        )


@dataclass(frozen=True)
class ClockOutResult:
    record: AttendanceRecord
    worked_minutes_today: Optional[int]


@dataclass(frozen=True)
class DailyClockingStatus:
    """Read-model for the "my today" panel."""

    employee_id: int
    employee_name: str
    requires_clocking: bool
    day: date
    records: Sequence[AttendanceRecord] = field(default_factory=tuple)
    worked_minutes: Optional[int] = None

    @property
    def last_action(self) -> Optional[AttendanceRecord]:
        return self.records[-1] if self.records else None

    @property
    def can_check_in(self) -> bool:
        last = self.last_action
        return last is None or last.status != AttendanceStatus.CHECK_IN

    @property
    def can_check_out(self) -> bool:
        last = self.last_action
        return last is not None and last.status == AttendanceStatus.CHECK_IN

    @property
    def is_complete(self) -> bool:
        return len(self.records) % 2 == 0

    def to_dict(self) -> dict:
        out = {
            "requires_clocking": self.requires_clocking,
            "employee": {"id": self.employee_id, "name": self.employee_name},
        }
        if not self.requires_clocking:
            return out
        last = self.last_action
        out["today"] = {
            "date": self.day.isoformat(),
            "records": [r.to_dict() for r in self.records],
            "last_action": last.to_dict() if last else None,
            "can_check_in": self.can_check_in,
            "can_check_out": self.can_check_out,
            "worked_minutes": self.worked_minutes,
            "is_complete": self.is_complete,
        }
        return out
