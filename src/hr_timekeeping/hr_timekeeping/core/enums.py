from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for coarse access checks."""

    ADMIN = "admin"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Status of one attendance row (a clock event or a synthetic absence)."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    ABSENT = "absent"


class AttendanceSource(str, Enum):
    DEVICE = "device"
    SELF_SERVICE = "self_service"
    SYSTEM = "system"
    MANUAL = "manual"


class AnomalyType(str, Enum):
    MISSING_RECORD = "missing_record"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"
