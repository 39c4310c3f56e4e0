from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Optional

from ..core.exceptions import ValidationError

# Naive "YYYY-MM-DDTHH:MM[:SS[.ffffff]]" values are UTC wall-clock readings.
_NAIVE_DATETIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?$"
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current real time, timezone-aware in UTC.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def parse_utc_datetime(value: str) -> datetime:
    """Parse an ISO-like datetime string into an aware UTC datetime.

    A value without offset is read as UTC wall clock, never as server local
    time. Values carrying ``Z`` or ``+HH:MM`` are converted to UTC.
    """

    if value is None or not str(value).strip():
        raise ValidationError("Datetime value is required")

    text = str(value).strip()
    m = _NAIVE_DATETIME_RE.match(text)
    if m:
        year, month, day, hour, minute = (int(m.group(i)) for i in range(1, 6))
        second = int(m.group(6) or 0)
        micro = int((m.group(7) or "0").ljust(6, "0"))
        try:
            return datetime(year, month, day, hour, minute, second, micro, tzinfo=timezone.utc)
        except ValueError as e:
            raise ValidationError(f"Invalid datetime: {text!r}") from e

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid datetime: {value!r}") from e

    if parsed.tzinfo is None:
        # Date-only or other naive forms accepted by fromisoformat.
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_optional_utc_datetime(value: Optional[str]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return parse_utc_datetime(value)


def to_utc_iso(value: Optional[datetime]) -> Optional[str]:
    """Format as ``YYYY-MM-DDTHH:MM:SS+00:00`` (seconds precision)."""

    if value is None:
        return None
    return ensure_utc(value).replace(microsecond=0).isoformat()


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_day(value: datetime) -> date:
    """UTC calendar day of an instant (the convention of ``attendance_date``)."""
    return ensure_utc(value).date()


def to_db_datetime(value: datetime) -> datetime:
    """Naive UTC datetime for DATETIME columns."""
    return ensure_utc(value).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)
