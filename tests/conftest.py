from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from src.hr_timekeeping.hr_timekeeping.settings.model import Setting


class ManualClock:
    """Stands in for the real wall clock; tests move it forward explicitly."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class InMemorySettings:
    def __init__(self):
        self.values: dict[str, str] = {}
        self.writes = 0
        self.fail_reads = False
        self.fail_writes = False

    def get(self, setting_key: str) -> Optional[Setting]:
        if self.fail_reads:
            raise ConnectionError("settings store unavailable")
        value = self.values.get(setting_key)
        if value is None:
            return None
        return Setting(setting_key=setting_key, setting_value=value)

    def upsert(self, setting_key: str, setting_value: str, *, description: Optional[str] = None) -> None:
        if self.fail_writes:
            raise ConnectionError("settings store unavailable")
        self.values[setting_key] = setting_value
        self.writes += 1


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 17, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def real_clock(fixed_now) -> ManualClock:
    return ManualClock(fixed_now)


@pytest.fixture
def settings_repo() -> InMemorySettings:
    return InMemorySettings()
