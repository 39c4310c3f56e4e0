from __future__ import annotations

from typing import Optional, Protocol

from .model import Setting


class SettingsRepository(Protocol):
    def get(self, setting_key: str) -> Optional[Setting]:
        raise NotImplementedError

    def upsert(self, setting_key: str, setting_value: str, *, description: Optional[str] = None) -> None:
        """Create or replace a setting in a single statement."""

        raise NotImplementedError
