from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Setting
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, setting_key: str) -> Optional[Setting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT setting_key, setting_value, description, updated_at
                FROM hr_settings
                WHERE setting_key=%s
                """,
                (setting_key,),
            )
            r = fetchone(cur)
            if not r:
                return None
            value = r["setting_value"]
            if isinstance(value, (bytes, bytearray)):
                value = value.decode("utf-8")
            return Setting(
                setting_key=r["setting_key"],
                setting_value=value,
                description=r.get("description"),
                updated_at=r.get("updated_at"),
            )

    def upsert(self, setting_key: str, setting_value: str, *, description: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO hr_settings(setting_key, setting_value, description, updated_at)
                VALUES(%s,%s,%s,UTC_TIMESTAMP())
                ON DUPLICATE KEY UPDATE
                    setting_value=VALUES(setting_value),
                    description=COALESCE(VALUES(description), description),
                    updated_at=UTC_TIMESTAMP()
                """,
                (setting_key, setting_value, description),
            )
