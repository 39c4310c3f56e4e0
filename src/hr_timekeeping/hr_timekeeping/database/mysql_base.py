from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from ..core.exceptions import DetectionLockedError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        # Buffered so several statements can share one cursor.
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def advisory_lock(cur, name: str, *, timeout_seconds: int = 0) -> Iterator[None]:
    """Hold a MySQL named lock (GET_LOCK) for the duration of the block."""

    cur.execute("SELECT GET_LOCK(%s, %s) AS acquired", (name, int(timeout_seconds)))
    row = fetchone(cur)
    if not row or row.get("acquired") != 1:
        raise DetectionLockedError(f"Lock {name!r} is held by another session")
    try:
        yield
    finally:
        cur.execute("SELECT RELEASE_LOCK(%s) AS released", (name,))
        fetchone(cur)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_json_list(value: Any) -> List[Any]:
    """Normalize MySQL JSON column values across connector implementations.

    mysql-connector can return JSON as:
    - str (pure Python implementation)
    - bytes / bytearray (C extension)
    - an already decoded list
    """

    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if not isinstance(value, list):
        raise TypeError(f"Unsupported JSON list value type: {type(value)!r}")
    return value
