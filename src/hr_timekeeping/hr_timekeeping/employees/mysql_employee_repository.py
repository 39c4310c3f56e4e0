from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmploymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

EMPLOYEE_COLUMNS = """
    employee_id, employee_number, first_name, last_name, profile_id,
    department_id, segment_id, centre_id, employment_status, requires_clocking
"""


def row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_number=r["employee_number"],
        first_name=r["first_name"],
        last_name=r.get("last_name") or "",
        profile_id=r.get("profile_id"),
        department_id=r.get("department_id"),
        segment_id=r.get("segment_id"),
        centre_id=r.get("centre_id"),
        employment_status=EmploymentStatus(r["employment_status"]),
        requires_clocking=bool(r.get("requires_clocking")),
    )


def select_active_requiring_clocking(cur) -> Sequence[Employee]:
    cur.execute(
        f"""
        SELECT {EMPLOYEE_COLUMNS}
        FROM hr_employees
        WHERE employment_status=%s AND requires_clocking=1
        ORDER BY employee_id ASC
        """,
        (EmploymentStatus.ACTIVE.value,),
    )
    return [row_to_employee(r) for r in fetchall(cur)]


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_profile_id(self, profile_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {EMPLOYEE_COLUMNS} FROM hr_employees WHERE profile_id=%s",
                (int(profile_id),),
            )
            r = fetchone(cur)
            return row_to_employee(r) if r else None

