from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmploymentStatus


@dataclass(frozen=True)
class Employee:
    """HR employee, linked to a login account through ``profile_id``."""

    employee_id: int
    employee_number: str
    first_name: str
    last_name: str
    profile_id: Optional[int] = None
    department_id: Optional[int] = None
    segment_id: Optional[int] = None
    centre_id: Optional[int] = None
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    requires_clocking: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
