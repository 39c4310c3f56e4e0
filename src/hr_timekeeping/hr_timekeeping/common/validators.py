from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_bool(value: Any, field_name: str) -> bool:
    """JSON booleans only (the string "false" is rejected)."""
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value
