from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_non_negative_int(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError(f"Period end {end.isoformat()} is before start {start.isoformat()}")
