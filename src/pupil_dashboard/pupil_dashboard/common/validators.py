from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import is_iso_date, parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_iso_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if not is_iso_date(value):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date")


def require_ordered_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("Start date must be before end date")
