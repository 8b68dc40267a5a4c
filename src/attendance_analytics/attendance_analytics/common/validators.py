from __future__ import annotations

import math
from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_range(
    value: float,
    field_name: str,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ValidationError(f"{field_name} must be a number")
    if min_value is not None and value < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}")
    if max_value is not None and value > max_value:
        raise ValidationError(f"{field_name} must be <= {max_value}")
    return value


def require_positive(value: float, field_name: str) -> float:
    require_range(value, field_name)
    if value <= 0:
        raise ValidationError(f"{field_name} must be > 0")
    return value


def require_date_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError(f"start date {start} is after end date {end}")
