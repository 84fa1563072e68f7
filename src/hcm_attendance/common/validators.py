from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_int(value: Any, field_name: str, *, minimum: Optional[int] = None) -> int:
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    if minimum is not None and result < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    return result


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(result):
        raise ValidationError(f"{field_name} must be finite")
    if not -limit <= result <= limit:
        raise ValidationError(f"{field_name} must be between {-limit:g} and {limit:g}")
    return result


def require_latitude(value: Any) -> float:
    return require_coordinate(value, "latitude", limit=90)


def require_longitude(value: Any) -> float:
    return require_coordinate(value, "longitude", limit=180)


def require_money(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be finite")
    if result < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return result
