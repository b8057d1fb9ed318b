from __future__ import annotations

import math

from bsm.domain.errors import ValidationError


def parse_int(value: object) -> int:
    """Form input to int; anything unparseable becomes 0."""
    if isinstance(value, bool):
        return 0
    try:
        if isinstance(value, (int, float)):
            return int(value)
        return int(float(str(value or "").strip()))
    except (ValueError, OverflowError):
        return 0


def parse_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        try:
            parsed = float(str(value or "").strip())
        except ValueError:
            return 0.0
    # inf and nan cannot be stored as JSON numbers
    return parsed if math.isfinite(parsed) else 0.0


def require_text(value: object, field: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required.")
    return text


def require_positive(value: float, field: str) -> None:
    if not (value > 0 and math.isfinite(value)):
        raise ValidationError(f"{field} must be > 0.")
