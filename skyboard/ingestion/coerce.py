"""Value coercion helpers shared by the response normalizers."""

import math
from typing import Any


def is_number(value: Any) -> bool:
    """True for real int/float values (bool excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def safe_number(value: Any, fallback: float = 0) -> float:
    """
    Coerce an upstream value to a finite float.

    None, booleans, unparsable strings, NaN and infinities all become
    `fallback`. Numeric strings are accepted.
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


def truncate(value: str, max_length: int) -> str:
    return value[:max_length]


def wrap_degrees(value: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = value % 360.0
    # Tiny negative inputs round up to exactly 360.0
    return 0.0 if wrapped >= 360.0 else wrapped
