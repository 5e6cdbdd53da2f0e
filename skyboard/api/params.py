"""
Lenient query-parameter parsing.

The domain endpoints never answer with a 4xx, so unparsable values fall back
to their defaults instead of raising.
"""

import math

from flask import request


def int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        # Accept '70.0' the way a float-then-truncate client would send it
        number = float_arg(name, float('nan'))
        return int(number) if math.isfinite(number) else default


def float_arg(name: str, default: float) -> float:
    value = request.args.get(name)
    if value is None:
        return default
    try:
        number = float(value)
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def flag_arg(name: str) -> bool:
    """True only for the literal string 'true'."""
    return request.args.get(name, 'false').lower() == 'true'
