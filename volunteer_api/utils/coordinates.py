"""Coordinate storage helpers.

Latitude/longitude are accepted as numbers, persisted as decimal text and
parsed back on read.
"""

import math
from decimal import Decimal, InvalidOperation


def format_coordinate(value: float | int | str | None) -> str | None:
    """Render a coordinate as decimal text for storage."""
    if value is None:
        return None
    try:
        decimal_value = Decimal(str(value))
    except InvalidOperation:
        return None
    if not decimal_value.is_finite():
        return None
    return format(decimal_value.normalize(), "f")


def parse_coordinate(value: str | float | int | None) -> float | None:
    """Parse stored decimal text back to a float; None when unparsable."""
    if value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed
