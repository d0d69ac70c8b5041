import math
from typing import Any


def to_quantity(value: Any) -> float:
    """Coerce form input to a non-negative finite number; anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "").lstrip("$")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number <= 0:
        return 0.0
    return number


def to_count(value: Any) -> int:
    return int(math.floor(to_quantity(value)))


def safe_divide(numerator: float, denominator: float) -> float:
    if not denominator or not math.isfinite(denominator):
        return 0.0
    result = numerator / denominator
    return result if math.isfinite(result) else 0.0


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for positives, matching the quoting sheets.

    Python's round() uses banker's rounding which would turn 2.5 visits into 2.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_money(value: float) -> float:
    return round_half_up(value + 1e-9, 2) if value >= 0 else -round_half_up(-value + 1e-9, 2)
