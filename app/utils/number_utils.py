# app/utils/number_utils.py
import math


def _to_float(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_non_negative_int(value) -> int:
    """Coerce loose input to a floored integer >= 0 ("3.9" -> 3, "-3" -> 0, "x" -> 0)."""
    return max(0, math.floor(_to_float(value)))


def to_non_negative_float(value) -> float:
    return max(0.0, _to_float(value))


def optional_non_negative_int(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_non_negative_int(value)
