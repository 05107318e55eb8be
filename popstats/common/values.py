"""Lenient coercion of raw record values.

Records may carry values that were never typed (e.g. straight from a CSV
row) or that failed to parse. These helpers never raise: anything that is
not a usable value comes back as None.
"""

import math
import numbers
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

TRUE_VALUES = ["yes", "true", "y", "1"]
FALSE_VALUES = ["no", "false", "n", "0"]


def as_number(value: Any) -> float | None:
    """Return value as a finite float, or None when missing or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real | Decimal):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def as_flag(value: Any) -> bool | None:
    """Return value as a boolean flag, or None when it is not a recognizable flag."""
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Integral) and value in (0, 1):
        return value == 1
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    return None


def as_text(value: Any) -> str | None:
    """Return a trimmed, non-empty string, or None."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def round_half_away(value: float | Decimal, decimals: int) -> float:
    """Round to a fixed number of decimals, halves away from zero (2.25 -> 2.3)."""
    if not isinstance(value, Decimal):
        # repr keeps the shortest decimal form of the float
        value = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-decimals)
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))
