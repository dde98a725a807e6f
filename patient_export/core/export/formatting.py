"""
Cell value rendering shared by all projectors.

Missing values always render as "" so every row keeps its column count.
"""
import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

Number = Union[int, float]


def format_datetime(value: datetime) -> str:
    """Render an instant as UTC ISO 8601 with millisecond precision.

    Naive datetimes are taken to already be UTC.

    Example: 2025-01-05T21:41:30.000Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_optional_datetime(value: Optional[datetime]) -> str:
    return format_datetime(value) if value is not None else ""


def format_number(value: Number) -> str:
    """Shortest round-tripping decimal, in JavaScript Number notation.

    Plain notation for magnitudes in [1e-6, 1e21), exponent form otherwise:
    120.0 -> "120", 1e21 -> "1e+21", 1e-7 -> "1e-7".
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    prefix = "-" if sign else ""
    # Decimal point position: value == 0.{digits} * 10**point
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        return prefix + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return f"{prefix}{digits[:point]}.{digits[point:]}"
    if -6 < point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"

    mantissa = digits[0] if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{prefix}{mantissa}e{'+' if point - 1 >= 0 else '-'}{abs(point - 1)}"


def format_optional_number(value: Optional[Number]) -> str:
    return format_number(value) if value is not None else ""


def format_optional_text(value: Optional[str]) -> str:
    return value if value is not None else ""
