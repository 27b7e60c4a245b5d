"""Value formatters for report cells."""

import math
from typing import Union

Number = Union[int, float]

MEMORY_UNITS = ["B", "KB", "MB", "GB"]


def js_round(value: Number) -> int:
    """Round half up (2.5 -> 3, -2.5 -> -2), unlike Python's round()."""
    return math.floor(value + 0.5)


def number_to_string(value: Number) -> str:
    """Decimal string of a number, without a trailing '.0' on integral floats."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def get_unit_from_memory(size: Number) -> str:
    """Scale a byte count to the largest unit keeping it at most 1000.

    The scaled value is truncated, not rounded: 1500 -> "≈1KB".
    """
    unit_id = 0
    while size > 1000 and unit_id < len(MEMORY_UNITS) - 1:
        size /= 1000
        unit_id += 1

    return f"≈{math.floor(size)}{MEMORY_UNITS[unit_id]}"


def format_time(time_ms: Number) -> str:
    """Milliseconds as "≈42ms", or "N/A" for negative measurements."""
    if time_ms < 0:
        return "N/A"

    return f"≈{number_to_string(time_ms)}ms"


def format_thousands(count: Number) -> str:
    """Compact count with one decimal in thousands: 12345 -> "12.3k"."""
    tenths = js_round(count / 100)
    if tenths % 10 == 0:
        return f"{tenths // 10}k"
    return f"{tenths / 10}k"
