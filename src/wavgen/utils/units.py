"""
Unit helpers — duration strings, value clamping, rounding.
"""

import math
from typing import TypeVar

from wavgen.errors import InvalidParameterError

T = TypeVar("T", int, float)

# Longest suffixes first so "msec" is not read as "sec" and "hours" not as "s".
_DURATION_SUFFIXES: list[tuple[str, float]] = [
    ("hours", 3600.0),
    ("hour", 3600.0),
    ("msec", 0.001),
    ("min", 60.0),
    ("sec", 1.0),
    ("h", 3600.0),
    ("m", 0.001),     # milliseconds, not minutes
    ("s", 1.0),
]


def parse_duration(text: str) -> float:
    """
    Parse a duration string into seconds.

    Accepts a bare number ("2.5") or a number with a unit suffix:
    m / msec (milliseconds), s / sec, min, h / hour / hours.

    Raises:
        InvalidParameterError: If the string cannot be parsed.
    """
    cleaned = text.strip()
    try:
        return float(cleaned)
    except ValueError:
        pass

    lowered = cleaned.lower()
    for suffix, scale in _DURATION_SUFFIXES:
        if lowered.endswith(suffix):
            number = lowered[: -len(suffix)]
            try:
                return float(number) * scale
            except ValueError:
                continue

    raise InvalidParameterError(f"cannot parse duration [{text}]")


def clamp(value: T, lo: T, hi: T) -> T:
    """Clamp value into [lo, hi]."""
    if lo > hi:
        raise InvalidParameterError(f"invalid clamp range [{lo}, {hi}]")
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from -inf."""
    return int(math.floor(x + 0.5))
