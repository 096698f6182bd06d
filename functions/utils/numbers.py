"""Numeric coercion helpers shared by the scoring and pricing code."""

import math
from typing import Any, Optional


def finite_number(value: Any) -> Optional[float]:
    """Return value as a float if it is a finite int/float, else None.

    Booleans are rejected even though they subclass int.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def coerce_number(value: Any) -> Optional[float]:
    """Like finite_number, but also accepts numeric strings (e.g. "9460.00").

    Used for rows coming from storage, where numerics may be serialized as
    text.
    """
    if isinstance(value, str):
        try:
            value = float(value.replace(",", "").strip())
        except ValueError:
            return None
    return finite_number(value)


def safe_num(value: Any, fallback: float) -> float:
    """Return a finite number or the fallback."""
    n = finite_number(value)
    return fallback if n is None else n


def clamp(n: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, n))


def clamp01(n: float) -> float:
    return clamp(n, 0.0, 1.0)


def clamp_int(n: float, low: int, high: int) -> int:
    """Round half up and clamp into [low, high]."""
    return int(max(low, min(high, round_half_up(n))))


def round_half_up(n: float, digits: int = 0) -> float:
    """Round with ties away from zero for positives.

    Python's round() uses banker's rounding; scores and money amounts here
    round .5 upward.
    """
    factor = 10 ** digits
    return math.floor(n * factor + 0.5) / factor


def format_number(n: float) -> str:
    """Compact number text for evidence strings (22 not 22.0)."""
    if float(n).is_integer():
        return str(int(n))
    return str(round(n, 4))
