"""Pricing classifier for QuoteShield.

Places a quote's effective unit price against a benchmark low/mid/high:

    p < low            Below Market Range (Potential Good Deal)       0.75
    low <= p <= mid    Within Expected Range                          0.85
    mid < p <= high    Above Market Range (Review Recommended)        0.80
    p > high           Significantly Above Market (Investigation ...) 0.80

Any missing input yields the neutral label with confidence 0, which means
"no data", not "within range".
"""

from typing import Any, Optional

from models.pricing import PricingClassification, PricingPosition
from utils.numbers import finite_number, round_half_up

CONFIDENCE_BELOW = 0.75
CONFIDENCE_WITHIN = 0.85
CONFIDENCE_ABOVE = 0.8
CONFIDENCE_SIGNIFICANTLY_ABOVE = 0.8


def resolve_mid(low: Any, mid: Any, high: Any) -> Optional[float]:
    """Benchmark mid, or the midpoint of low/high when mid is absent."""
    m = finite_number(mid)
    if m is not None:
        return m
    lo = finite_number(low)
    hi = finite_number(high)
    if lo is not None and hi is not None:
        return (lo + hi) / 2
    return None


def classify_pricing(
    effective_unit_price: Any,
    low: Any,
    mid: Any,
    high: Any,
    job_units: Any = None
) -> PricingClassification:
    """Classify an effective unit price against a market range.

    Args:
        effective_unit_price: Quote price per unit.
        low: Benchmark low.
        mid: Benchmark mid (derived from low/high when missing).
        high: Benchmark high.
        job_units: Job quantity used to size the overage estimates.

    Returns:
        PricingClassification.
    """
    p = finite_number(effective_unit_price)
    lo = finite_number(low)
    hi = finite_number(high)
    m = resolve_mid(low, mid, high)

    if p is None or lo is None or hi is None or m is None or m == 0:
        return PricingClassification()

    delta_vs_mid = (p - m) / m
    units = finite_number(job_units)
    units = units if units is not None and units > 0 else 0.0
    overage_mid = max(0.0, (p - m) * units)
    overage_high = max(0.0, (p - hi) * units)

    if p < lo:
        position = PricingPosition.BELOW_MARKET
        confidence = CONFIDENCE_BELOW
    elif p <= m:
        position = PricingPosition.WITHIN_RANGE
        confidence = CONFIDENCE_WITHIN
    elif p <= hi:
        position = PricingPosition.ABOVE_MARKET
        confidence = CONFIDENCE_ABOVE
    else:
        position = PricingPosition.SIGNIFICANTLY_ABOVE
        confidence = CONFIDENCE_SIGNIFICANTLY_ABOVE

    return PricingClassification(
        pricing_position=position.value,
        pricing_position_label=position.value,
        pricing_confidence=confidence,
        delta_vs_mid=round_half_up(delta_vs_mid, 4),
        estimated_overage_mid=round_half_up(overage_mid, 2),
        estimated_overage_high=round_half_up(overage_high, 2),
        pct_vs_midpoint=round_half_up(delta_vs_mid * 100, 1),
    )
