"""Trade profiles for QuoteShield pricing.

Only roofing is priced per unit today; other trades resolve to no profile
and the pricing engine degrades to a no-data result for them.
"""

from typing import Dict, Optional

from trades.base import TradeProfile
from trades.roofing import ROOFING_PROFILE

TRADE_PROFILES: Dict[str, TradeProfile] = {
    ROOFING_PROFILE.trade.lower(): ROOFING_PROFILE,
}


def get_trade_profile(trade: Optional[str]) -> Optional[TradeProfile]:
    """Resolve a trade name (case-insensitive, aliases allowed) to its profile."""
    if not isinstance(trade, str):
        return None
    key = trade.strip().lower()
    if not key:
        return None
    if key in TRADE_PROFILES:
        return TRADE_PROFILES[key]
    for profile in TRADE_PROFILES.values():
        if key in profile.aliases:
            return profile
    return None


__all__ = [
    "TradeProfile",
    "TRADE_PROFILES",
    "get_trade_profile",
]
