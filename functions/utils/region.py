"""Region key derivation from free-form addresses.

Region keys are US state codes for now (e.g. "TX"); zip3 is parsed as well
for finer benchmark regions.
"""

import re
from typing import Any, Dict, Optional

US_STATE_CODES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN", "IA", "KS",
    "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY",
    "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV",
    "WI", "WY", "DC",
})

STATE_ZIP_PATTERN = re.compile(r"\b([A-Z]{2})\s+(\d{5}(?:-\d{4})?)\b", re.IGNORECASE)
ZIP_PATTERN = re.compile(r"\b(\d{5})(?:-\d{4})?\b")
STATE_PATTERN = re.compile(r"\b([A-Z]{2})\b")


def _empty() -> Dict[str, Optional[str]]:
    return {"state": None, "zip": None, "zip5": None, "zip3": None}


def parse_address_for_region(address: Any) -> Dict[str, Optional[str]]:
    """Parse state and zip from an address string.

    Example:
        "12 Bay St, Mobile, AL 36526" ->
        {"state": "AL", "zip": "36526", "zip5": "36526", "zip3": "365"}
    """
    if not isinstance(address, str) or not address.strip():
        return _empty()

    text = address.strip()
    result = _empty()

    match = STATE_ZIP_PATTERN.search(text)
    if match and match.group(1).upper() in US_STATE_CODES:
        result["state"] = match.group(1).upper()
        result["zip"] = match.group(2)
        result["zip5"] = match.group(2).split("-")[0]
        result["zip3"] = result["zip5"][:3]
        return result

    zip_match = ZIP_PATTERN.search(text)
    if zip_match:
        result["zip"] = zip_match.group(0)
        result["zip5"] = zip_match.group(1)
        result["zip3"] = zip_match.group(1)[:3]

    # Uppercase-only tokens, so words like "on" or "in" are not read as states
    for state_match in STATE_PATTERN.finditer(text):
        if state_match.group(1) in US_STATE_CODES:
            result["state"] = state_match.group(1)
            break

    return result


def build_region_key(address: Any) -> Optional[str]:
    """Region key for an address: the state code, or None."""
    return parse_address_for_region(address)["state"]
