"""Mock AI extraction results for testing.

Provides current-schema (explicit signals/quality) and legacy-schema
(report sections only) results.
"""

from typing import Dict, Any


# =============================================================================
# CURRENT SCHEMA - explicit signals and quality
# =============================================================================

CURRENT_SCHEMA_RESULT: Dict[str, Any] = {
    "signals": {
        "pricing_outliers": 1,
        "missing_scope": 1,
        "warranty_red_flags": 0,
        "timeline_red_flags": 0,
    },
    "quality": {
        "doc_quality": 0.55,
        "line_item_clarity": 0.5,
    },
    "payment": {"deposit_percent": 25},
    "preview_findings": [
        "Tear-off and disposal are itemized separately.",
        "short",
    ],
}


# Signals only; quality must be derived from summary/costs
CURRENT_SIGNALS_ONLY_RESULT: Dict[str, Any] = {
    "signals": {
        "pricing_outliers": 3,
        "missing_scope": 0,
        "warranty_red_flags": 2,
        "timeline_red_flags": 1,
    },
    "summary": {"confidence": "high"},
    "costs": {"line_items": [{"description": "Shingles"}, {"description": "Underlayment"}]},
}


# =============================================================================
# LEGACY SCHEMA - report sections only
# =============================================================================

LEGACY_SCHEMA_RESULT: Dict[str, Any] = {
    "summary": {
        "confidence": "low",
        "total": 12500,
        "project_type": "Roof replacement",
    },
    "scope": {
        "missing_or_unclear": [
            "Drip edge not mentioned",
            "Ice and water shield not mentioned",
        ],
    },
    "costs": {
        "line_items": [
            {"description": "Architectural shingles"},
            {"description": "Synthetic underlayment"},
            {"description": "Ridge vent"},
            {"description": "Tear-off and disposal"},
        ],
        "high_cost_flags": ["Disposal fee above typical"],
    },
    "red_flags": [
        {"title": "Limited warranty", "detail": "Only 1 year on labor"},
        {"title": "Large deposit", "detail": "Half of the total due upfront"},
        {"title": "Vague cleanup", "detail": "No mention of magnet sweep"},
    ],
    "timeline": {"timeline_present": True, "timeline_clarity": "basic"},
    "payment": {"deposit_percent": 50},
    "preview_findings": [
        "Deposit requested is higher than usual for roofing work.",
        "Warranty terms could improve with written manufacturer coverage.",
        "   ",
        "Cleanup terms are unclear in the quote.",
        "Permit responsibility is not stated.",
    ],
}


# Clean legacy quote: nothing to flag
LEGACY_CLEAN_RESULT: Dict[str, Any] = {
    "summary": {"confidence": "high"},
    "scope": {"missing_or_unclear": []},
    "costs": {
        "line_items": [{"description": f"Item {i}"} for i in range(10)],
        "high_cost_flags": [],
    },
    "red_flags": [],
    "timeline": {"timeline_present": True, "timeline_clarity": "detailed"},
    "payment": {"deposit_percent": 10},
}
