"""Mock pricing data fixtures for testing.

Provides roofing line items, submissions and benchmark rows for Texas and
the generic "unknown" region.
"""

from typing import Dict, Any, List


# =============================================================================
# LINE ITEMS
# =============================================================================

ROOFING_LINE_ITEMS_SQUARES: List[Dict[str, Any]] = [
    {
        "description_raw": "Remove and replace 22 squares architectural shingles",
        "quantity": 1,
        "unit": "job",
        "line_total": 8200,
        "sort_order": 0,
    },
    {
        "description_raw": "Synthetic underlayment",
        "quantity": 1,
        "unit": "job",
        "line_total": 1260,
        "sort_order": 1,
    },
]

ROOFING_LINE_ITEMS_RANGE: List[Dict[str, Any]] = [
    {"description_raw": "Full tear-off, approx 20-24 squares", "line_total": 9000},
]

ROOFING_LINE_ITEMS_BUNDLES: List[Dict[str, Any]] = [
    {"description_raw": "Architectural shingles", "quantity": 64, "unit": "bundles", "line_total": 7040},
    {"description_raw": "Ridge cap", "quantity": 1, "unit": "job", "line_total": 400},
]

ROOFING_LINE_ITEMS_NO_QUANTITY: List[Dict[str, Any]] = [
    {"description_raw": "Roof replacement per proposal", "line_total": 11000},
]


# =============================================================================
# SUBMISSIONS
# =============================================================================

TX_ROOFING_SUBMISSION: Dict[str, Any] = {
    "project_type": "Roofing",
    "address": "418 Elm St, Austin, TX 78704",
    "project_value": 9460,
    "report_json": {"summary": {"total": 9460, "project_type": "Roof replacement"}},
}


# =============================================================================
# BENCHMARK ROWS
# =============================================================================

TX_REPLACEMENT_BENCHMARK: Dict[str, Any] = {
    "id": "tx-roof-2024",
    "trade": "Roofing",
    "subtrade": "Residential Replacement",
    "region_key": "TX",
    "unit_basis": "square",
    "unit_low": 350,
    "unit_mid": 420,
    "unit_high": 500,
    "source": "regional-survey",
    "effective_date": "2024-06-01",
    "created_at": "2024-06-02T10:00:00Z",
}

TX_REPLACEMENT_BENCHMARK_OLD: Dict[str, Any] = {
    **TX_REPLACEMENT_BENCHMARK,
    "id": "tx-roof-2023",
    "unit_low": 300,
    "unit_mid": 380,
    "unit_high": 450,
    "effective_date": "2023-06-01",
    "created_at": "2023-06-02T10:00:00Z",
}

# Legacy row shape: plain low/high, no unit_basis, no mid
TX_REPLACEMENT_LEGACY_ROW: Dict[str, Any] = {
    "id": "tx-roof-legacy",
    "trade": "Roofing",
    "subtrade": "Residential Replacement",
    "region_key": "TX",
    "low": 340,
    "high": 480,
    "source": "legacy-import",
    "effective_date": "2022-01-01",
}

UNKNOWN_REGION_LEGACY_ROW: Dict[str, Any] = {
    **TX_REPLACEMENT_LEGACY_ROW,
    "id": "unknown-roof-legacy",
    "region_key": "unknown",
}
