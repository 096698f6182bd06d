"""Roofing trade profile for QuoteShield pricing.

Estimates roof squares (1 square = 100 sq ft) from a quote so the quote can
be priced per square against regional benchmarks.

Job units are searched in a fixed priority order:
    A) prior analysis with unit_basis "square" and a positive quantity
    B) line items: "A-B squares" range (midpoint), then "N squares",
       then bundles / 3
    C) roof_squares on the AI report
The order matters on ambiguous text; each rule that fires records an
evidence string.
"""

import re
from typing import Any, Dict, List, Optional

import structlog

from models.pricing import AnalysisSnapshot, LineItemRow, UnitEstimate
from trades.base import TradeProfile
from utils.numbers import coerce_number, finite_number, format_number, round_half_up

logger = structlog.get_logger()

# =============================================================================
# Constants
# =============================================================================

TRADE_ROOFING = "Roofing"
SUBTRADE_REPLACEMENT = "Residential Replacement"
SUBTRADE_REPAIR = "Residential Repair"
UNIT_BASIS_SQUARE = "square"

BUNDLES_PER_SQUARE = 3

CONFIDENCE_FROM_ANALYSIS = 0.9
CONFIDENCE_FROM_SQUARES_TEXT = 0.8
CONFIDENCE_FROM_BUNDLES = 0.7
CONFIDENCE_FROM_REPORT = 0.7

SQUARES_RANGE_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:-|–|to)\s*(\d+(?:\.\d+)?)\s*squares?\b"
)
SQUARES_SINGLE_PATTERN = re.compile(r"\b(\d+(?:\.\d+)?)\s*squares?\b")
BUNDLES_PATTERN = re.compile(r"\b(\d+(?:\.\d+)?)\s*bundles?\b")

BUNDLE_UNITS = {"bundle", "bundles"}


# =============================================================================
# Extraction helpers
# =============================================================================


def extract_squares_from_text(text: str) -> Optional[float]:
    """Squares from free text; a range resolves to its midpoint."""
    t = text.lower()

    match = SQUARES_RANGE_PATTERN.search(t)
    if match:
        a = float(match.group(1))
        b = float(match.group(2))
        if a > 0 and b > 0:
            return (a + b) / 2

    match = SQUARES_SINGLE_PATTERN.search(t)
    if match:
        a = float(match.group(1))
        if a > 0:
            return a

    return None


def extract_bundles_from_line_items(line_items: List[LineItemRow]) -> Optional[float]:
    """Bundle count from a bundle-unit line item, else from "N bundles" text."""
    for item in line_items:
        unit = (item.unit or "").lower()
        desc = " ".join(item.text_parts(include_unit=False)).lower()
        if unit in BUNDLE_UNITS or "bundle" in desc:
            if item.quantity is not None and item.quantity > 0:
                return item.quantity

    match = BUNDLES_PATTERN.search(combined_line_item_text(line_items).lower())
    if match:
        b = float(match.group(1))
        if b > 0:
            return b
    return None


def combined_line_item_text(line_items: List[LineItemRow]) -> str:
    return " ".join(" ".join(item.text_parts()) for item in line_items)


def _report_field(report: Optional[Dict[str, Any]], key: str) -> Optional[float]:
    """Numeric field from report.summary, falling back to the report root."""
    if not isinstance(report, dict):
        return None
    summary = report.get("summary") if isinstance(report.get("summary"), dict) else {}
    value = finite_number(summary.get(key))
    if value is None:
        value = finite_number(report.get(key))
    return value


def _scope_total(
    line_items: List[LineItemRow],
    report: Optional[Dict[str, Any]],
    project_value: Optional[float]
) -> float:
    """project_value, else sum of line totals, else report total, else 0."""
    value = coerce_number(project_value)
    if value is not None and value > 0:
        return value

    line_sum = sum(item.line_total for item in line_items if item.line_total is not None)
    if line_sum > 0:
        return line_sum

    report_total = _report_field(report, "total")
    if report_total is not None:
        return report_total
    return 0.0


# =============================================================================
# Public API
# =============================================================================


def estimate_roofing_units(
    line_items: List[LineItemRow],
    analysis: Optional[AnalysisSnapshot] = None,
    report: Optional[Dict[str, Any]] = None,
    project_value: Optional[float] = None
) -> UnitEstimate:
    """Estimate roof squares and effective price per square.

    Args:
        line_items: Stored quote line items (read-only).
        analysis: Prior analysis snapshot, if any.
        report: AI result / report JSON fragment, if any.
        project_value: Externally known project value, if any.

    Returns:
        UnitEstimate; job_units is None with confidence 0 when no quantity
        can be found.
    """
    evidence: List[str] = []
    job_units: Optional[float] = None
    confidence = 0.0

    # A) Prior analysis already normalized to squares
    if analysis is not None and (analysis.unit_basis or "").lower() == UNIT_BASIS_SQUARE:
        quantity = analysis.normalized_quantity
        if quantity is not None and quantity > 0:
            job_units = quantity
            confidence = CONFIDENCE_FROM_ANALYSIS
            evidence.append(f"job_units from analysis: {format_number(job_units)}")

    # B) Line items
    if job_units is None:
        from_text = extract_squares_from_text(combined_line_item_text(line_items))
        if from_text is not None:
            job_units = from_text
            confidence = CONFIDENCE_FROM_SQUARES_TEXT
            evidence.append(f"squares from line item text: {format_number(job_units)}")
        else:
            bundles = extract_bundles_from_line_items(line_items)
            if bundles is not None:
                job_units = round_half_up(bundles / BUNDLES_PER_SQUARE, 2)
                confidence = CONFIDENCE_FROM_BUNDLES
                evidence.append(
                    f"job_units from bundles/3: {format_number(bundles)} bundles → "
                    f"{format_number(job_units)} squares"
                )

    # C) Report roof_squares
    if job_units is None:
        roof_squares = _report_field(report, "roof_squares")
        if roof_squares is not None and roof_squares > 0:
            job_units = roof_squares
            confidence = CONFIDENCE_FROM_REPORT
            evidence.append(f"job_units from report_json: {format_number(job_units)}")

    if job_units is None:
        evidence.append("Cannot compute job_units; no squares from analysis, line items, or report.")
        logger.info("roofing_units_not_found", line_item_count=len(line_items))
        return UnitEstimate(
            job_units=None,
            scope_total=None,
            effective_unit_price=None,
            confidence=0.0,
            evidence=evidence,
        )

    scope_total = _scope_total(line_items, report, project_value)
    evidence.append(f"roofing_scope_total: {format_number(scope_total)}")

    effective = None
    if job_units > 0 and scope_total > 0:
        effective = round_half_up(scope_total / job_units, 2)

    return UnitEstimate(
        job_units=job_units,
        scope_total=scope_total,
        effective_unit_price=effective,
        confidence=confidence,
        evidence=evidence,
    )


def classify_roofing_subtrade(
    project_type: Optional[str] = None,
    report: Optional[Dict[str, Any]] = None
) -> str:
    """Repair vs replacement from the project type text."""
    summary = report.get("summary") if isinstance(report, dict) else None
    summary_type = summary.get("project_type") if isinstance(summary, dict) else None
    text = f"{project_type or ''} {summary_type if isinstance(summary_type, str) else ''}".lower()

    if "repair" in text:
        return SUBTRADE_REPAIR
    return SUBTRADE_REPLACEMENT


ROOFING_PROFILE = TradeProfile(
    trade=TRADE_ROOFING,
    default_subtrade=SUBTRADE_REPLACEMENT,
    unit_basis=UNIT_BASIS_SQUARE,
    estimate_units=estimate_roofing_units,
    classify_subtrade=classify_roofing_subtrade,
    aliases=("roofing", "roof", "roofer", "re-roof", "reroof", "roof replacement", "roof repair"),
)
