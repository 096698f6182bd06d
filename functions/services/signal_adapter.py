"""Signal Adapter for QuoteShield.

Maps an AI extraction result (current or legacy schema) into normalized
ScoreInputs for the Score Engine. Never raises: every field has a
deterministic default.
"""

import re
from typing import Any, Iterable

import structlog

from models.ai_result import (
    AiResult,
    CurrentAiResult,
    ExplicitQuality,
    ExplicitSignals,
    RedFlag,
    ReportSections,
    parse_ai_result,
)
from models.score import ScoreInputs
from utils.numbers import clamp01, clamp_int, safe_num

logger = structlog.get_logger()

# =============================================================================
# Constants
# =============================================================================

# Fallbacks when the quality object is present but one field is missing
DEFAULT_DOC_QUALITY = 0.55
DEFAULT_LINE_ITEM_CLARITY = 0.5

CONFIDENCE_TO_QUALITY = {
    "high": 0.85,
    "medium": 0.65,
    "low": 0.45,
}

# Legacy line-item clarity: 0.5 + 0.05 per item, capped
BASE_LINE_ITEM_CLARITY = 0.5
CLARITY_PER_LINE_ITEM = 0.05
MAX_DERIVED_CLARITY = 0.9

# Caps for signals derived from legacy report sections
LEGACY_MISSING_SCOPE_CAP = 5
LEGACY_PRICING_OUTLIER_CAP = 6
LEGACY_WARRANTY_CAP = 4

# Caps for explicit signals
EXPLICIT_MISSING_SCOPE_CAP = 10
EXPLICIT_PRICING_OUTLIER_CAP = 10
EXPLICIT_WARRANTY_CAP = 5
EXPLICIT_TIMELINE_CAP = 5

WARRANTY_KEYWORDS = re.compile(r"warranty|guarantee|coverage|term|year|limited", re.IGNORECASE)

WEAK_TIMELINE_CLARITY = {"missing", "basic"}


# =============================================================================
# Derivation helpers
# =============================================================================


def confidence_to_quality(confidence: Any) -> float:
    """Map a high/medium/low confidence label to a 0..1 quality value."""
    if isinstance(confidence, str):
        return CONFIDENCE_TO_QUALITY.get(confidence, CONFIDENCE_TO_QUALITY["medium"])
    return CONFIDENCE_TO_QUALITY["medium"]


def clarity_from_line_item_count(count: int) -> float:
    if count <= 0:
        return BASE_LINE_ITEM_CLARITY
    return min(MAX_DERIVED_CLARITY, BASE_LINE_ITEM_CLARITY + count * CLARITY_PER_LINE_ITEM)


def warranty_signals_from_red_flags(red_flags: Iterable[RedFlag]) -> int:
    """Count red flags whose title+detail mentions warranty terms."""
    n = sum(1 for flag in red_flags if WARRANTY_KEYWORDS.search(flag.text))
    return min(n, LEGACY_WARRANTY_CAP)


def timeline_signals_from_sections(sections: ReportSections) -> int:
    missing = (
        sections.timeline_present is False
        or sections.timeline_clarity in WEAK_TIMELINE_CLARITY
    )
    return 1 if missing else 0


def _quality_from_explicit(quality: ExplicitQuality) -> tuple:
    return (
        clamp01(safe_num(quality.doc_quality, DEFAULT_DOC_QUALITY)),
        clamp01(safe_num(quality.line_item_clarity, DEFAULT_LINE_ITEM_CLARITY)),
    )


def _quality_from_sections(sections: ReportSections) -> tuple:
    return (
        confidence_to_quality(sections.confidence),
        clarity_from_line_item_count(sections.line_item_count),
    )


def _signals_from_explicit(signals: ExplicitSignals) -> dict:
    return {
        "missing_scope_signals": clamp_int(safe_num(signals.missing_scope, 0), 0, EXPLICIT_MISSING_SCOPE_CAP),
        "pricing_outlier_signals": clamp_int(safe_num(signals.pricing_outliers, 0), 0, EXPLICIT_PRICING_OUTLIER_CAP),
        "warranty_signals": clamp_int(safe_num(signals.warranty_red_flags, 0), 0, EXPLICIT_WARRANTY_CAP),
        "timeline_signals": clamp_int(safe_num(signals.timeline_red_flags, 0), 0, EXPLICIT_TIMELINE_CAP),
    }


def _signals_from_sections(sections: ReportSections) -> dict:
    return {
        "missing_scope_signals": min(LEGACY_MISSING_SCOPE_CAP, sections.missing_or_unclear_count),
        "pricing_outlier_signals": min(LEGACY_PRICING_OUTLIER_CAP, sections.high_cost_flag_count),
        "warranty_signals": warranty_signals_from_red_flags(sections.red_flags),
        "timeline_signals": timeline_signals_from_sections(sections),
    }


# =============================================================================
# Public API
# =============================================================================


def score_inputs_from_ai_result(result: AiResult) -> ScoreInputs:
    """Normalize a parsed AI result into ScoreInputs.

    Explicit signals and quality are used when present (each independently);
    otherwise values are derived from the report sections.
    """
    sections = result.sections
    signals = result.signals if isinstance(result, CurrentAiResult) else None
    quality = result.quality if isinstance(result, CurrentAiResult) else None

    if quality is not None:
        doc_quality, line_item_clarity = _quality_from_explicit(quality)
    else:
        doc_quality, line_item_clarity = _quality_from_sections(sections)

    if signals is not None:
        signal_counts = _signals_from_explicit(signals)
    else:
        signal_counts = _signals_from_sections(sections)

    logger.debug(
        "score_inputs_derived",
        schema="current" if isinstance(result, CurrentAiResult) else "legacy",
        explicit_signals=signals is not None,
        explicit_quality=quality is not None,
    )

    return ScoreInputs(
        doc_quality=doc_quality,
        line_item_clarity=line_item_clarity,
        **signal_counts,
    )


def ai_result_to_score_inputs(ai_result: Any) -> ScoreInputs:
    """Convert a raw AI result dict (any schema, or None) into ScoreInputs."""
    return score_inputs_from_ai_result(parse_ai_result(ai_result))
