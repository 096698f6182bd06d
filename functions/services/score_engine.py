"""Score Engine for QuoteShield.

Converts normalized ScoreInputs into five category scores, an overall
score and rating, an input-quality confidence label and raw findings.
Pure arithmetic over clamped inputs; cannot raise.
"""

from typing import List, Optional

import structlog

from config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from models.score import (
    CategoryScore,
    Confidence,
    OverallRating,
    Risk,
    ScoreInputs,
    ScoreReport,
)
from utils.numbers import clamp, round_half_up

logger = structlog.get_logger()

# =============================================================================
# Finding copy
# =============================================================================

FINDING_PRICING_OUTLIERS = "Some pricing items look outside typical ranges."
FINDING_MISSING_SCOPE = "Some scope details may be missing or unclear."
FINDING_WARRANTY = "Warranty coverage may be limited compared to common standards."
FINDING_TIMELINE = "Timeline details may need clarification before signing."
FINDING_NO_RED_FLAGS = (
    "No major red flags detected in the snapshot. Full review recommended before signing."
)


# =============================================================================
# Banding
# =============================================================================


def risk_from_score(score: float, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Risk:
    if score >= config.low_concern_threshold:
        return Risk.LOW
    if score >= config.moderate_concern_threshold:
        return Risk.MEDIUM
    return Risk.HIGH


def rating_from_score(score: float, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> OverallRating:
    if score >= config.low_concern_threshold:
        return OverallRating.LOW_CONCERN
    if score >= config.moderate_concern_threshold:
        return OverallRating.MODERATE_CONCERN
    return OverallRating.HIGH_CONCERN


def confidence_label(
    doc_quality: float,
    line_item_clarity: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> Confidence:
    """Confidence from the average of the two raw quality fractions."""
    c = (doc_quality + line_item_clarity) / 2
    if c >= config.high_confidence_threshold:
        return Confidence.HIGH
    if c >= config.medium_confidence_threshold:
        return Confidence.MEDIUM
    return Confidence.LOW


def penalty_from_signals(signals: int, cap: int, max_penalty: float = 45.0) -> float:
    """Linear penalty that saturates at max_penalty once signals reach cap."""
    if cap <= 0:
        return max_penalty if signals > 0 else 0.0
    ratio = min(1.0, signals / cap)
    return ratio * max_penalty


# =============================================================================
# Findings
# =============================================================================


def raw_findings(inputs: ScoreInputs, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> List[str]:
    findings = []
    if inputs.pricing_outlier_signals >= config.pricing_finding_min_signals:
        findings.append(FINDING_PRICING_OUTLIERS)
    if inputs.missing_scope_signals >= config.missing_scope_finding_min_signals:
        findings.append(FINDING_MISSING_SCOPE)
    if inputs.warranty_signals >= config.warranty_finding_min_signals:
        findings.append(FINDING_WARRANTY)
    if inputs.timeline_signals >= config.timeline_finding_min_signals:
        findings.append(FINDING_TIMELINE)
    return findings or [FINDING_NO_RED_FLAGS]


# =============================================================================
# Public API
# =============================================================================


def compute_free_score(
    inputs: ScoreInputs,
    config: Optional[ScoringConfig] = None
) -> ScoreReport:
    """Compute the free score report for a quote.

    Args:
        inputs: Normalized score inputs.
        config: Optional scoring constants (defaults to production values).

    Returns:
        ScoreReport with overall score, rating, confidence, five categories,
        raw findings and the locked findings counter.
    """
    cfg = config or DEFAULT_SCORING_CONFIG

    doc = clamp(inputs.doc_quality * 100)
    clarity = clamp(inputs.line_item_clarity * 100)

    pricing_penalty = penalty_from_signals(inputs.pricing_outlier_signals, cfg.pricing_outlier_cap, cfg.max_penalty)
    scope_penalty = penalty_from_signals(inputs.missing_scope_signals, cfg.missing_scope_cap, cfg.max_penalty)
    warranty_penalty = penalty_from_signals(inputs.warranty_signals, cfg.warranty_cap, cfg.max_penalty)
    timeline_penalty = penalty_from_signals(inputs.timeline_signals, cfg.timeline_cap, cfg.max_penalty)

    labor = clamp(
        cfg.labor_base
        + clarity * cfg.labor_clarity_weight
        + doc * cfg.labor_doc_weight
        - pricing_penalty * cfg.labor_penalty_weight
    )
    materials = clamp(
        cfg.materials_base
        + clarity * cfg.materials_clarity_weight
        - pricing_penalty * cfg.materials_penalty_weight
    )
    scope = clamp(
        cfg.scope_base
        + clarity * cfg.scope_clarity_weight
        - scope_penalty * cfg.scope_penalty_weight
    )
    warranty = clamp(cfg.warranty_base - warranty_penalty * cfg.warranty_penalty_weight)
    timeline = clamp(cfg.timeline_base - timeline_penalty * cfg.timeline_penalty_weight)

    overall = (
        labor * cfg.weight_labor
        + materials * cfg.weight_materials
        + scope * cfg.weight_scope
        + warranty * cfg.weight_warranty
        + timeline * cfg.weight_timeline
        + doc * cfg.weight_doc
        + clarity * cfg.weight_clarity
    )
    overall_score = int(clamp(round_half_up(overall)))

    categories = [
        CategoryScore(name=name, score=int(round_half_up(score)), risk=risk_from_score(score, cfg))
        for name, score in (
            ("Labor", labor),
            ("Materials", materials),
            ("Scope", scope),
            ("Warranty", warranty),
            ("Timeline", timeline),
        )
    ]

    report = ScoreReport(
        overall_score=overall_score,
        overall_rating=rating_from_score(overall_score, cfg),
        confidence=confidence_label(inputs.doc_quality, inputs.line_item_clarity, cfg),
        categories=categories,
        preview_findings=raw_findings(inputs, cfg),
        locked_findings_count=max(cfg.min_locked_findings, inputs.total_signals),
        score_breakdown={"inputs": inputs.model_dump()},
    )

    logger.debug(
        "free_score_computed",
        overall_score=report.overall_score,
        overall_rating=report.overall_rating,
        confidence=report.confidence,
    )
    return report
