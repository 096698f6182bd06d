"""Quality report service for QuoteShield.

Composes the Signal Adapter, Score Engine and Finding Classifier into the
quality/risk half of a stored analysis.

Note: ``confidence`` on this report measures extraction quality only. It is
independent of ``pricing_confidence`` on the pricing benchmark, and the two
can disagree (e.g. High confidence with no benchmark data).
"""

from typing import Any, Dict, List, Optional

import structlog

from config.scoring import ScoringConfig
from models.ai_result import parse_ai_result
from models.findings import PremiumMessage, QualityReport
from models.score import CategoryScore, Risk
from services.finding_classifier import build_preview_findings, usable_finding_texts
from services.score_engine import compute_free_score
from services.signal_adapter import score_inputs_from_ai_result
from utils.analysis_logger import log_score_report

logger = structlog.get_logger()

# AI findings considered before classification
MAX_AI_FINDINGS = 3

RISK_RANK = {
    Risk.HIGH.value: 3,
    Risk.MEDIUM.value: 2,
    Risk.LOW.value: 1,
}

PREMIUM_RISK_MESSAGES: Dict[str, PremiumMessage] = {
    "Warranty": PremiumMessage(
        headline="Warranty protection needs verification",
        description=(
            "Warranty wording often hides exclusions. The full review confirms "
            "contractor responsibility and long-term coverage."
        ),
    ),
    "Scope": PremiumMessage(
        headline="Scope gaps are the most common contractor dispute",
        description=(
            "The full review identifies missing work items that often become "
            "expensive change orders later."
        ),
    ),
    "Materials": PremiumMessage(
        headline="Material pricing and quantities need verification",
        description=(
            "The full review checks material substitutions, quantity accuracy, "
            "and pricing structure."
        ),
    ),
    "Labor": PremiumMessage(
        headline="Labor scope clarity prevents surprise costs",
        description="The full review evaluates labor scope detail and pricing consistency.",
    ),
    "Timeline": PremiumMessage(
        headline="Timeline clarity prevents scheduling disputes",
        description=(
            "The full review evaluates project milestones, delays, and payment "
            "timing risks."
        ),
    ),
}

FALLBACK_PREMIUM_MESSAGE = PremiumMessage(
    headline="Even strong quotes benefit from full contract verification",
    description=(
        "Full review verifies pricing accuracy, contract protections, and "
        "negotiation opportunities."
    ),
)


def get_primary_risk_category(categories: Optional[List[CategoryScore]]) -> Optional[CategoryScore]:
    """Category with the highest risk label; ties keep category order."""
    if not categories:
        return None
    return max(categories, key=lambda c: RISK_RANK.get(c.risk, 0))


def premium_message_for(category: Optional[CategoryScore]) -> PremiumMessage:
    if category is None:
        return FALLBACK_PREMIUM_MESSAGE
    return PREMIUM_RISK_MESSAGES.get(category.name, FALLBACK_PREMIUM_MESSAGE)


def build_quality_report(
    ai_result: Any,
    max_findings: Optional[int] = None,
    config: Optional[ScoringConfig] = None
) -> QualityReport:
    """Score an AI result and build homeowner preview findings.

    Args:
        ai_result: Raw AI result dict in either schema (or None).
        max_findings: Preview findings cap (defaults to settings).
        config: Optional scoring constants.

    Returns:
        QualityReport ready to be persisted.
    """
    parsed = parse_ai_result(ai_result)
    inputs = score_inputs_from_ai_result(parsed)
    score = compute_free_score(inputs, config)

    deposit_percent = parsed.sections.deposit_percent
    ai_findings = usable_finding_texts(list(parsed.sections.preview_findings))[:MAX_AI_FINDINGS]
    preview_findings = build_preview_findings(
        deposit_percent,
        ai_findings,
        score.preview_findings,
        max_findings,
    )

    # Highest-ranked category; a report with no High/Medium category still
    # gets the fallback upsell copy.
    primary = get_primary_risk_category(score.categories)
    premium = premium_message_for(primary if primary is not None and primary.risk != Risk.LOW.value else None)

    report = QualityReport(
        overall_score=score.overall_score,
        overall_rating=score.overall_rating,
        confidence=score.confidence,
        categories=score.categories,
        preview_findings=preview_findings,
        locked_findings_count=score.locked_findings_count,
        score_breakdown=score.score_breakdown,
        deposit_percent=deposit_percent,
        primary_risk_category=primary,
        premium_message=premium,
    )

    log_score_report(report)
    return report


def quality_report_to_dict(report: QualityReport) -> Dict[str, Any]:
    """Plain JSON-serializable dict for persistence."""
    return report.model_dump(mode="json")
