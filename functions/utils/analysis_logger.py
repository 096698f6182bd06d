"""Analysis logger for QuoteShield.

Structured log events for each analysis stage, plus a plain-text pricing
summary used by support tooling to read an evidence trail at a glance.
"""

import json
import logging
from typing import Any, Dict, Optional

import structlog

from config.settings import settings

logger = structlog.get_logger()

BANNER_WIDTH = 80
PRICING_BANNER_CHAR = "═"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog with ISO timestamps and the console renderer.

    Args:
        level: Log level name (defaults to settings.log_level).
    """
    level = level or settings.log_level
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, str(level).upper(), logging.INFO)
        ),
    )


def _create_banner(char: str, text: str, width: int = BANNER_WIDTH) -> str:
    """Create a centered banner with given character."""
    text_with_spaces = f" {text} "
    padding = (width - len(text_with_spaces)) // 2
    return char * padding + text_with_spaces + char * (width - padding - len(text_with_spaces))


def _format_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format dictionary as pretty JSON string."""
    try:
        return json.dumps(data, indent=indent, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(data)


def _truncate_large_values(data: Dict[str, Any], max_length: int = 500) -> Dict[str, Any]:
    """Truncate large string values for display purposes."""
    if not isinstance(data, dict):
        return data

    result = {}
    for key, value in data.items():
        if isinstance(value, str) and len(value) > max_length:
            result[key] = value[:max_length] + f"... [truncated {len(value) - max_length} chars]"
        elif isinstance(value, dict):
            result[key] = _truncate_large_values(value, max_length)
        elif isinstance(value, list) and len(value) > 10:
            result[key] = value[:10] + [f"... and {len(value) - 10} more items"]
        else:
            result[key] = value
    return result


def log_score_report(report) -> None:
    """Log a quality report (QualityReport or ScoreReport)."""
    logger.info(
        "quality_report_built",
        overall_score=report.overall_score,
        overall_rating=report.overall_rating,
        confidence=report.confidence,
        category_scores={c.name: c.score for c in report.categories},
        findings_count=len(report.preview_findings),
        locked_findings_count=report.locked_findings_count,
    )


def log_unit_estimate(trade: str, estimate) -> None:
    """Log a unit estimate with its evidence trail."""
    logger.info(
        "unit_estimate_computed",
        trade=trade,
        job_units=estimate.job_units,
        scope_total=estimate.scope_total,
        effective_unit_price=estimate.effective_unit_price,
        confidence=estimate.confidence,
        evidence=list(estimate.evidence),
    )


def log_benchmark_snapshot(snapshot: Dict[str, Any]) -> None:
    """Log the benchmark snapshot (raw row truncated)."""
    logger.debug("benchmark_snapshot", snapshot=_truncate_large_values(snapshot))


def log_pricing_result(output) -> None:
    """Log the pricing engine outcome."""
    ctx = output.trade_context
    logger.info(
        "pricing_engine_completed",
        trade=ctx.trade,
        subtrade=ctx.subtrade,
        region_key=ctx.region_key,
        pricing_position=output.pricing_position,
        pricing_confidence=output.pricing_confidence,
        job_units=output.job_units,
        effective_unit_price=output.effective_unit_price,
    )


def format_pricing_summary(output) -> str:
    """Render a pricing engine output as a readable text block."""
    ctx = output.trade_context
    lines = [
        PRICING_BANNER_CHAR * BANNER_WIDTH,
        _create_banner(PRICING_BANNER_CHAR, f"PRICING: {ctx.trade.upper()}"),
        PRICING_BANNER_CHAR * BANNER_WIDTH,
        f"║ Subtrade       : {ctx.subtrade}",
        f"║ Region         : {ctx.region_key}",
        f"║ Position       : {output.pricing_position}",
        f"║ Confidence     : {output.pricing_confidence}",
        f"║ Job Units      : {output.job_units} {output.job_unit_name}",
        f"║ Unit Price     : {output.effective_unit_price}",
        PRICING_BANNER_CHAR * BANNER_WIDTH,
        "║ EVIDENCE:",
    ]
    lines.extend(f"║   • {item}" for item in output.unit_estimate.evidence)
    lines.append(PRICING_BANNER_CHAR * BANNER_WIDTH)
    lines.append("║ RESULT:")
    lines.extend(f"  {line}" for line in _format_json(_truncate_large_values(output.pricing_engine_result)).split("\n"))
    lines.append(PRICING_BANNER_CHAR * BANNER_WIDTH)
    return "\n".join(lines)
