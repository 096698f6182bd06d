"""Pricing engine for QuoteShield.

Resolves the trade context for a submission, estimates job units, fetches
the market benchmark and classifies the quote's unit price. Produces the
pricing benchmark half of a stored analysis, independent of the quality
report.

Flow:
    trade context -> trade profile -> unit estimate -> benchmark -> classify
"""

from typing import Any, Dict, List, Optional

import structlog

from config.errors import ErrorCode
from config.settings import settings
from models.pricing import (
    AnalysisSnapshot,
    BenchmarkRange,
    LineItemRow,
    PricingClassification,
    PricingEngineOutput,
    SubmissionRecord,
    TradeContext,
    UnitEstimate,
)
from services.benchmark_service import BenchmarkStore, fetch_unit_benchmark
from services.pricing_classifier import classify_pricing
from trades import get_trade_profile
from trades.base import TradeProfile
from utils.analysis_logger import log_benchmark_snapshot, log_pricing_result, log_unit_estimate
from utils.numbers import finite_number
from utils.region import build_region_key

logger = structlog.get_logger()

# Estimate confidence ceiling when the benchmark has no range
NO_BENCHMARK_CONFIDENCE_CAP = 0.3

# Subtrade recorded for trades without a profile
DEFAULT_SUBTRADE = "Residential Replacement"


# =============================================================================
# Input coercion
# =============================================================================


def _as_submission(submission: Any) -> SubmissionRecord:
    if isinstance(submission, SubmissionRecord):
        return submission
    return SubmissionRecord.model_validate(submission if isinstance(submission, dict) else {})


def _as_analysis(analysis: Any) -> Optional[AnalysisSnapshot]:
    if analysis is None or isinstance(analysis, AnalysisSnapshot):
        return analysis
    if isinstance(analysis, dict):
        return AnalysisSnapshot.model_validate(analysis)
    return None


def _as_line_items(line_items: Any) -> List[LineItemRow]:
    rows = []
    for item in line_items or []:
        if isinstance(item, LineItemRow):
            rows.append(item)
        elif isinstance(item, dict):
            rows.append(LineItemRow.model_validate(item))
    rows.sort(key=lambda r: r.sort_order if r.sort_order is not None else 0)
    return rows


# =============================================================================
# Trade context
# =============================================================================


def _non_blank(value: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def resolve_trade_context(
    submission: SubmissionRecord,
    analysis: Optional[AnalysisSnapshot],
    profile: Optional[TradeProfile] = None
) -> TradeContext:
    """Pick trade, subtrade and region for the benchmark lookup.

    A prior analysis with all three fields wins. Otherwise the trade comes
    from the project type, the subtrade from the trade profile and the
    region from the submission (region_key, then address).
    """
    if analysis is not None:
        prior = (_non_blank(analysis.trade), _non_blank(analysis.subtrade), _non_blank(analysis.region_key))
        if all(prior):
            return TradeContext(trade=prior[0], subtrade=prior[1], region_key=prior[2])

    trade = (submission.project_type or "").strip() or settings.default_trade
    profile = profile or get_trade_profile(trade)
    report = _report_fragment(submission)

    if profile is not None:
        trade = profile.trade
        subtrade = profile.classify_subtrade(submission.project_type, report)
    else:
        subtrade = DEFAULT_SUBTRADE

    region_key = (
        (_non_blank(analysis.region_key) if analysis is not None else None)
        or _non_blank(submission.region_key)
        or build_region_key(submission.address)
        or settings.default_region_key
    )
    return TradeContext(trade=trade, subtrade=subtrade, region_key=region_key)


def _report_fragment(submission: SubmissionRecord) -> Optional[Dict[str, Any]]:
    """report_json (or ai_result) with a top-level total resolved."""
    report = submission.report_json or submission.ai_result
    if not isinstance(report, dict):
        return None
    fragment = dict(report)
    if finite_number(fragment.get("total")) is None:
        summary = fragment.get("summary")
        if isinstance(summary, dict) and finite_number(summary.get("total")) is not None:
            fragment["total"] = summary["total"]
    return fragment


# =============================================================================
# Output assembly
# =============================================================================


def _build_snapshot(
    ctx: TradeContext,
    unit_basis: str,
    estimate: UnitEstimate,
    benchmark: BenchmarkRange
) -> Dict[str, Any]:
    low, mid, high = benchmark.unit_low, benchmark.unit_mid, benchmark.unit_high
    snapshot: Dict[str, Any] = {
        "mode": "unit",
        "unit_basis": unit_basis,
        "normalized_quantity": estimate.job_units,
        "quote_total": estimate.scope_total,
        "unit_price_estimated": estimate.effective_unit_price,
        "region_key": ctx.region_key,
        "trade": ctx.trade,
        "subtrade": ctx.subtrade,
        "source": benchmark.source,
        "effective_date": benchmark.effective_date,
        "benchmark_row": dict(benchmark.benchmark_row),
        "evidence": list(estimate.evidence),
    }
    if low is not None:
        snapshot["unit_low"] = low
    if mid is not None:
        snapshot["unit_mid"] = mid
    if high is not None:
        snapshot["unit_high"] = high
    if low is not None and high is not None:
        snapshot["market_range"] = {
            "low": low,
            "mid": mid if mid is not None else (low + high) / 2,
            "high": high,
        }
    return snapshot


def _build_result(
    classification: PricingClassification,
    unit_basis: str,
    estimate: UnitEstimate,
    benchmark: BenchmarkRange
) -> Dict[str, Any]:
    return {
        **classification.model_dump(),
        "job_units": estimate.job_units,
        "job_unit_name": unit_basis,
        "effective_unit_price": estimate.effective_unit_price,
        "market_low": benchmark.unit_low,
        "market_mid": benchmark.unit_mid,
        "market_high": benchmark.unit_high,
        "evidence": list(estimate.evidence),
    }


def _unsupported_trade_output(ctx: TradeContext) -> PricingEngineOutput:
    estimate = UnitEstimate(evidence=[f"No unit pricing profile for trade: {ctx.trade}"])
    classification = PricingClassification()
    benchmark = BenchmarkRange()
    logger.info("pricing_trade_unsupported", trade=ctx.trade, code=ErrorCode.UNSUPPORTED_TRADE)
    return PricingEngineOutput(
        pricing_position=classification.pricing_position_label,
        job_units=None,
        job_unit_name="",
        effective_unit_price=None,
        pricing_confidence=0.0,
        estimate_confidence=0.0,
        classification=classification,
        unit_estimate=estimate,
        benchmark=benchmark,
        trade_context=ctx,
        benchmark_snapshot=_build_snapshot(ctx, "", estimate, benchmark),
        pricing_engine_result=_build_result(classification, "", estimate, benchmark),
    )


# =============================================================================
# Public API
# =============================================================================


def run_pricing_engine(
    submission: Any,
    analysis: Any,
    line_items: Any,
    store: BenchmarkStore
) -> PricingEngineOutput:
    """Run the pricing benchmark for one submission.

    Args:
        submission: SubmissionRecord or dict (project_type, region_key,
            address, report_json, ai_result, project_value).
        analysis: Prior AnalysisSnapshot or dict, or None.
        line_items: LineItemRow objects or dicts.
        store: Benchmark store to query.

    Returns:
        PricingEngineOutput. A missing quantity or benchmark yields
        pricing_confidence 0 rather than an error.
    """
    sub = _as_submission(submission)
    prior = _as_analysis(analysis)
    rows = _as_line_items(line_items)

    ctx = resolve_trade_context(sub, prior)
    profile = get_trade_profile(ctx.trade)
    if profile is None:
        return _unsupported_trade_output(ctx)

    unit_basis = profile.unit_basis
    estimate = profile.estimate_units(rows, prior, _report_fragment(sub), sub.project_value)
    log_unit_estimate(profile.trade, estimate)

    estimate_confidence = estimate.confidence
    benchmark = BenchmarkRange()
    if estimate.job_units is not None:
        benchmark = fetch_unit_benchmark(
            store,
            trade=ctx.trade,
            subtrade=ctx.subtrade,
            region_key=ctx.region_key,
            unit_basis=unit_basis,
        )
        if benchmark.is_empty:
            estimate_confidence = min(estimate_confidence, NO_BENCHMARK_CONFIDENCE_CAP)

    classification = classify_pricing(
        estimate.effective_unit_price,
        benchmark.unit_low,
        benchmark.unit_mid,
        benchmark.unit_high,
        estimate.job_units,
    )

    snapshot = _build_snapshot(ctx, unit_basis, estimate, benchmark)
    log_benchmark_snapshot(snapshot)

    output = PricingEngineOutput(
        pricing_position=classification.pricing_position_label,
        job_units=estimate.job_units,
        job_unit_name=unit_basis,
        effective_unit_price=estimate.effective_unit_price,
        pricing_confidence=classification.pricing_confidence,
        estimate_confidence=estimate_confidence,
        classification=classification,
        unit_estimate=estimate,
        benchmark=benchmark,
        trade_context=ctx,
        benchmark_snapshot=snapshot,
        pricing_engine_result=_build_result(classification, unit_basis, estimate, benchmark),
    )
    log_pricing_result(output)
    return output


def pricing_output_to_row(output: PricingEngineOutput) -> Dict[str, Any]:
    """Columns written to the submission analysis row by the caller."""
    return {
        "pricing_position": output.pricing_position,
        "job_units": output.job_units,
        "job_unit_name": output.job_unit_name,
        "effective_unit_price": output.effective_unit_price,
        "pricing_confidence": output.pricing_confidence,
        "benchmark_snapshot": output.benchmark_snapshot,
        "pricing_engine_result": output.pricing_engine_result,
        "trade": output.trade_context.trade,
        "subtrade": output.trade_context.subtrade,
        "region_key": output.trade_context.region_key,
        "unit_basis": output.job_unit_name or None,
        "normalized_quantity": output.job_units,
        "unit_price_estimated": output.effective_unit_price,
    }
