"""Utility modules for QuoteShield functions."""

from utils.analysis_logger import (
    configure_logging,
    log_score_report,
    log_unit_estimate,
    log_benchmark_snapshot,
    log_pricing_result,
    format_pricing_summary,
)
from utils.region import parse_address_for_region, build_region_key

__all__ = [
    "configure_logging",
    "log_score_report",
    "log_unit_estimate",
    "log_benchmark_snapshot",
    "log_pricing_result",
    "format_pricing_summary",
    "parse_address_for_region",
    "build_region_key",
]
