"""Trade profile definition for QuoteShield pricing.

A trade profile bundles what the pricing engine needs to know about one
trade: its benchmark unit basis, how to estimate job units from a quote and
how to pick a subtrade.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from models.pricing import AnalysisSnapshot, LineItemRow, UnitEstimate


UnitEstimator = Callable[
    [List[LineItemRow], Optional[AnalysisSnapshot], Optional[Dict[str, Any]], Optional[float]],
    UnitEstimate,
]
SubtradeClassifier = Callable[[Optional[str], Optional[Dict[str, Any]]], str]


@dataclass(frozen=True)
class TradeProfile:
    """Pricing profile for one trade.

    Attributes:
        trade: Canonical trade name used as the benchmark key.
        default_subtrade: Subtrade used when nothing more specific is known.
        unit_basis: Canonical unit for benchmark prices (e.g. "square").
        estimate_units: Callable(line_items, analysis, report, project_value).
        classify_subtrade: Callable(project_type, report) returning a subtrade.
        aliases: Lowercase names that resolve to this profile.
    """

    trade: str
    default_subtrade: str
    unit_basis: str
    estimate_units: UnitEstimator
    classify_subtrade: SubtradeClassifier
    aliases: tuple = ()
