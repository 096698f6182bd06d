"""Pricing benchmark models for QuoteShield.

Pydantic models for line items, prior analysis snapshots, unit estimates,
benchmark ranges and pricing classifications used by the pricing engine.
"""

from enum import Enum
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from utils.numbers import coerce_number


# =============================================================================
# ENUMS
# =============================================================================


class PricingPosition(str, Enum):
    """Quote unit price position against the market range."""

    BELOW_MARKET = "Below Market Range (Potential Good Deal)"
    WITHIN_RANGE = "Within Expected Range"
    ABOVE_MARKET = "Above Market Range (Review Recommended)"
    SIGNIFICANTLY_ABOVE = "Significantly Above Market (Investigation Recommended)"


# =============================================================================
# INPUT MODELS
# =============================================================================


def _lenient_number(v: Any) -> Optional[float]:
    return coerce_number(v)


def _lenient_text(v: Any) -> Optional[str]:
    if v is None:
        return None
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


class LineItemRow(BaseModel):
    """Stored quote line item.

    Read-only input to the pricing engine; any field may be null and
    malformed values are read as null.
    """

    description_raw: Optional[str] = None
    description_normalized: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    unit_price: Optional[float] = None
    line_total: Optional[float] = None
    category: Optional[str] = None
    sort_order: Optional[int] = None

    class Config:
        frozen = True
        extra = "ignore"

    @field_validator("quantity", "unit_price", "line_total", mode="before")
    @classmethod
    def parse_number(cls, v):
        return _lenient_number(v)

    @field_validator("description_raw", "description_normalized", "unit", "category", mode="before")
    @classmethod
    def parse_text(cls, v):
        return _lenient_text(v)

    @field_validator("sort_order", mode="before")
    @classmethod
    def parse_sort_order(cls, v):
        n = _lenient_number(v)
        return int(n) if n is not None else None

    def text_parts(self, include_unit: bool = True) -> List[str]:
        """Non-empty description (and unit) strings in a fixed order."""
        parts = [self.description_raw, self.description_normalized]
        if include_unit:
            parts.append(self.unit)
        return [p for p in parts if p]


class AnalysisSnapshot(BaseModel):
    """Prior submission analysis row, as far as the pricing engine reads it."""

    trade: Optional[str] = None
    subtrade: Optional[str] = None
    region_key: Optional[str] = None
    unit_basis: Optional[str] = None
    normalized_quantity: Optional[float] = None
    unit_price_estimated: Optional[float] = None

    class Config:
        extra = "ignore"

    @field_validator("normalized_quantity", "unit_price_estimated", mode="before")
    @classmethod
    def parse_number(cls, v):
        return _lenient_number(v)

    @field_validator("trade", "subtrade", "region_key", "unit_basis", mode="before")
    @classmethod
    def parse_text(cls, v):
        return _lenient_text(v)


class SubmissionRecord(BaseModel):
    """Submission fields consumed by the pricing engine."""

    project_type: Optional[str] = None
    region_key: Optional[str] = None
    address: Optional[str] = None
    report_json: Optional[Dict[str, Any]] = None
    ai_result: Optional[Dict[str, Any]] = None
    project_value: Optional[float] = None

    class Config:
        extra = "ignore"

    @field_validator("project_value", mode="before")
    @classmethod
    def parse_number(cls, v):
        return _lenient_number(v)

    @field_validator("project_type", "region_key", "address", mode="before")
    @classmethod
    def parse_text(cls, v):
        return _lenient_text(v)

    @field_validator("report_json", "ai_result", mode="before")
    @classmethod
    def parse_report(cls, v):
        return v if isinstance(v, dict) else None


# =============================================================================
# OUTPUT MODELS
# =============================================================================


class TradeContext(BaseModel):
    """Benchmark lookup key for one submission."""

    trade: str
    subtrade: str
    region_key: str


class UnitEstimate(BaseModel):
    """Canonical job quantity and implied unit price for one quote.

    evidence records which extraction rule fired; extraction is heuristic
    and a silent miss must be diagnosable from the stored result alone.
    """

    job_units: Optional[float] = Field(default=None, description="Job quantity in the unit basis")
    scope_total: Optional[float] = Field(default=None, description="Quote total attributed to the trade scope")
    effective_unit_price: Optional[float] = Field(default=None, description="scope_total / job_units")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Quantity extraction confidence")
    evidence: List[str] = Field(default_factory=list, description="Audit trail of extraction rules")

    @property
    def roofing_scope_total(self) -> Optional[float]:
        return self.scope_total

    @property
    def effective_per_square(self) -> Optional[float]:
        return self.effective_unit_price


class BenchmarkRange(BaseModel):
    """Market price-per-unit range for a trade/subtrade/region/unit basis."""

    unit_low: Optional[float] = None
    unit_mid: Optional[float] = None
    unit_high: Optional[float] = None
    source: Optional[str] = None
    effective_date: Optional[str] = None
    benchmark_row: Dict[str, Any] = Field(default_factory=dict, description="Raw row for the snapshot")

    @property
    def is_empty(self) -> bool:
        return self.unit_low is None and self.unit_high is None


class PricingClassification(BaseModel):
    """Quote unit price position against a benchmark range.

    pricing_confidence is 0 whenever a required input is missing; the label
    is then a neutral placeholder, not a classification.
    """

    pricing_position: str = Field(default=PricingPosition.WITHIN_RANGE.value)
    pricing_position_label: str = Field(default=PricingPosition.WITHIN_RANGE.value)
    pricing_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    delta_vs_mid: Optional[float] = None
    estimated_overage_mid: Optional[float] = None
    estimated_overage_high: Optional[float] = None
    pct_vs_midpoint: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return self.pricing_confidence > 0


class PricingEngineOutput(BaseModel):
    """Pricing benchmark half of a stored analysis."""

    pricing_position: str
    job_units: Optional[float] = None
    job_unit_name: str
    effective_unit_price: Optional[float] = None
    pricing_confidence: float = 0.0
    estimate_confidence: float = 0.0
    classification: PricingClassification
    unit_estimate: UnitEstimate
    benchmark: BenchmarkRange
    trade_context: TradeContext
    benchmark_snapshot: Dict[str, Any] = Field(default_factory=dict)
    pricing_engine_result: Dict[str, Any] = Field(default_factory=dict)
