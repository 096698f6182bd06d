"""Score models for QuoteShield.

Pydantic models for the normalized score inputs and the free score report
produced by the Score Engine.
"""

from enum import Enum
from typing import Dict, Any, List

from pydantic import BaseModel, Field, field_validator

from utils.numbers import clamp01, clamp_int, finite_number


class Risk(str, Enum):
    """Per-category risk label."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class OverallRating(str, Enum):
    """Overall quote rating.

    Shares the 80/60 thresholds with Risk but is kept as a separate enum:
    the rating is homeowner-facing copy, the risk label is a category tag.
    """

    LOW_CONCERN = "Low Concern"
    MODERATE_CONCERN = "Moderate Concern"
    HIGH_CONCERN = "High Concern"


class Confidence(str, Enum):
    """Extraction quality confidence.

    Derived only from document quality and line-item clarity. It says how
    much to trust the score inputs and is unrelated to pricing_confidence
    on the pricing benchmark.
    """

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


CATEGORY_NAMES = ("Labor", "Materials", "Scope", "Warranty", "Timeline")

# Upper bounds for explicit signal counts
SIGNAL_CAPS: Dict[str, int] = {
    "missing_scope_signals": 10,
    "pricing_outlier_signals": 10,
    "warranty_signals": 5,
    "timeline_signals": 5,
}


class ScoreInputs(BaseModel):
    """Normalized inputs to the Score Engine.

    Every field is clamped into its range on construction, so an instance
    is always safe to score. Non-numeric values fall back to the field's
    neutral default.
    """

    doc_quality: float = Field(default=0.55, ge=0.0, le=1.0, description="Document quality (0-1)")
    line_item_clarity: float = Field(default=0.5, ge=0.0, le=1.0, description="Line item clarity (0-1)")
    missing_scope_signals: int = Field(default=0, ge=0, le=10, description="Missing/unclear scope items")
    pricing_outlier_signals: int = Field(default=0, ge=0, le=10, description="Pricing outliers")
    warranty_signals: int = Field(default=0, ge=0, le=5, description="Warranty red flags")
    timeline_signals: int = Field(default=0, ge=0, le=5, description="Timeline red flags")

    class Config:
        frozen = True

    @field_validator("doc_quality", "line_item_clarity", mode="before")
    @classmethod
    def clamp_quality(cls, v, info):
        n = finite_number(v)
        if n is None:
            return cls.model_fields[info.field_name].default
        return clamp01(n)

    @field_validator(
        "missing_scope_signals",
        "pricing_outlier_signals",
        "warranty_signals",
        "timeline_signals",
        mode="before",
    )
    @classmethod
    def clamp_signals(cls, v, info):
        n = finite_number(v)
        if n is None:
            return 0
        return clamp_int(n, 0, SIGNAL_CAPS[info.field_name])

    @property
    def total_signals(self) -> int:
        return (
            self.pricing_outlier_signals
            + self.missing_scope_signals
            + self.warranty_signals
            + self.timeline_signals
        )


class CategoryScore(BaseModel):
    """Score and risk label for one quote category."""

    name: str = Field(description="Category name")
    score: int = Field(ge=0, le=100, description="Category score (0-100)")
    risk: Risk = Field(description="Risk label for the category")

    class Config:
        use_enum_values = True


class ScoreReport(BaseModel):
    """Free score report for a quote.

    Computed fresh on every analysis or re-score; replaces any prior value.
    """

    overall_score: int = Field(ge=0, le=100, description="Overall score (0-100)")
    overall_rating: OverallRating = Field(description="Overall concern rating")
    confidence: Confidence = Field(description="Input quality confidence")
    categories: List[CategoryScore] = Field(description="Five fixed categories")
    preview_findings: List[str] = Field(
        default_factory=list,
        description="Raw finding strings gated by signal thresholds"
    )
    locked_findings_count: int = Field(
        ge=0,
        description="Findings advertised behind the paywall"
    )
    score_breakdown: Dict[str, Any] = Field(
        default_factory=dict,
        description="Inputs used to compute the score"
    )

    class Config:
        use_enum_values = True

    def get_category(self, name: str) -> CategoryScore:
        """Look up a category by name.

        Raises:
            KeyError: If the category does not exist.
        """
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)
