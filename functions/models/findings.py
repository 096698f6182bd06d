"""Finding models for QuoteShield.

Homeowner-facing preview findings, the quality report that carries them
and the upsell copy shown next to the primary risk category.
"""

from enum import Enum
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, Field

from models.score import CategoryScore, Confidence, OverallRating


class FindingSeverity(str, Enum):
    """Severity of a preview finding."""

    POSITIVE = "positive"
    WARNING = "warning"
    RISK = "risk"


class PreviewFinding(BaseModel):
    """Short, severity-tagged sentence shown before unlocking the report."""

    text: str = Field(description="Finding text")
    severity: FindingSeverity = Field(description="Finding severity")

    class Config:
        use_enum_values = True
        frozen = True


class PremiumMessage(BaseModel):
    """Upsell headline and description for a risk category."""

    headline: str
    description: str


class QualityReport(BaseModel):
    """Quality/risk half of a stored analysis.

    Mirrors ScoreReport, with the raw findings replaced by the classified
    preview list and the primary risk category attached.
    """

    overall_score: int = Field(ge=0, le=100)
    overall_rating: OverallRating
    confidence: Confidence
    categories: List[CategoryScore]
    preview_findings: List[PreviewFinding] = Field(default_factory=list)
    locked_findings_count: int = Field(ge=0)
    score_breakdown: Dict[str, Any] = Field(default_factory=dict)
    deposit_percent: Optional[float] = Field(
        default=None,
        description="Deposit percentage read from the AI result"
    )
    primary_risk_category: Optional[CategoryScore] = Field(
        default=None,
        description="Category with the highest risk label"
    )
    premium_message: Optional[PremiumMessage] = Field(
        default=None,
        description="Upsell copy for the primary risk category"
    )

    class Config:
        use_enum_values = True
