"""Score Engine constants for QuoteShield.

All category bases, weights and signal caps used by the free score live in
one frozen config so alternate weightings can be passed to the engine
without touching the formulas.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and caps for the free quote score.

    Attributes:
        max_penalty: Penalty (0-100 scale) applied when a signal count
            reaches its cap.
        *_base: Starting score for each category before adjustments.
        *_clarity_weight / *_doc_weight: Contribution of the 0-100 line-item
            clarity and document quality values.
        *_penalty_weight: Multiplier applied to the capped signal penalty.
        *_cap: Signal count at which a penalty saturates.
        weight_*: Category weights in the overall score.
        low_concern_threshold / moderate_concern_threshold: Score bands for
            the overall rating and per-category risk.
    """

    max_penalty: float = 45.0

    # Labor
    labor_base: float = 70.0
    labor_clarity_weight: float = 0.2
    labor_doc_weight: float = 0.1
    labor_penalty_weight: float = 0.35

    # Materials
    materials_base: float = 68.0
    materials_clarity_weight: float = 0.15
    materials_penalty_weight: float = 0.55

    # Scope
    scope_base: float = 72.0
    scope_clarity_weight: float = 0.1
    scope_penalty_weight: float = 0.8

    # Warranty
    warranty_base: float = 75.0
    warranty_penalty_weight: float = 1.0

    # Timeline
    timeline_base: float = 78.0
    timeline_penalty_weight: float = 0.9

    # Signal caps
    pricing_outlier_cap: int = 6
    missing_scope_cap: int = 5
    warranty_cap: int = 4
    timeline_cap: int = 4

    # Overall weights
    weight_labor: float = 0.20
    weight_materials: float = 0.20
    weight_scope: float = 0.25
    weight_warranty: float = 0.20
    weight_timeline: float = 0.10
    weight_doc: float = 0.025
    weight_clarity: float = 0.025

    # Rating bands
    low_concern_threshold: float = 80.0
    moderate_concern_threshold: float = 60.0

    # Confidence bands (average of doc quality and clarity, 0..1)
    high_confidence_threshold: float = 0.8
    medium_confidence_threshold: float = 0.55

    # Raw finding gates
    pricing_finding_min_signals: int = 2
    missing_scope_finding_min_signals: int = 1
    warranty_finding_min_signals: int = 1
    timeline_finding_min_signals: int = 1

    # Floor for the "N more findings" counter
    min_locked_findings: int = 3


DEFAULT_SCORING_CONFIG = ScoringConfig()
