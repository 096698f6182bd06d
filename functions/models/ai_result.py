"""AI result schema models for QuoteShield.

The quote extraction result has two shapes. The current schema carries
explicit ``signals`` and/or ``quality`` objects; the legacy schema only has
the raw report sections (scope, costs, red_flags, timeline) that signals
must be derived from. ``parse_ai_result`` resolves the shape once so the
Signal Adapter works on a typed value instead of probing dicts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from utils.numbers import finite_number


@dataclass(frozen=True)
class RedFlag:
    """One AI-reported red flag."""

    title: Optional[str] = None
    detail: Optional[str] = None

    @property
    def text(self) -> str:
        return " ".join(p for p in (self.title, self.detail) if p)


@dataclass(frozen=True)
class ExplicitSignals:
    """Signal counts reported directly by the current schema."""

    pricing_outliers: Optional[float] = None
    missing_scope: Optional[float] = None
    warranty_red_flags: Optional[float] = None
    timeline_red_flags: Optional[float] = None

    @property
    def is_present(self) -> bool:
        return any(
            v is not None
            for v in (
                self.pricing_outliers,
                self.missing_scope,
                self.warranty_red_flags,
                self.timeline_red_flags,
            )
        )


@dataclass(frozen=True)
class ExplicitQuality:
    """Quality fractions reported directly by the current schema."""

    doc_quality: Optional[float] = None
    line_item_clarity: Optional[float] = None

    @property
    def is_present(self) -> bool:
        return self.doc_quality is not None or self.line_item_clarity is not None


@dataclass(frozen=True)
class ReportSections:
    """Raw report sections shared by both schemas.

    Legacy results rely on these for every signal; current results use them
    for whichever of signals/quality is absent.
    """

    confidence: Optional[str] = None
    line_item_count: int = 0
    missing_or_unclear_count: int = 0
    high_cost_flag_count: int = 0
    red_flags: Tuple[RedFlag, ...] = ()
    timeline_present: Optional[bool] = None
    timeline_clarity: Optional[str] = None
    deposit_percent: Optional[float] = None
    preview_findings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CurrentAiResult:
    """AI result with explicit signals and/or quality objects."""

    sections: ReportSections = field(default_factory=ReportSections)
    signals: Optional[ExplicitSignals] = None
    quality: Optional[ExplicitQuality] = None


@dataclass(frozen=True)
class LegacyAiResult:
    """AI result without explicit signals or quality."""

    sections: ReportSections = field(default_factory=ReportSections)


AiResult = Union[CurrentAiResult, LegacyAiResult]


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _parse_red_flags(value: Any) -> Tuple[RedFlag, ...]:
    flags = []
    for item in _as_list(value):
        if isinstance(item, dict):
            flags.append(RedFlag(title=_as_str(item.get("title")), detail=_as_str(item.get("detail"))))
        elif isinstance(item, str):
            flags.append(RedFlag(title=item))
    return tuple(flags)


def _parse_sections(raw: Dict[str, Any]) -> ReportSections:
    summary = _as_dict(raw.get("summary"))
    scope = _as_dict(raw.get("scope"))
    costs = _as_dict(raw.get("costs"))
    timeline = _as_dict(raw.get("timeline"))
    payment = _as_dict(raw.get("payment"))

    timeline_present = timeline.get("timeline_present")
    if "timeline" in raw and raw.get("timeline") is None:
        # Explicit null timeline counts as absent
        timeline_present = False

    return ReportSections(
        confidence=_as_str(summary.get("confidence")),
        line_item_count=len(_as_list(costs.get("line_items"))),
        missing_or_unclear_count=len(_as_list(scope.get("missing_or_unclear"))),
        high_cost_flag_count=len(_as_list(costs.get("high_cost_flags"))),
        red_flags=_parse_red_flags(raw.get("red_flags")),
        timeline_present=timeline_present if isinstance(timeline_present, bool) else None,
        timeline_clarity=_as_str(timeline.get("timeline_clarity")),
        deposit_percent=finite_number(payment.get("deposit_percent")),
        preview_findings=tuple(
            s for s in _as_list(raw.get("preview_findings")) if isinstance(s, str)
        ),
    )


def parse_ai_result(raw: Any) -> AiResult:
    """Resolve a raw AI result dict into the current or legacy schema.

    A signals/quality object counts as present when any of its fields is a
    finite number. Anything that is not a dict parses as an empty legacy
    result.

    Args:
        raw: Decoded AI result JSON (or None).

    Returns:
        CurrentAiResult or LegacyAiResult.
    """
    data = _as_dict(raw)
    sections = _parse_sections(data)

    raw_signals = _as_dict(data.get("signals"))
    signals = ExplicitSignals(
        pricing_outliers=finite_number(raw_signals.get("pricing_outliers")),
        missing_scope=finite_number(raw_signals.get("missing_scope")),
        warranty_red_flags=finite_number(raw_signals.get("warranty_red_flags")),
        timeline_red_flags=finite_number(raw_signals.get("timeline_red_flags")),
    )
    raw_quality = _as_dict(data.get("quality"))
    quality = ExplicitQuality(
        doc_quality=finite_number(raw_quality.get("doc_quality")),
        line_item_clarity=finite_number(raw_quality.get("line_item_clarity")),
    )

    if signals.is_present or quality.is_present:
        return CurrentAiResult(
            sections=sections,
            signals=signals if signals.is_present else None,
            quality=quality if quality.is_present else None,
        )
    return LegacyAiResult(sections=sections)
