"""Finding Classifier for QuoteShield.

Turns the deposit rule, AI-provided findings and Score Engine findings into
a short, deduplicated, severity-tagged list for homeowner display. Risk
topics always carry the ``risk`` severity; text that matches nothing is
treated as a warning, never as positive.
"""

import re
from typing import Any, Iterable, List, Optional, Set

import structlog

from config.settings import settings
from models.findings import FindingSeverity, PreviewFinding
from utils.numbers import finite_number

logger = structlog.get_logger()

# =============================================================================
# Constants
# =============================================================================

MIN_FINDING_LENGTH = 10
DEFAULT_MAX_ITEMS = 4

HIGH_DEPOSIT_PERCENT = 40
ELEVATED_DEPOSIT_PERCENT = 30

RISK_KEYWORDS = re.compile(
    r"deposit|upfront|missing\s+scope|scope\s+gap|warranty\s+gap|limited\s+warranty"
    r"|timeline\s+unclear|no\s+timeline|payment\s+risk",
    re.IGNORECASE,
)
WARNING_KEYWORDS = re.compile(
    r"unclear|slightly|may\s+need|could\s+improve|consider\s+clarifying",
    re.IGNORECASE,
)

DEPOSIT_HIGH_TEXT = "The required deposit appears higher than typical industry ranges."
DEPOSIT_ELEVATED_TEXT = "The deposit is slightly above common industry ranges."
DEPOSIT_OK_TEXT = "Deposit amount appears within common industry ranges."
DEFAULT_FINDING_TEXT = "This snapshot highlights areas to double-check before signing."


# =============================================================================
# Rules
# =============================================================================


def classify_severity(text: str) -> FindingSeverity:
    """Classify finding text by keyword; unmatched text is a warning."""
    if RISK_KEYWORDS.search(text):
        return FindingSeverity.RISK
    if WARNING_KEYWORDS.search(text):
        return FindingSeverity.WARNING
    return FindingSeverity.WARNING


def deposit_finding(deposit_percent: Any) -> Optional[PreviewFinding]:
    """Build the deposit finding.

    >= 40 is a risk, 30-40 (exclusive) a warning, <= 30 positive. A missing
    or non-numeric deposit yields no finding.
    """
    pct = finite_number(deposit_percent)
    if pct is None:
        return None
    if pct >= HIGH_DEPOSIT_PERCENT:
        return PreviewFinding(text=DEPOSIT_HIGH_TEXT, severity=FindingSeverity.RISK)
    if pct > ELEVATED_DEPOSIT_PERCENT:
        return PreviewFinding(text=DEPOSIT_ELEVATED_TEXT, severity=FindingSeverity.WARNING)
    return PreviewFinding(text=DEPOSIT_OK_TEXT, severity=FindingSeverity.POSITIVE)


def usable_finding_texts(raw: Any) -> List[str]:
    """Trimmed strings of at least MIN_FINDING_LENGTH characters."""
    if not isinstance(raw, (list, tuple)):
        return []
    return [
        s.strip()
        for s in raw
        if isinstance(s, str) and len(s.strip()) >= MIN_FINDING_LENGTH
    ]


def to_severity_findings(raw: Any, max_items: int = DEFAULT_MAX_ITEMS) -> List[PreviewFinding]:
    """Convert raw strings into severity-tagged findings (at most max_items)."""
    if max_items <= 0:
        return []
    return [
        PreviewFinding(text=text, severity=classify_severity(text))
        for text in usable_finding_texts(raw)[:max_items]
    ]


def _append_unique(
    out: List[PreviewFinding],
    seen: Set[str],
    findings: Iterable[PreviewFinding],
    max_items: int
) -> None:
    for finding in findings:
        if len(out) >= max_items:
            return
        if finding.text in seen:
            continue
        out.append(finding)
        seen.add(finding.text)


# =============================================================================
# Public API
# =============================================================================


def build_preview_findings(
    deposit_percent: Any,
    ai_findings: Any,
    score_findings: Any,
    max_items: Optional[int] = None
) -> List[PreviewFinding]:
    """Build the final preview findings list.

    Order: deposit finding, AI findings, then Score Engine findings while
    room remains. Duplicates (by trimmed text) are dropped and a default
    warning is emitted if nothing qualifies.

    Args:
        deposit_percent: Deposit percentage, or None.
        ai_findings: Finding strings from the AI result.
        score_findings: Raw finding strings from the Score Engine.
        max_items: List size cap (defaults to settings.preview_findings_max).

    Returns:
        At most max_items PreviewFinding entries.
    """
    limit = max_items if max_items is not None else settings.preview_findings_max
    limit = max(0, int(limit))
    if limit == 0:
        return []

    out: List[PreviewFinding] = []
    seen: Set[str] = set()

    deposit = deposit_finding(deposit_percent)
    if deposit is not None:
        _append_unique(out, seen, [deposit], limit)

    _append_unique(out, seen, to_severity_findings(ai_findings, limit), limit)
    _append_unique(out, seen, to_severity_findings(score_findings, limit), limit)

    if not out:
        out.append(PreviewFinding(text=DEFAULT_FINDING_TEXT, severity=FindingSeverity.WARNING))

    logger.debug(
        "preview_findings_built",
        count=len(out),
        risk_count=sum(1 for f in out if f.severity == FindingSeverity.RISK.value),
    )
    return out[:limit]
