"""Business rules applied to extracted updates.

All functions here are pure: same record in, same answer out.
"""
from typing import List

from models.extraction_models import (
    ClientStatus,
    ExtractionResult,
    SeverityLevel,
    UrgencyLevel,
)
from models.update_models import (
    BusinessImpact,
    ImpactLevel,
    LearnedContextEntry,
    LearnedPattern,
)


REVENUE_REASON = "Revenue opportunity identified"
CLIENT_RISK_REASON = "Client satisfaction risk"
HIGH_PRIORITY_REASON = "High priority items"


def assess_business_impact(extraction: ExtractionResult) -> BusinessImpact:
    """Classify the business impact of an extraction.

    Rules run in order and reasons accumulate:
    1. any revenue opportunity -> high
    2. any client with negative status -> high
    3. any high-urgency priority -> low becomes medium, otherwise unchanged
    """
    level = ImpactLevel.low
    reasons: List[str] = []

    if extraction.revenue_info:
        level = ImpactLevel.high
        reasons.append(REVENUE_REASON)

    if any(c.status == ClientStatus.negative for c in extraction.client_info):
        level = ImpactLevel.high
        reasons.append(CLIENT_RISK_REASON)

    if any(p.urgency == UrgencyLevel.high for p in extraction.priorities):
        if level == ImpactLevel.low:
            level = ImpactLevel.medium
        reasons.append(HIGH_PRIORITY_REASON)

    return BusinessImpact(level=level, reasons=reasons)


def assess_urgency(extraction: ExtractionResult) -> bool:
    """Whether an update needs someone's attention.

    Independent of business impact: a deadline alone is enough.
    """
    has_high_priority = any(p.urgency == UrgencyLevel.high for p in extraction.priorities)
    has_deadline = any(p.deadline is not None for p in extraction.priorities)
    has_revenue = len(extraction.revenue_info) > 0
    has_critical_tech = any(t.severity == SeverityLevel.high for t in extraction.technical_info)

    return has_high_priority or has_deadline or has_revenue or has_critical_tech


def apply_learning_patterns(patterns: List[LearnedPattern]) -> List[LearnedContextEntry]:
    """Map learned patterns onto the learned_context entries of a record."""
    return [
        LearnedContextEntry(
            pattern_type=pattern.type,
            confidence=pattern.confidence,
            suggestion=pattern.suggestion,
        )
        for pattern in patterns
    ]
