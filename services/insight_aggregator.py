"""Read-side aggregation of a team member's stored interactions."""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from models.extraction_models import UrgencyLevel
from models.update_models import CommonTheme, Interaction, ProductivityPatterns

THEME_LIMIT = 5


def identify_themes(interactions: List[Interaction], limit: int = THEME_LIMIT) -> List[CommonTheme]:
    """Most frequent key insights across interactions.

    Insights are compared case-insensitively. Ties keep the order in which
    the themes were first seen.
    """
    counts: Dict[str, int] = {}
    for interaction in interactions:
        for insight in interaction.extracted_data.key_insights:
            key = insight.lower()
            counts[key] = counts.get(key, 0) + 1

    # sorted() is stable and dicts keep insertion order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [CommonTheme(theme=theme, frequency=count) for theme, count in ranked[:limit]]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def analyze_productivity(
    interactions: List[Interaction],
    now: Optional[datetime] = None
) -> ProductivityPatterns:
    """Activity counts for the last 24 hours and 7 days relative to now."""
    now = _as_utc(now or datetime.now(timezone.utc))
    day_ago = now - timedelta(hours=24)
    week_ago = now - timedelta(days=7)

    today = [i for i in interactions if _as_utc(i.timestamp) > day_ago]
    weekly = [i for i in interactions if _as_utc(i.timestamp) > week_ago]

    avg_confidence = (
        sum(i.extracted_data.confidence for i in weekly) / len(weekly)
        if weekly else 0.0
    )
    high_priority_items = sum(
        1
        for i in weekly
        for p in i.extracted_data.priorities
        if p.urgency == UrgencyLevel.high
    )

    return ProductivityPatterns(
        updates_today=len(today),
        updates_this_week=len(weekly),
        avg_confidence=avg_confidence,
        high_priority_items=high_priority_items,
    )
