"""Models for processed updates, stored interactions and member insights."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from models.extraction_models import ExtractionOutcome, ExtractionResult


class ImpactLevel(str, Enum):
    """Business impact levels, ordered low < medium < high."""
    low = "low"
    medium = "medium"
    high = "high"


class BusinessImpact(BaseModel):
    """Computed business impact of an update."""
    level: ImpactLevel = Field(
        default=ImpactLevel.low,
        description="Overall impact level"
    )
    reasons: List[str] = Field(
        default_factory=list,
        description="Every rule that matched, in evaluation order"
    )


class LearnedPattern(BaseModel):
    """A pattern learned by the memory layer for a team member (read-only here)."""
    type: str
    confidence: float
    suggestion: str


class LearnedContextEntry(BaseModel):
    """A learned pattern as attached to an enriched record."""
    pattern_type: str
    confidence: float
    suggestion: str


class EnrichedRecord(ExtractionResult):
    """An ExtractionResult extended with source context and business impact.

    learned_context stays None when the member has no learned patterns, which
    is distinct from an empty list. Use to_payload() to serialize it the way
    consumers expect (the field is omitted when unset).
    """
    source_role: str = Field(
        description="Role of the team member who sent the update"
    )
    source_focus: List[str] = Field(
        default_factory=list,
        description="Focus areas of the team member"
    )
    learned_context: Optional[List[LearnedContextEntry]] = Field(
        default=None,
        description="Learned patterns for this member, present only if any exist"
    )
    business_impact: BusinessImpact = Field(
        default_factory=BusinessImpact,
        description="Computed business impact classification"
    )

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict; learned_context is left out when unset."""
        payload = self.model_dump(mode="json")
        if self.learned_context is None:
            payload.pop("learned_context", None)
        return payload


class ProcessedUpdate(BaseModel):
    """Result of processing one update.

    A failed run produces the same shape with error=True, so callers never
    need a separate error branch.
    """
    id: str = Field(..., description="Unique identifier of this update")
    timestamp: str = Field(..., description="ISO-8601 processing timestamp")
    source: str = Field(..., description="Name of the team member")
    raw_input: str = Field(..., description="Original update text")
    extracted_data: EnrichedRecord
    confidence: float = Field(..., ge=0.0, le=1.0)
    requires_attention: bool
    outcome: ExtractionOutcome = Field(
        default=ExtractionOutcome.parsed,
        description="How extraction ended: parsed, parse_failed or pipeline_failed"
    )
    error: bool = False
    error_message: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json")
        payload["extracted_data"] = self.extracted_data.to_payload()
        if not self.error:
            payload.pop("error_message", None)
        return payload


class Interaction(BaseModel):
    """A persisted team update interaction. Append-only."""
    id: str
    agent_id: str
    team_member: str
    timestamp: datetime
    raw_input: str
    extracted_data: EnrichedRecord
    type: str = "team_update"
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CommonTheme(BaseModel):
    theme: str
    frequency: int


class ProductivityPatterns(BaseModel):
    """Activity metrics over the last day and week."""
    updates_today: int = 0
    updates_this_week: int = 0
    avg_confidence: float = 0.0
    high_priority_items: int = 0


class TeamMemberInsights(BaseModel):
    """Longitudinal insights for one team member."""
    team_member: str
    role: str
    recent_activity: int
    common_themes: List[CommonTheme] = Field(default_factory=list)
    productivity_patterns: ProductivityPatterns = Field(default_factory=ProductivityPatterns)
