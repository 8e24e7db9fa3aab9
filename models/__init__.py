"""Data models for the team update intelligence pipeline."""
from .team_member import TeamMemberProfile, TeamConfig
from .extraction_models import (
    ExtractionResult,
    ExtractionOutcome,
    Priority,
    ActionItem,
    ClientInfo,
    TechnicalInfo,
    RevenueInfo,
    UrgencyLevel,
    SeverityLevel,
    ProbabilityLevel,
    ClientStatus,
    PARSE_FAILED_CONFIDENCE,
    PIPELINE_FAILED_CONFIDENCE,
    UNREPORTED_CONFIDENCE,
)
from .update_models import (
    BusinessImpact,
    ImpactLevel,
    LearnedPattern,
    LearnedContextEntry,
    EnrichedRecord,
    ProcessedUpdate,
    Interaction,
    CommonTheme,
    ProductivityPatterns,
    TeamMemberInsights,
)
from .db_models import TeamInteractionModel, LearnedPatternModel

__all__ = [
    # Team configuration
    "TeamMemberProfile",
    "TeamConfig",
    # Extraction models
    "ExtractionResult",
    "ExtractionOutcome",
    "Priority",
    "ActionItem",
    "ClientInfo",
    "TechnicalInfo",
    "RevenueInfo",
    "UrgencyLevel",
    "SeverityLevel",
    "ProbabilityLevel",
    "ClientStatus",
    "PARSE_FAILED_CONFIDENCE",
    "PIPELINE_FAILED_CONFIDENCE",
    "UNREPORTED_CONFIDENCE",
    # Update models
    "BusinessImpact",
    "ImpactLevel",
    "LearnedPattern",
    "LearnedContextEntry",
    "EnrichedRecord",
    "ProcessedUpdate",
    "Interaction",
    "CommonTheme",
    "ProductivityPatterns",
    "TeamMemberInsights",
    # Database models
    "TeamInteractionModel",
    "LearnedPatternModel",
]
