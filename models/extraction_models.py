"""Pydantic models for structured extraction of team member updates.

These models define the JSON structure the language model is asked to return
for a free-text status update. Every section defaults to an empty list so
downstream consumers never have to branch on presence.

Model output is read leniently: an unknown enum value becomes None, missing
text becomes "", and an entry that still cannot be read is dropped on its
own. A bad field never costs the rest of the extraction.
"""
import logging
import math
from pydantic import (
    BaseModel,
    Field,
    PrivateAttr,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from typing import List, Optional
from enum import Enum

logger = logging.getLogger(__name__)


PARSE_FAILED_CONFIDENCE = 0.5
PIPELINE_FAILED_CONFIDENCE = 0.0
# Used when the model leaves confidence out or sends something unusable
UNREPORTED_CONFIDENCE = 0.5


class ExtractionOutcome(str, Enum):
    """How an extraction attempt ended.

    parse_failed means the model answered but the answer could not be read
    (confidence 0.5); pipeline_failed means processing itself broke
    (confidence 0.0).
    """
    parsed = "parsed"
    parse_failed = "parse_failed"
    pipeline_failed = "pipeline_failed"

    @property
    def fallback_confidence(self) -> Optional[float]:
        if self is ExtractionOutcome.parse_failed:
            return PARSE_FAILED_CONFIDENCE
        if self is ExtractionOutcome.pipeline_failed:
            return PIPELINE_FAILED_CONFIDENCE
        return None


class UrgencyLevel(str, Enum):
    """Urgency of a priority item."""
    high = "high"
    medium = "medium"
    low = "low"


class SeverityLevel(str, Enum):
    """Severity of a technical issue."""
    high = "high"
    medium = "medium"
    low = "low"


class ProbabilityLevel(str, Enum):
    """Likelihood of a revenue opportunity closing."""
    high = "high"
    medium = "medium"
    low = "low"


class ClientStatus(str, Enum):
    """Sentiment of a client relationship."""
    positive = "positive"
    negative = "negative"
    neutral = "neutral"


def _normalize_enum_value(value, enum_cls):
    """Case-insensitive match; anything unrecognized is None."""
    if isinstance(value, str):
        candidate = value.strip().lower()
        for member in enum_cls:
            if member.value == candidate:
                return member
    return None


def _coerce_text(value):
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _normalize_optional_text(value):
    # The prompt asks for "date or null", so models sometimes send the string.
    if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Priority(BaseModel):
    """A priority item mentioned in the update."""
    item: str = Field(
        default="",
        description="Description of the priority"
    )
    urgency: Optional[UrgencyLevel] = Field(
        default=None,
        description="Urgency level: high, medium, or low (None if unrecognized)"
    )
    deadline: Optional[str] = Field(
        default=None,
        description="Deadline as stated in the update, if any"
    )

    @field_validator("item", mode="before")
    @classmethod
    def coerce_item(cls, v):
        return _coerce_text(v)

    @field_validator("urgency", mode="before")
    @classmethod
    def normalize_urgency(cls, v):
        return _normalize_enum_value(v, UrgencyLevel)

    @field_validator("deadline", mode="before")
    @classmethod
    def normalize_deadline(cls, v):
        return _normalize_optional_text(v)


class ActionItem(BaseModel):
    """An actionable task extracted from the update."""
    task: str = Field(
        default="",
        description="Clear description of the task to be completed"
    )
    assignee: Optional[str] = Field(
        default=None,
        description="Person responsible for the task, if mentioned"
    )
    due_date: Optional[str] = Field(
        default=None,
        description="Due date for the task, if mentioned"
    )

    @field_validator("task", mode="before")
    @classmethod
    def coerce_task(cls, v):
        return _coerce_text(v)

    @field_validator("assignee", "due_date", mode="before")
    @classmethod
    def normalize_optional_fields(cls, v):
        return _normalize_optional_text(v)


class ClientInfo(BaseModel):
    """Client relationship information."""
    client: str = Field(
        default="",
        description="Client or dealer name"
    )
    status: Optional[ClientStatus] = Field(
        default=None,
        description="Relationship status: positive, negative, or neutral"
    )
    details: str = Field(
        default="",
        description="Context about the client situation"
    )

    @field_validator("client", "details", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_text(v)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return _normalize_enum_value(v, ClientStatus)


class TechnicalInfo(BaseModel):
    """A technical issue raised in the update."""
    issue: str = Field(
        default="",
        description="Description of the technical issue"
    )
    severity: Optional[SeverityLevel] = Field(
        default=None,
        description="Severity level: high, medium, or low"
    )
    impact: str = Field(
        default="",
        description="Business impact of the issue"
    )

    @field_validator("issue", "impact", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_text(v)

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v):
        return _normalize_enum_value(v, SeverityLevel)


class RevenueInfo(BaseModel):
    """A revenue opportunity mentioned in the update."""
    opportunity: str = Field(
        default="",
        description="Description of the opportunity"
    )
    value: str = Field(
        default="",
        description="Amount or estimate of the opportunity value"
    )
    probability: Optional[ProbabilityLevel] = Field(
        default=None,
        description="Probability of closing: high, medium, or low"
    )

    @field_validator("opportunity", "value", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_text(v)

    @field_validator("probability", mode="before")
    @classmethod
    def normalize_probability(cls, v):
        return _normalize_enum_value(v, ProbabilityLevel)


SECTION_ENTRY_MODELS = {
    "priorities": Priority,
    "action_items": ActionItem,
    "client_info": ClientInfo,
    "technical_info": TechnicalInfo,
    "revenue_info": RevenueInfo,
}


def _readable_entries(entries, section: str) -> list:
    """Validate each entry on its own and drop the ones that cannot be read."""
    if entries is None:
        return []
    if not isinstance(entries, list):
        logger.warning(
            f"Dropped extraction section: section={section}, "
            f"type={type(entries).__name__}"
        )
        return []

    entry_model = SECTION_ENTRY_MODELS.get(section)
    kept = []
    for entry in entries:
        if entry_model is None:
            text = _coerce_text(entry)
            if isinstance(text, str) and text:
                kept.append(text)
            else:
                logger.warning(f"Dropped extraction entry: section={section}")
            continue
        try:
            kept.append(entry_model.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                f"Dropped extraction entry: section={section}, "
                f"errors={e.error_count()}"
            )
    return kept


class ExtractionResult(BaseModel):
    """Structured data recovered from a team member's update.

    This is the payload the language model is asked to produce. Sections the
    model leaves out (or sends as null) come back as empty lists.
    """
    priorities: List[Priority] = Field(
        default_factory=list,
        description="Priority items with urgency and optional deadline"
    )
    action_items: List[ActionItem] = Field(
        default_factory=list,
        description="Tasks with optional assignee and due date"
    )
    client_info: List[ClientInfo] = Field(
        default_factory=list,
        description="Client relationship updates"
    )
    technical_info: List[TechnicalInfo] = Field(
        default_factory=list,
        description="Technical issues with severity and impact"
    )
    revenue_info: List[RevenueInfo] = Field(
        default_factory=list,
        description="Revenue opportunities with value and probability"
    )
    key_insights: List[str] = Field(
        default_factory=list,
        description="Short, specific insights from the update"
    )
    confidence: float = Field(
        default=UNREPORTED_CONFIDENCE,
        ge=0.0,
        le=1.0,
        description="Model-reported confidence in the extraction"
    )

    _outcome: ExtractionOutcome = PrivateAttr(default=ExtractionOutcome.parsed)

    @field_validator(
        "priorities",
        "action_items",
        "client_info",
        "technical_info",
        "revenue_info",
        "key_insights",
        mode="before",
    )
    @classmethod
    def keep_readable_entries(cls, v, info: ValidationInfo):
        return _readable_entries(v, info.field_name)

    @field_validator("confidence", mode="before")
    @classmethod
    def unreported_confidence(cls, v):
        """Null, non-numeric or out-of-range confidence counts as not reported."""
        if isinstance(v, str):
            try:
                v = float(v)
            except ValueError:
                return UNREPORTED_CONFIDENCE
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return UNREPORTED_CONFIDENCE
        if math.isnan(v) or not 0.0 <= v <= 1.0:
            return UNREPORTED_CONFIDENCE
        return v

    @property
    def outcome(self) -> ExtractionOutcome:
        """How the extraction ended; never read from model output."""
        return self._outcome

    @classmethod
    def empty(cls, outcome: ExtractionOutcome) -> "ExtractionResult":
        """Build an all-empty result carrying the fallback confidence of outcome."""
        confidence = outcome.fallback_confidence
        if confidence is None:
            raise ValueError(f"Outcome {outcome.value} has no fallback confidence")
        result = cls(confidence=confidence)
        result._outcome = outcome
        return result
