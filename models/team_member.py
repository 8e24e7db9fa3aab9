"""Team member profile and team configuration models.

Profiles are validated once at the configuration boundary so the pipeline
never has to default fields on its own.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TeamMemberProfile(BaseModel):
    """Configuration identifying a salesperson and their extraction behavior.

    Attributes:
        id: Stable member identifier (used to key memory records)
        name: Display name used in the assistant persona
        role: Job title, e.g. "Sales Manager"
        focus_areas: Ordered focus areas listed in the prompt
        extraction_priorities: Ordered extraction priorities listed in the prompt
        ai_model: Model identifier; the default model is used when absent
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Team member identifier")
    name: str = Field(..., description="Team member display name")
    role: str = Field(..., description="Team member role")
    focus_areas: List[str] = Field(
        default_factory=list,
        description="Ordered focus areas for extraction"
    )
    extraction_priorities: List[str] = Field(
        default_factory=list,
        description="Ordered extraction priorities"
    )
    ai_model: Optional[str] = Field(
        default=None,
        description="Model identifier for this member's assistant"
    )

    @field_validator("id", "name", "role")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only identity fields."""
        if not v or not v.strip():
            raise ValueError("field cannot be empty or contain only whitespace")
        return v

    @field_validator("ai_model")
    @classmethod
    def blank_model_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def agent_id(self) -> str:
        """Identifier of the assistant acting for this member."""
        return f"assistant-{self.id}"


class MemberEntry(BaseModel):
    """A member entry as it appears in team-config.json (id is the key)."""
    name: str
    role: str
    focus_areas: List[str] = Field(default_factory=list)
    extraction_priorities: List[str] = Field(default_factory=list)
    ai_model: Optional[str] = None


class TeamSection(BaseModel):
    members: Dict[str, MemberEntry] = Field(default_factory=dict)


class TeamConfig(BaseModel):
    """Validated team configuration.

    Mirrors the team-config.json layout:
    {"team": {"members": {"<member_id>": {...}}}}
    """
    team: TeamSection = Field(default_factory=TeamSection)
    profiles: Dict[str, TeamMemberProfile] = Field(default_factory=dict, exclude=True)

    @model_validator(mode="after")
    def build_profiles(self) -> "TeamConfig":
        self.profiles = {
            member_id: TeamMemberProfile(id=member_id, **entry.model_dump())
            for member_id, entry in self.team.members.items()
        }
        return self

    def get_profile(self, member_id: str) -> TeamMemberProfile:
        """Return the profile for member_id.

        Raises:
            KeyError: If the member is not configured
        """
        try:
            return self.profiles[member_id]
        except KeyError:
            raise KeyError(f"Unknown team member: {member_id}") from None

    @property
    def member_ids(self) -> List[str]:
        return list(self.profiles)
