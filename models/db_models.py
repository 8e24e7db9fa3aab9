"""SQLModel table definitions mirroring the existing Postgres schema.

These models use the Mirror Pattern - they match existing Postgres tables
without running migrations. Schema provisioning is owned by the database
setup tooling, not this service.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text, JSON, DateTime
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TeamInteractionModel(SQLModel, table=True):
    """Mirror of team_interactions table.

    One row per processed team update. Rows are only ever inserted.
    """
    __tablename__ = "team_interactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    agent_id: str = Field(sa_column_kwargs={"name": "agent_id"})
    team_member: str = Field(index=True, sa_column_kwargs={"name": "team_member"})
    timestamp: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    raw_input: str = Field(sa_column=Column(Text, nullable=False))
    extracted_data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    type: str = Field(default="team_update")
    metadata_: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column("metadata", JSON)
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column_kwargs={"name": "created_at"}
    )


class LearnedPatternModel(SQLModel, table=True):
    """Mirror of learned_patterns table.

    Patterns are written by the learning jobs; this service only reads them.
    """
    __tablename__ = "learned_patterns"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    team_member: str = Field(index=True, sa_column_kwargs={"name": "team_member"})
    pattern_type: str = Field(sa_column_kwargs={"name": "pattern_type"})
    confidence: float = Field(default=0.0)
    suggestion: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column_kwargs={"name": "created_at"}
    )
