"""Postgres-backed MemoryStore using SQLModel mirror tables."""
import logging
from typing import List
from uuid import UUID

from pydantic import ValidationError
from sqlmodel import select

from models.db_models import TeamInteractionModel, LearnedPatternModel
from models.update_models import Interaction, LearnedPattern
from services.database import get_async_session

logger = logging.getLogger(__name__)


class SqlMemoryStore:
    """MemoryStore over the team_interactions and learned_patterns tables."""

    async def store(self, interaction: Interaction) -> None:
        """Insert one interaction row in its own transaction."""
        row = self._to_row(interaction)

        async with get_async_session() as session:
            session.add(row)
            await session.commit()

        logger.info(
            f"Persisted interaction: id={interaction.id}, "
            f"team_member={interaction.team_member}"
        )

    async def get_patterns(self, member_id: str) -> List[LearnedPattern]:
        async with get_async_session() as session:
            result = await session.execute(
                select(LearnedPatternModel)
                .where(LearnedPatternModel.team_member == member_id)
                .order_by(LearnedPatternModel.created_at)
            )
            rows = result.scalars().all()

        return [
            LearnedPattern(
                type=row.pattern_type,
                confidence=row.confidence,
                suggestion=row.suggestion or "",
            )
            for row in rows
        ]

    async def get_recent(self, member_id: str, limit: int) -> List[Interaction]:
        if limit <= 0:
            return []

        async with get_async_session() as session:
            result = await session.execute(
                select(TeamInteractionModel)
                .where(TeamInteractionModel.team_member == member_id)
                .order_by(TeamInteractionModel.timestamp.desc())
                .limit(limit)
            )
            rows = result.scalars().all()

        interactions = []
        for row in rows:
            try:
                interactions.append(self._from_row(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipped unreadable interaction row: id={row.id}, "
                    f"team_member={member_id}, errors={e.error_count()}"
                )
        return interactions

    @staticmethod
    def _to_row(interaction: Interaction) -> TeamInteractionModel:
        return TeamInteractionModel(
            id=UUID(interaction.id),
            agent_id=interaction.agent_id,
            team_member=interaction.team_member,
            timestamp=interaction.timestamp,
            raw_input=interaction.raw_input,
            extracted_data=interaction.extracted_data.to_payload(),
            type=interaction.type,
            metadata_=interaction.metadata,
        )

    @staticmethod
    def _from_row(row: TeamInteractionModel) -> Interaction:
        return Interaction(
            id=str(row.id),
            agent_id=row.agent_id,
            team_member=row.team_member,
            timestamp=row.timestamp,
            raw_input=row.raw_input,
            extracted_data=row.extracted_data,
            type=row.type,
            metadata=row.metadata_ or {},
        )
