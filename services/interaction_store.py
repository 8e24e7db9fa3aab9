"""Interaction Store Adapter: records processed updates in memory."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models.team_member import TeamMemberProfile
from models.update_models import EnrichedRecord, Interaction
from services.memory_store import MemoryStore

logger = logging.getLogger(__name__)

INTERACTION_TYPE = "team_update"


class InteractionStore:
    """Persists one Interaction per processed update for a team member."""

    def __init__(self, profile: TeamMemberProfile, memory: MemoryStore):
        self.profile = profile
        self.memory = memory

    def build_interaction(
        self,
        update_id: str,
        raw_input: str,
        enriched: EnrichedRecord,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Interaction:
        return Interaction(
            id=update_id,
            agent_id=self.profile.agent_id,
            team_member=self.profile.id,
            timestamp=datetime.now(timezone.utc),
            raw_input=raw_input,
            extracted_data=enriched,
            type=INTERACTION_TYPE,
            metadata=dict(metadata or {}),
        )

    async def store_interaction(
        self,
        update_id: str,
        raw_input: str,
        enriched: EnrichedRecord,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Interaction:
        """Build and store the interaction.

        Raises:
            Exception: Whatever the memory collaborator raises
        """
        interaction = self.build_interaction(update_id, raw_input, enriched, metadata)
        await self.memory.store(interaction)
        logger.info(
            f"Interaction stored: id={update_id}, agent_id={interaction.agent_id}"
        )
        return interaction
