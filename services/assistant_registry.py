"""Registry of personal assistants, one per configured team member."""
import logging
from typing import Any, Dict, List, Optional

from models.team_member import TeamConfig
from models.update_models import ProcessedUpdate, TeamMemberInsights
from services.memory_store import MemoryStore
from services.model_provider import ChatModel
from services.personal_assistant import PersonalAssistant

logger = logging.getLogger(__name__)


class AssistantRegistry:
    """Builds assistants lazily and caches them by member id.

    All assistants share the same model and memory collaborators.
    """

    def __init__(
        self,
        team_config: TeamConfig,
        model: ChatModel,
        memory: MemoryStore,
        insights_limit: Optional[int] = None
    ):
        self.team_config = team_config
        self.model = model
        self.memory = memory
        self.insights_limit = insights_limit
        self._assistants: Dict[str, PersonalAssistant] = {}

    @property
    def member_ids(self) -> List[str]:
        return self.team_config.member_ids

    def get_assistant(self, member_id: str) -> PersonalAssistant:
        """Return the cached assistant for member_id, creating it on first use.

        Raises:
            KeyError: If member_id is not in the team configuration
        """
        assistant = self._assistants.get(member_id)
        if assistant is None:
            profile = self.team_config.get_profile(member_id)
            assistant = PersonalAssistant(
                profile=profile,
                model=self.model,
                memory=self.memory,
                insights_limit=self.insights_limit,
            )
            self._assistants[member_id] = assistant
            logger.info(
                f"Personal assistant created: member_id={member_id}, "
                f"agent_id={assistant.id}"
            )
        return assistant

    async def process_update(
        self,
        member_id: str,
        raw_update: str,
        context: Optional[Dict[str, Any]] = None
    ) -> ProcessedUpdate:
        return await self.get_assistant(member_id).process_update(raw_update, context)

    async def get_insights(self, member_id: str) -> TeamMemberInsights:
        return await self.get_assistant(member_id).get_insights()
