"""Enrichment of extracted updates with member context and business impact."""
import logging
from typing import Any, Dict, Optional

from models.extraction_models import ExtractionResult
from models.team_member import TeamMemberProfile
from models.update_models import EnrichedRecord
from services.business_rules import apply_learning_patterns, assess_business_impact
from services.memory_store import MemoryStore

logger = logging.getLogger(__name__)


class EnrichmentEngine:
    """Builds EnrichedRecords for one team member.

    The only side effect is the learned-pattern read from memory; the input
    extraction is never modified.
    """

    def __init__(self, profile: TeamMemberProfile, memory: MemoryStore):
        self.profile = profile
        self.memory = memory

    async def enrich(
        self,
        extraction: ExtractionResult,
        context: Optional[Dict[str, Any]] = None
    ) -> EnrichedRecord:
        """Attach source context, learned patterns and business impact.

        Args:
            extraction: Result from the extraction client
            context: Optional caller context (logged only; it is stored with
                the interaction, not merged into the record)

        Returns:
            A new EnrichedRecord
        """
        patterns = await self.memory.get_patterns(self.profile.id)
        learned_context = apply_learning_patterns(patterns) if patterns else None

        record = EnrichedRecord(
            **extraction.model_dump(),
            source_role=self.profile.role,
            source_focus=list(self.profile.focus_areas),
            learned_context=learned_context,
            business_impact=assess_business_impact(extraction),
        )

        logger.info(
            f"Enriched update: member_id={self.profile.id}, "
            f"impact={record.business_impact.level.value}, "
            f"patterns={len(patterns)}, "
            f"context_keys={sorted(context) if context else []}"
        )
        return record
