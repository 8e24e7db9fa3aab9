"""Personal assistant pipeline for one team member.

Processes free-text updates into structured, enriched records and
summarizes the member's history on demand. Processing never raises: every
failure resolves to a ProcessedUpdate with the same shape.

Persistence runs as a separate lane after the result is built. A storage
failure is logged and the already computed result is returned unchanged.
"""
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models.extraction_models import ExtractionOutcome, ExtractionResult
from models.team_member import TeamMemberProfile
from models.update_models import (
    BusinessImpact,
    EnrichedRecord,
    ProcessedUpdate,
    TeamMemberInsights,
)
from services.business_rules import assess_urgency
from services.enrichment_engine import EnrichmentEngine
from services.extraction_client import ExtractionClient
from services.insight_aggregator import analyze_productivity, identify_themes
from services.interaction_store import InteractionStore
from services.memory_store import MemoryStore
from services.model_provider import ChatModel

logger = logging.getLogger(__name__)

DEFAULT_INSIGHTS_LIMIT = 10


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_insights_limit() -> int:
    """History size used by get_insights (INSIGHTS_HISTORY_LIMIT, default 10)."""
    return int(os.getenv("INSIGHTS_HISTORY_LIMIT") or DEFAULT_INSIGHTS_LIMIT)


class PersonalAssistant:
    """Update-processing pipeline bound to a single team member.

    Holds no per-call state, so concurrent process_update calls are
    independent. The profile is referenced, not copied.
    """

    def __init__(
        self,
        profile: TeamMemberProfile,
        model: ChatModel,
        memory: MemoryStore,
        insights_limit: Optional[int] = None,
        default_model: Optional[str] = None
    ):
        self.profile = profile
        self.memory = memory
        self.insights_limit = (
            insights_limit if insights_limit is not None else get_insights_limit()
        )
        self.extraction_client = ExtractionClient(model, default_model=default_model)
        self.enrichment_engine = EnrichmentEngine(profile, memory)
        self.interaction_store = InteractionStore(profile, memory)

    @property
    def id(self) -> str:
        return self.profile.agent_id

    async def process_update(
        self,
        raw_update: str,
        context: Optional[Dict[str, Any]] = None
    ) -> ProcessedUpdate:
        """Turn a free-text update into a ProcessedUpdate.

        Args:
            raw_update: The update text as written by the team member
            context: Optional caller metadata stored with the interaction

        Returns:
            ProcessedUpdate; on failure error=True and confidence 0.0
        """
        try:
            logger.info(
                f"Processing update: member_id={self.profile.id}, "
                f"length={len(raw_update)}"
            )
            update_id = str(uuid.uuid4())
            timestamp = _now_iso()

            extraction = await self.extraction_client.extract(self.profile, raw_update)
            enriched = await self.enrichment_engine.enrich(extraction, context)

            result = ProcessedUpdate(
                id=update_id,
                timestamp=timestamp,
                source=self.profile.name,
                raw_input=raw_update,
                extracted_data=enriched,
                confidence=extraction.confidence,
                requires_attention=assess_urgency(enriched),
                outcome=extraction.outcome,
            )
        except Exception as e:
            logger.error(
                f"Update processing failed: member_id={self.profile.id}, "
                f"error={type(e).__name__}: {str(e)}",
                exc_info=True
            )
            return self.create_error_response(raw_update, e)

        await self._store(result, context)

        logger.info(
            f"Update processed: id={result.id}, member_id={self.profile.id}, "
            f"confidence={result.confidence}, outcome={result.outcome.value}, "
            f"impact={result.extracted_data.business_impact.level.value}, "
            f"requires_attention={result.requires_attention}"
        )
        return result

    async def _store(
        self,
        result: ProcessedUpdate,
        context: Optional[Dict[str, Any]]
    ) -> None:
        """Storage lane: failures are logged, never returned."""
        try:
            await self.interaction_store.store_interaction(
                update_id=result.id,
                raw_input=result.raw_input,
                enriched=result.extracted_data,
                metadata=context,
            )
        except Exception as e:
            logger.error(
                f"Interaction storage failed (non-critical): id={result.id}, "
                f"member_id={self.profile.id}, error={type(e).__name__}: {str(e)}",
                exc_info=True
            )

    def create_error_response(self, raw_update: str, error: Exception) -> ProcessedUpdate:
        """Degraded but structurally valid result for a failed run."""
        message = str(error)
        confidence = ExtractionOutcome.pipeline_failed.fallback_confidence
        empty = ExtractionResult.empty(ExtractionOutcome.pipeline_failed)

        extracted_data = EnrichedRecord(
            **empty.model_dump(exclude={"key_insights"}),
            key_insights=[f"Error processing update: {message}"],
            source_role=self.profile.role,
            source_focus=list(self.profile.focus_areas),
            business_impact=BusinessImpact(),
        )

        return ProcessedUpdate(
            id=str(uuid.uuid4()),
            timestamp=_now_iso(),
            source=self.profile.name,
            raw_input=raw_update if isinstance(raw_update, str) else str(raw_update),
            extracted_data=extracted_data,
            confidence=confidence,
            requires_attention=True,
            outcome=ExtractionOutcome.pipeline_failed,
            error=True,
            error_message=message,
        )

    async def get_insights(self) -> TeamMemberInsights:
        """Summarize the member's most recent interactions."""
        recent = await self.memory.get_recent(self.profile.id, self.insights_limit)

        insights = TeamMemberInsights(
            team_member=self.profile.name,
            role=self.profile.role,
            recent_activity=len(recent),
            common_themes=identify_themes(recent),
            productivity_patterns=analyze_productivity(recent),
        )
        logger.info(
            f"Insights generated: member_id={self.profile.id}, "
            f"recent_activity={insights.recent_activity}, "
            f"themes={len(insights.common_themes)}"
        )
        return insights
