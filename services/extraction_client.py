"""Extraction client: turns a team member update into an ExtractionResult.

The model is asked for JSON, but its answer is treated as untrusted text.
Only text that is not a JSON object becomes an empty result with the
parse-failed confidence; field-level problems are absorbed by the lenient
extraction models.
"""
import logging
import re
from typing import Optional

from pydantic import ValidationError

from models.extraction_models import ExtractionOutcome, ExtractionResult
from models.team_member import TeamMemberProfile
from services.model_provider import ChatModel, get_default_model
from services.prompt_builder import build_extraction_prompt

logger = logging.getLogger(__name__)

# Low temperature for consistent extraction
EXTRACTION_TEMPERATURE = 0.3

_CODE_FENCE = re.compile(r"```json\n?|\n?```")


def strip_code_fences(response: str) -> str:
    """Remove markdown code fences the model may wrap around its JSON."""
    return _CODE_FENCE.sub("", response).strip()


def parse_extraction_response(response: Optional[str]) -> ExtractionResult:
    """Parse model output into an ExtractionResult.

    Args:
        response: Raw text content returned by the model

    Returns:
        The parsed result, or an empty result with confidence 0.5 when the
        text is not a JSON object.
    """
    cleaned = strip_code_fences(response or "")

    try:
        return ExtractionResult.model_validate_json(cleaned)
    except ValidationError as e:
        logger.warning(
            f"Failed to parse extraction response: error={e.errors()[0]['type']}, "
            f"response_length={len(cleaned)}"
        )
        return ExtractionResult.empty(ExtractionOutcome.parse_failed)


class ExtractionClient:
    """Calls the model capability and recovers the structured extraction."""

    def __init__(self, model: ChatModel, default_model: Optional[str] = None):
        self.model = model
        self.default_model = default_model or get_default_model()

    def resolve_model(self, profile: TeamMemberProfile) -> str:
        return profile.ai_model or self.default_model

    async def extract(self, profile: TeamMemberProfile, raw_update: str) -> ExtractionResult:
        """Extract structured data from one update.

        Raises:
            Exception: Whatever the model capability raises; parse problems
                never raise.
        """
        prompt = build_extraction_prompt(profile, raw_update)
        model_id = self.resolve_model(profile)

        response = await self.model.chat(
            model=model_id,
            messages=[{"role": "user", "content": prompt}],
            temperature=EXTRACTION_TEMPERATURE,
        )

        result = parse_extraction_response(response.content)
        logger.info(
            f"Extraction complete: member_id={profile.id}, model={model_id}, "
            f"outcome={result.outcome.value}, "
            f"confidence={result.confidence}, priorities={len(result.priorities)}, "
            f"action_items={len(result.action_items)}, "
            f"client_info={len(result.client_info)}"
        )
        return result
