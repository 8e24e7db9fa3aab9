"""Extraction prompt for team member updates.

The prompt is a pure function of the profile and the update text: no
timestamps or random values are embedded, so identical inputs always give
identical prompts.
"""
from models.team_member import TeamMemberProfile


EXTRACTION_SCHEMA = """{
  "priorities": [{"item": "description", "urgency": "high/medium/low", "deadline": "date or null"}],
  "action_items": [{"task": "description", "assignee": "person or null", "due_date": "date or null"}],
  "client_info": [{"client": "name", "status": "positive/negative/neutral", "details": "context"}],
  "technical_info": [{"issue": "description", "severity": "high/medium/low", "impact": "description"}],
  "revenue_info": [{"opportunity": "description", "value": "amount or estimate", "probability": "high/medium/low"}],
  "key_insights": ["insight1", "insight2"],
  "confidence": 0.85
}"""


def build_extraction_prompt(profile: TeamMemberProfile, raw_update: str) -> str:
    """Render the extraction instructions for one update.

    Args:
        profile: The team member who sent the update
        raw_update: The free-text update

    Returns:
        The full prompt sent as the user message
    """
    focus_areas = ", ".join(profile.focus_areas)
    priorities = ", ".join(profile.extraction_priorities)

    return f"""You are a personal AI assistant for {profile.name}, a {profile.role}.

Focus Areas: {focus_areas}
Extraction Priorities: {priorities}

Extract structured information from this update:
"{raw_update}"

Return JSON with:
{EXTRACTION_SCHEMA}

Only include sections with actual information. Be specific and actionable.
Return only the JSON object, with no other text."""
