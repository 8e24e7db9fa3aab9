"""
Unit Tests for the Extraction Prompt
"""

from models.team_member import TeamMemberProfile
from services.prompt_builder import build_extraction_prompt


def make_profile(**overrides):
    fields = dict(
        id="sarah",
        name="Sarah",
        role="Sales Manager",
        focus_areas=["dealer_relationships", "sales_activities"],
        extraction_priorities=["dealer_feedback", "action_items"],
    )
    fields.update(overrides)
    return TeamMemberProfile(**fields)


class TestBuildExtractionPrompt:

    def test_persona_bound_to_name_and_role(self):
        prompt = build_extraction_prompt(make_profile(), "update")
        assert "You are a personal AI assistant for Sarah, a Sales Manager." in prompt

    def test_focus_areas_and_priorities_listed_in_order(self):
        prompt = build_extraction_prompt(make_profile(), "update")

        assert "Focus Areas: dealer_relationships, sales_activities" in prompt
        assert "Extraction Priorities: dealer_feedback, action_items" in prompt

    def test_raw_text_embedded(self):
        text = "Client Acme is unhappy about pricing, need to follow up by Friday"
        prompt = build_extraction_prompt(make_profile(), text)
        assert f'"{text}"' in prompt

    def test_schema_lists_all_seven_fields(self):
        prompt = build_extraction_prompt(make_profile(), "update")

        for field in (
            '"priorities"',
            '"action_items"',
            '"client_info"',
            '"technical_info"',
            '"revenue_info"',
            '"key_insights"',
            '"confidence"',
        ):
            assert field in prompt

    def test_instructs_to_omit_empty_sections_and_return_only_json(self):
        prompt = build_extraction_prompt(make_profile(), "update")

        assert "Only include sections with actual information" in prompt
        assert "Return only the JSON object" in prompt

    def test_deterministic(self):
        profile = make_profile()
        assert build_extraction_prompt(profile, "same") == build_extraction_prompt(profile, "same")

    def test_empty_focus_areas(self):
        prompt = build_extraction_prompt(make_profile(focus_areas=[], extraction_priorities=[]), "x")

        assert "Focus Areas: \n" in prompt
        assert "Extraction Priorities: \n" in prompt
