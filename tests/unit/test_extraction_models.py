"""
Unit Tests for Extraction Models

Tests the Pydantic models the language model output is validated against,
and the update models built from them.
"""

import pytest
from pydantic import ValidationError

from models.extraction_models import (
    ExtractionOutcome,
    ExtractionResult,
    Priority,
    ActionItem,
    ClientInfo,
    TechnicalInfo,
    RevenueInfo,
    UrgencyLevel,
    ClientStatus,
    SeverityLevel,
    ProbabilityLevel,
    PARSE_FAILED_CONFIDENCE,
    PIPELINE_FAILED_CONFIDENCE,
    UNREPORTED_CONFIDENCE,
)
from models.update_models import (
    EnrichedRecord,
    LearnedContextEntry,
    ProcessedUpdate,
)


class TestExtractionOutcome:
    """Tests for the two-tier fallback confidence convention."""

    def test_parse_failed_confidence(self):
        assert ExtractionOutcome.parse_failed.fallback_confidence == 0.5
        assert PARSE_FAILED_CONFIDENCE == 0.5

    def test_pipeline_failed_confidence(self):
        assert ExtractionOutcome.pipeline_failed.fallback_confidence == 0.0
        assert PIPELINE_FAILED_CONFIDENCE == 0.0

    def test_parsed_has_no_fallback(self):
        assert ExtractionOutcome.parsed.fallback_confidence is None

    def test_empty_result_for_parse_failure(self):
        result = ExtractionResult.empty(ExtractionOutcome.parse_failed)

        assert result.confidence == 0.5
        assert result.outcome == ExtractionOutcome.parse_failed
        assert result.priorities == []
        assert result.action_items == []
        assert result.client_info == []
        assert result.technical_info == []
        assert result.revenue_info == []
        assert result.key_insights == []

    def test_empty_result_rejects_parsed_outcome(self):
        with pytest.raises(ValueError):
            ExtractionResult.empty(ExtractionOutcome.parsed)


class TestSectionModels:
    """Tests for the individual section item models."""

    def test_priority_with_all_fields(self):
        priority = Priority(item="Renew Acme contract", urgency="high", deadline="Friday")

        assert priority.item == "Renew Acme contract"
        assert priority.urgency == UrgencyLevel.high
        assert priority.deadline == "Friday"

    def test_priority_urgency_is_case_insensitive(self):
        priority = Priority(item="Call dealer", urgency=" HIGH ")
        assert priority.urgency == UrgencyLevel.high

    def test_priority_null_string_deadline_becomes_none(self):
        """The prompt says 'date or null', so the literal string is normalized."""
        assert Priority(item="x", urgency="low", deadline="null").deadline is None
        assert Priority(item="x", urgency="low", deadline="").deadline is None

    def test_priority_unknown_urgency_matches_nothing(self):
        priority = Priority(item="x", urgency="critical")

        assert priority.urgency is None
        assert priority.urgency != UrgencyLevel.high

    def test_priority_non_string_urgency_matches_nothing(self):
        assert Priority(item="x", urgency=3).urgency is None

    def test_action_item_with_only_task(self):
        action = ActionItem(task="Send revised quote")

        assert action.task == "Send revised quote"
        assert action.assignee is None
        assert action.due_date is None

    def test_action_item_missing_task_is_empty(self):
        action = ActionItem(assignee="Sarah", due_date=2026)

        assert action.task == ""
        assert action.due_date == "2026"

    def test_revenue_info_missing_probability(self):
        info = RevenueInfo(opportunity="Fleet deal", value=50000)

        assert info.probability is None
        assert info.value == "50000"

    def test_entry_that_is_not_an_object_is_rejected(self):
        with pytest.raises(ValidationError):
            Priority.model_validate("Call Acme")

    def test_client_info_status(self):
        info = ClientInfo(client="Acme", status="Negative", details="Unhappy about pricing")
        assert info.status == ClientStatus.negative

    def test_technical_info_severity(self):
        info = TechnicalInfo(issue="Portal outage", severity="high", impact="Dealers cannot order")
        assert info.severity == SeverityLevel.high

    def test_revenue_info_probability(self):
        info = RevenueInfo(opportunity="Fleet deal", value="$250k", probability="medium")
        assert info.probability == ProbabilityLevel.medium


class TestExtractionResult:
    """Tests for the ExtractionResult container."""

    def test_absent_sections_default_to_empty_lists(self):
        result = ExtractionResult(confidence=0.9)

        for section in (
            result.priorities,
            result.action_items,
            result.client_info,
            result.technical_info,
            result.revenue_info,
            result.key_insights,
        ):
            assert section == []

    def test_null_sections_become_empty_lists(self):
        result = ExtractionResult.model_validate({
            "priorities": None,
            "revenue_info": None,
            "key_insights": None,
            "confidence": 0.7,
        })

        assert result.priorities == []
        assert result.revenue_info == []
        assert result.key_insights == []
        assert result.confidence == 0.7

    def test_unusable_confidence_counts_as_unreported(self):
        for value in (1.5, -0.1, None, "high", True, float("nan")):
            assert ExtractionResult(confidence=value).confidence == UNREPORTED_CONFIDENCE

    def test_numeric_string_confidence(self):
        assert ExtractionResult(confidence="0.75").confidence == 0.75

    def test_bad_entry_does_not_drop_section(self):
        result = ExtractionResult.model_validate({
            "revenue_info": [42, {"opportunity": "Fleet deal"}],
            "confidence": 0.6,
        })

        assert [r.opportunity for r in result.revenue_info] == ["Fleet deal"]
        assert result.confidence == 0.6

    def test_outcome_is_not_read_from_input(self):
        result = ExtractionResult.model_validate({"outcome": "parse_failed"})
        assert result.outcome == ExtractionOutcome.parsed

    def test_missing_confidence_uses_parse_failed_value(self):
        assert ExtractionResult().confidence == PARSE_FAILED_CONFIDENCE


class TestEnrichedRecord:
    """Tests for the EnrichedRecord serialization contract."""

    def test_learned_context_omitted_when_unset(self):
        record = EnrichedRecord(source_role="Sales Manager", confidence=0.8)

        payload = record.to_payload()

        assert "learned_context" not in payload
        assert payload["business_impact"] == {"level": "low", "reasons": []}
        assert payload["source_focus"] == []

    def test_learned_context_present_when_set(self):
        record = EnrichedRecord(
            source_role="Sales Manager",
            learned_context=[
                LearnedContextEntry(pattern_type="timing", confidence=0.7, suggestion="Follow up Mondays")
            ],
        )

        payload = record.to_payload()

        assert payload["learned_context"] == [
            {"pattern_type": "timing", "confidence": 0.7, "suggestion": "Follow up Mondays"}
        ]

    def test_processed_update_payload_hides_error_message_on_success(self):
        update = ProcessedUpdate(
            id="1",
            timestamp="2026-10-19T12:00:00+00:00",
            source="Sarah",
            raw_input="All good",
            extracted_data=EnrichedRecord(source_role="Sales Manager"),
            confidence=0.9,
            requires_attention=False,
        )

        payload = update.to_payload()

        assert payload["error"] is False
        assert payload["outcome"] == "parsed"
        assert "error_message" not in payload
        assert "learned_context" not in payload["extracted_data"]
