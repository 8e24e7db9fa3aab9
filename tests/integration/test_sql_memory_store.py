"""
Integration Tests for the Postgres Memory Store

Tests row mapping and queries using mocked sessions to avoid live data
conflicts.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from datetime import datetime, timezone
from uuid import UUID, uuid4

from models.db_models import TeamInteractionModel, LearnedPatternModel
from models.extraction_models import Priority
from models.update_models import EnrichedRecord, Interaction
from services.database import normalize_database_url
from services.sql_memory_store import SqlMemoryStore


def make_session(rows=None):
    """Mocked AsyncSession plus the async context manager returning it."""
    added = []

    session = AsyncMock()
    session.add = MagicMock(side_effect=lambda m: added.append(m))
    session.commit = AsyncMock()
    session.rollback = AsyncMock()

    result = MagicMock()
    result.scalars.return_value.all.return_value = rows or []
    session.execute = AsyncMock(return_value=result)

    context = AsyncMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=None)

    return session, context, added


@pytest.fixture
def sample_interaction():
    return Interaction(
        id=str(uuid4()),
        agent_id="assistant-sarah",
        team_member="sarah",
        timestamp=datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc),
        raw_input="Acme wants a revised quote by Friday",
        extracted_data=EnrichedRecord(
            source_role="Sales Manager",
            source_focus=["dealer_relationships"],
            priorities=[Priority(item="Revise Acme quote", urgency="high", deadline="Friday")],
            key_insights=["Acme is price sensitive"],
            confidence=0.9,
        ),
        metadata={"channel": "email"},
    )


class TestStore:

    @pytest.mark.asyncio
    async def test_store_adds_one_row_and_commits(self, sample_interaction):
        session, context, added = make_session()

        with patch('services.sql_memory_store.get_async_session', return_value=context):
            await SqlMemoryStore().store(sample_interaction)

        assert len(added) == 1
        row = added[0]
        assert isinstance(row, TeamInteractionModel)
        assert row.id == UUID(sample_interaction.id)
        assert row.agent_id == "assistant-sarah"
        assert row.team_member == "sarah"
        assert row.type == "team_update"
        assert row.metadata_ == {"channel": "email"}
        assert row.extracted_data["priorities"][0]["urgency"] == "high"
        assert "learned_context" not in row.extracted_data
        session.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_store_propagates_commit_failure(self, sample_interaction):
        session, context, _ = make_session()
        session.commit = AsyncMock(side_effect=Exception("DB Error"))

        with patch('services.sql_memory_store.get_async_session', return_value=context):
            with pytest.raises(Exception, match="DB Error"):
                await SqlMemoryStore().store(sample_interaction)


class TestGetRecent:

    @pytest.mark.asyncio
    async def test_rows_are_converted_to_interactions(self, sample_interaction):
        row = SqlMemoryStore._to_row(sample_interaction)
        session, context, _ = make_session(rows=[row])

        with patch('services.sql_memory_store.get_async_session', return_value=context):
            recent = await SqlMemoryStore().get_recent("sarah", 10)

        assert len(recent) == 1
        interaction = recent[0]
        assert interaction.id == sample_interaction.id
        assert interaction.timestamp == sample_interaction.timestamp
        assert interaction.extracted_data.priorities[0].deadline == "Friday"
        assert interaction.extracted_data.learned_context is None
        assert interaction.metadata == {"channel": "email"}
        session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_lenient_and_unreadable_rows(self, sample_interaction):
        lenient = SqlMemoryStore._to_row(sample_interaction)
        lenient.extracted_data = {
            "source_role": "Sales Manager",
            "priorities": [{"item": "Call Acme", "urgency": "critical"}],
            "confidence": None,
        }
        unreadable = SqlMemoryStore._to_row(sample_interaction)
        unreadable.id = uuid4()
        unreadable.extracted_data = {"priorities": []}
        _, context, _ = make_session(rows=[lenient, unreadable])

        with patch('services.sql_memory_store.get_async_session', return_value=context):
            recent = await SqlMemoryStore().get_recent("sarah", 10)

        assert len(recent) == 1
        assert recent[0].extracted_data.priorities[0].urgency is None
        assert recent[0].extracted_data.confidence == 0.5

    @pytest.mark.asyncio
    async def test_non_positive_limit_skips_query(self):
        with patch('services.sql_memory_store.get_async_session') as mock_session:
            assert await SqlMemoryStore().get_recent("sarah", 0) == []

        mock_session.assert_not_called()


class TestGetPatterns:

    @pytest.mark.asyncio
    async def test_rows_are_converted_to_patterns(self):
        rows = [
            LearnedPatternModel(team_member="sarah", pattern_type="timing", confidence=0.7, suggestion="Fridays"),
            LearnedPatternModel(team_member="sarah", pattern_type="tone", confidence=0.4, suggestion=None),
        ]
        _, context, _ = make_session(rows=rows)

        with patch('services.sql_memory_store.get_async_session', return_value=context):
            patterns = await SqlMemoryStore().get_patterns("sarah")

        assert [(p.type, p.confidence, p.suggestion) for p in patterns] == [
            ("timing", 0.7, "Fridays"),
            ("tone", 0.4, ""),
        ]

    @pytest.mark.asyncio
    async def test_no_patterns(self):
        _, context, _ = make_session(rows=[])

        with patch('services.sql_memory_store.get_async_session', return_value=context):
            assert await SqlMemoryStore().get_patterns("sarah") == []


class TestNormalizeDatabaseUrl:

    def test_sslmode_becomes_ssl_context(self):
        url, connect_args = normalize_database_url(
            "postgresql://user:pw@db.example.com/crm?sslmode=require&channel_binding=require"
        )

        assert url == "postgresql+asyncpg://user:pw@db.example.com/crm"
        assert "ssl" in connect_args

    def test_plain_url(self):
        url, connect_args = normalize_database_url("postgres://user:pw@localhost:5432/crm")

        assert url == "postgresql+asyncpg://user:pw@localhost:5432/crm"
        assert connect_args == {}

    def test_other_params_kept(self):
        url, _ = normalize_database_url("postgresql://u@h/db?application_name=crm&sslmode=disable")

        assert url == "postgresql+asyncpg://u@h/db?application_name=crm"
