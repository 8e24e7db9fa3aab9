"""Memory capability consumed by the update pipeline.

The pipeline only needs three operations from its memory collaborator:
append an interaction, read learned patterns, and read recent interactions.
InMemoryMemoryStore backs local runs and tests; SqlMemoryStore (see
sql_memory_store.py) backs production.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

from models.update_models import Interaction, LearnedPattern

logger = logging.getLogger(__name__)


@runtime_checkable
class MemoryStore(Protocol):
    """Append-only interaction memory with learned patterns."""

    async def store(self, interaction: Interaction) -> None:
        ...

    async def get_patterns(self, member_id: str) -> List[LearnedPattern]:
        ...

    async def get_recent(self, member_id: str, limit: int) -> List[Interaction]:
        """Return up to limit interactions for member_id, newest first."""
        ...


class InMemoryMemoryStore:
    """Process-local MemoryStore.

    Interactions are appended per member; concurrent writers for the same
    member are serialized by a lock so no record is lost.
    """

    def __init__(self, patterns: Optional[Dict[str, Iterable[LearnedPattern]]] = None):
        self._interactions: Dict[str, List[Interaction]] = defaultdict(list)
        self._patterns: Dict[str, List[LearnedPattern]] = {
            member_id: list(items) for member_id, items in (patterns or {}).items()
        }
        self._lock = asyncio.Lock()

    async def store(self, interaction: Interaction) -> None:
        async with self._lock:
            self._interactions[interaction.team_member].append(interaction)
        logger.debug(
            f"Interaction stored: id={interaction.id}, "
            f"team_member={interaction.team_member}"
        )

    async def get_patterns(self, member_id: str) -> List[LearnedPattern]:
        return list(self._patterns.get(member_id, []))

    async def get_recent(self, member_id: str, limit: int) -> List[Interaction]:
        if limit <= 0:
            return []
        history = sorted(
            self._interactions.get(member_id, []),
            key=lambda i: i.timestamp,
            reverse=True,
        )
        return history[:limit]

    def add_pattern(self, member_id: str, pattern: LearnedPattern) -> None:
        """Register a learned pattern (patterns are produced outside the pipeline)."""
        self._patterns.setdefault(member_id, []).append(pattern)

    def count(self, member_id: str) -> int:
        return len(self._interactions.get(member_id, []))
