#!/usr/bin/env python3
"""
Manual Update Processing Script

Runs one update through a team member's personal assistant and prints the
ProcessedUpdate and the member's insights as JSON.

Usage:
    python scripts/process_update.py <member_id> "<update text>" [--sql]

Without --sql an in-memory store is used, so nothing is persisted.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

from services.assistant_registry import AssistantRegistry
from services.memory_store import InMemoryMemoryStore
from services.model_provider import OpenAIChatModel
from utils.team_config import TeamConfigError, load_team_config

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Process a team member update")
    parser.add_argument("member_id", help="Team member id from team-config.json")
    parser.add_argument("text", help="Free-text update")
    parser.add_argument("--config", default=None, help="Path to team-config.json")
    parser.add_argument("--sql", action="store_true", help="Persist to DATABASE_URL")
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    try:
        team_config = load_team_config(args.config)
    except TeamConfigError as e:
        print(f"ERROR: {e}")
        return 1

    if args.member_id not in team_config.member_ids:
        print(f"ERROR: Unknown team member: {args.member_id}")
        print(f"Configured members: {', '.join(team_config.member_ids)}")
        return 1

    if args.sql:
        from services.database import close_engine
        from services.sql_memory_store import SqlMemoryStore
        memory = SqlMemoryStore()
    else:
        memory = InMemoryMemoryStore()

    registry = AssistantRegistry(team_config, OpenAIChatModel(), memory)

    try:
        print("=" * 60)
        print(f"Processing update for: {args.member_id}")
        print("=" * 60)

        result = await registry.process_update(args.member_id, args.text, {"source": "cli"})
        print(json.dumps(result.to_payload(), indent=2))

        print()
        print("=" * 60)
        print("Insights")
        print("=" * 60)
        insights = await registry.get_insights(args.member_id)
        print(json.dumps(insights.model_dump(mode="json"), indent=2))
    finally:
        if args.sql:
            await close_engine()

    return 1 if result.error else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run(parse_args())))
