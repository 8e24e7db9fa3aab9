"""
Team Configuration Loading

Loads team-config.json and validates it into a TeamConfig. Malformed member
entries are rejected here, before any assistant is built.

Path resolution:
1. Explicit path argument
2. TEAM_CONFIG_PATH environment variable
3. config/team-config.json relative to the working directory
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from models.team_member import TeamConfig

logger = logging.getLogger(__name__)

DEFAULT_TEAM_CONFIG_PATH = "config/team-config.json"


class TeamConfigError(ValueError):
    """Raised when the team configuration is missing or invalid."""


def resolve_team_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    if path is not None:
        return Path(path)
    return Path(os.getenv("TEAM_CONFIG_PATH") or DEFAULT_TEAM_CONFIG_PATH)


def parse_team_config(data: dict) -> TeamConfig:
    """
    Validate an already decoded team configuration.

    Raises:
        TeamConfigError: If any member entry is malformed
    """
    try:
        config = TeamConfig.model_validate(data)
    except ValidationError as e:
        raise TeamConfigError(f"Invalid team configuration: {e}") from e

    logger.info(f"Team configuration loaded: members={config.member_ids}")
    return config


def load_team_config(path: Optional[Union[str, Path]] = None) -> TeamConfig:
    """
    Load and validate the team configuration file.

    Args:
        path: Optional path to team-config.json

    Returns:
        Validated TeamConfig

    Raises:
        TeamConfigError: If the file is missing, not JSON, or invalid
    """
    config_path = resolve_team_config_path(path)

    if not config_path.exists():
        raise TeamConfigError(f"Team configuration not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise TeamConfigError(f"Team configuration is not valid JSON: {config_path}: {e}") from e

    return parse_team_config(data)
