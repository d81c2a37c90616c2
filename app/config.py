"""
Configuration Module

Loads the relay's settings from the environment (and a local .env file when
present) once per process. The workspace -> bot token mapping is exposed as a
read-only mapping on an immutable config object that gets injected into the
event handler.
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from app.util import chatModelId, imageModelId


class ConfigError(ValueError):
    """Raised when a required environment variable is missing."""


class UnknownWorkspaceError(KeyError):
    """Raised when an event arrives from a workspace with no configured token."""

    def __init__(self, team_id: Optional[str]):
        super().__init__(team_id)
        self.team_id = team_id

    def __str__(self) -> str:
        return f"No bot token configured for workspace: {self.team_id}"


@dataclass(frozen=True)
class AppConfig:
    openai_api_key: str
    bot_tokens: Mapping[str, str] = field(default_factory=dict)
    chat_model: str = chatModelId
    image_model: str = imageModelId
    priming_prompts_file: Optional[str] = None

    def __post_init__(self):
        # Freeze the credential map so it stays read-only for the process lifetime
        object.__setattr__(self, "bot_tokens", MappingProxyType(dict(self.bot_tokens)))

    def token_for(self, team_id: Optional[str]) -> str:
        """
        Resolve the bot access token for a workspace.

        Args:
            team_id: Slack workspace identifier from the inbound event

        Returns:
            The bot token bound to that workspace

        Raises:
            UnknownWorkspaceError: if the workspace is not configured
        """
        token = self.bot_tokens.get(team_id) if team_id else None
        if not token:
            raise UnknownWorkspaceError(team_id)
        return token


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value


def load_config() -> AppConfig:
    """
    Build the configuration from environment variables.

    Required: OPENAI_API_KEY, WORKSPACE_ID, SLACK_BOT_TOKEN
    Optional: OPENAI_CHAT_MODEL, OPENAI_IMAGE_MODEL, PRIMING_PROMPTS_FILE
    """
    return AppConfig(
        openai_api_key=_require("OPENAI_API_KEY"),
        bot_tokens={_require("WORKSPACE_ID"): _require("SLACK_BOT_TOKEN")},
        chat_model=os.getenv("OPENAI_CHAT_MODEL", chatModelId),
        image_model=os.getenv("OPENAI_IMAGE_MODEL", imageModelId),
        priming_prompts_file=os.getenv("PRIMING_PROMPTS_FILE") or None,
    )
