"""Application settings loaded from environment variables."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """ChatFlow configuration. All values come from environment variables."""

    # Credential vault identity (one slot per user profile)
    keyring_service: str = Field(default="ClaudeFlow")
    keyring_account: str = Field(default="claude_api_key")

    # Remote chat API used for key validation
    api_endpoint: str = Field(default="https://api.anthropic.com/v1/messages")
    api_version: str = Field(default="2023-06-01")
    validation_model: str = Field(default="claude-3-haiku-20240307")
    validation_max_tokens: int = Field(default=10)

    # Flow files
    flow_file_version: str = Field(default="1.0.0")
    default_conversation_title: str = Field(default="New Conversation")

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="CHATFLOW_", env_file=_env_file(), env_file_encoding="utf-8"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)


settings = Settings()
