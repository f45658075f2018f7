"""Validated settings for the Telegram messaging backend."""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import (
    DEFAULT_TELEGRAM_API_BASE_URL,
    ENV_TELEGRAM_API_BASE_URL,
    ENV_TELEGRAM_TIMEOUT_SECONDS,
    ENV_TG_BOT_TOKEN,
    ENV_TG_CHAT_ID,
)


class TelegramSettings(BaseModel):
    """Credentials and request options for the Telegram Bot API.

    Missing credentials are allowed: remote deletion is then reported as
    failed instead of aborting the request.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    bot_token: str | None = Field(None, repr=False, description="Bot API token")
    chat_id: str | None = Field(None, description="Chat that stores asset messages")
    api_base_url: str = Field(DEFAULT_TELEGRAM_API_BASE_URL, min_length=1)
    timeout_seconds: float | None = Field(
        None,
        gt=0,
        description="Request timeout; None leaves it to the Lambda timeout",
    )

    @field_validator("bot_token", "chat_id", "timeout_seconds", mode="before")
    @classmethod
    def blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("chat_id", mode="before")
    @classmethod
    def chat_id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    @classmethod
    def from_env(cls) -> "TelegramSettings":
        """Build settings from environment variables.

        Raises:
            pydantic.ValidationError: If a configured value is invalid
        """
        return cls(
            bot_token=os.getenv(ENV_TG_BOT_TOKEN),
            chat_id=os.getenv(ENV_TG_CHAT_ID),
            api_base_url=os.getenv(ENV_TELEGRAM_API_BASE_URL) or DEFAULT_TELEGRAM_API_BASE_URL,
            timeout_seconds=os.getenv(ENV_TELEGRAM_TIMEOUT_SECONDS),
        )
