"""Thin adapter for the Telegram Bot API."""

from typing import Protocol

import requests

from core.models.settings import TelegramSettings
from core.utils.constants import TELEGRAM_DELETE_MESSAGE_METHOD


class TelegramAdapterProtocol(Protocol):
    """Minimal Telegram adapter protocol (repository-facing)."""

    def delete_message(self, *, message_id: int | str) -> requests.Response: ...


class TelegramAdapter:
    """Low-level Bot API calls (mechanical, no error handling).

    This adapter:
    - Issues one HTTPS request per call with ``requests``
    - Does NOT inspect the response or handle errors
    - Domain implementations interpret the response and translate errors
    """

    def __init__(self, settings: TelegramSettings) -> None:
        if not settings.is_configured:
            raise RuntimeError("Telegram bot token and chat id must both be set")

        self._settings = settings

    def _method_url(self, method: str) -> str:
        return f"{self._settings.api_base_url}/bot{self._settings.bot_token}/{method}"

    def delete_message(self, *, message_id: int | str) -> requests.Response:
        """Call ``deleteMessage`` for a message in the configured chat.
        Raises requests exceptions - caught by domain implementation.
        """
        return requests.post(
            self._method_url(TELEGRAM_DELETE_MESSAGE_METHOD),
            json={
                "chat_id": self._settings.chat_id,
                "message_id": message_id,
            },
            timeout=self._settings.timeout_seconds,
        )
