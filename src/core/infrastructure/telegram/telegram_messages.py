"""Telegram-backed implementation of MessageRepository."""

from typing import Any

import requests
from aws_lambda_powertools import Logger

from core.infrastructure.adapters.telegram_adapter import (
    TelegramAdapter,
    TelegramAdapterProtocol,
)
from core.models.errors import MessageDeletionError
from core.models.settings import TelegramSettings
from core.repositories.message_repository import MessageRepository

logger = Logger(UTC=True)


class TelegramMessages(MessageRepository):
    """Removes asset messages from the Telegram storage chat.

    A deletion only counts when the HTTP call succeeds *and* the Bot API
    body carries ``"ok": true``. A body without the field is a failure.
    Transport errors are translated into ``MessageDeletionError``.
    """

    def __init__(
        self,
        settings: TelegramSettings | None = None,
        adapter: TelegramAdapterProtocol | None = None,
    ) -> None:
        self._settings = settings or TelegramSettings.from_env()
        self._telegram: TelegramAdapterProtocol | None = adapter
        if self._telegram is None and self._settings.is_configured:
            self._telegram = TelegramAdapter(self._settings)

    @property
    def is_configured(self) -> bool:
        return self._telegram is not None

    def remove_message(self, *, message_id: int | str) -> bool:
        """Delete a message from the storage chat."""
        if self._telegram is None:
            logger.warning(
                "Telegram credentials not configured, skipping message deletion",
                extra={"message_id": message_id},
            )
            return False

        logger.debug("Deleting Telegram message", extra={"message_id": message_id})

        try:
            response = self._telegram.delete_message(message_id=message_id)

        except requests.RequestException as exc:
            logger.error(
                "Telegram deleteMessage request failed",
                extra={"message_id": message_id, "error": str(exc)},
            )
            raise MessageDeletionError(
                message=f"Telegram request failed: {exc}",
                details={"message_id": message_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error calling Telegram deleteMessage")
            raise MessageDeletionError(
                message=f"Telegram request failed: {exc}",
                details={"message_id": message_id},
            ) from exc

        data = self._parse_body(response, message_id)
        acknowledged = response.ok and data.get("ok") is True

        if acknowledged:
            logger.info("Telegram message deleted", extra={"message_id": message_id})
        else:
            logger.warning(
                "Telegram did not acknowledge message deletion",
                extra={
                    "message_id": message_id,
                    "status_code": response.status_code,
                    "description": data.get("description"),
                },
            )

        return acknowledged

    @staticmethod
    def _parse_body(response: requests.Response, message_id: int | str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            logger.error(
                "Failed to parse Telegram deleteMessage response",
                extra={"message_id": message_id, "status_code": response.status_code},
            )
            return {"ok": False}

        if not isinstance(data, dict):
            return {"ok": False}

        return data
