"""Backend-specific deletion sequences.

Each executor implements the same ``delete(target) -> DeletionOutcome``
contract and is picked once per request from the classified backend.

- Object store: the object delete is load-bearing. If it fails the
  metadata record stays so the request can be retried.
- Messaging: the Telegram message is best-effort cleanup. The metadata
  record is removed no matter how the remote call ends.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import ClassVar

from aws_lambda_powertools import Logger

from core.models.asset import Backend, DeletionTarget
from core.models.errors import (
    AssetServiceError,
    ConfigurationError,
    MetadataOperationFailedError,
)
from core.models.outcome import (
    DeletionOutcome,
    MessageDeletionOutcome,
    ObjectStoreDeletionOutcome,
)
from core.repositories.message_repository import MessageRepository
from core.repositories.metadata_repository import MetadataStoreRepository
from core.repositories.storage_repository import ObjectStorageRepository
from core.utils.constants import (
    ENV_R2_BUCKET_NAME,
    ERROR_CODE_METADATA_INVALID_STATE,
    MESSAGE_R2_DELETED,
    MESSAGE_TELEGRAM_BEST_EFFORT,
    MESSAGE_TELEGRAM_DELETED,
    R2_KEY_PREFIX,
    WARNING_TELEGRAM_NOT_DELETED,
)

logger = Logger(UTC=True)


def _strip_r2_prefix(value: str) -> str | None:
    if value.startswith(R2_KEY_PREFIX):
        return value[len(R2_KEY_PREFIX):]
    return None


def resolve_object_key(target: DeletionTarget) -> str:
    """Work out the physical object key for an object-store asset.

    First non-empty wins:
    1. explicit ``r2Key`` on the metadata
    2. the storage key without its ``r2:`` prefix
    3. the identifier without its ``r2:`` prefix
    4. the raw identifier

    May return an empty string (e.g. identifier ``"r2:"``); callers reject it.
    """
    if target.metadata.r2_key:
        return target.metadata.r2_key

    from_kv_key = _strip_r2_prefix(target.kv_key)
    if from_kv_key:
        return from_kv_key

    from_file_id = _strip_r2_prefix(target.file_id)
    if from_file_id is not None:
        return from_file_id

    return target.file_id


class DeletionExecutor(ABC):
    """Deletes one asset's payload and metadata record."""

    backend: ClassVar[Backend]

    def __init__(self, metadata_store: MetadataStoreRepository) -> None:
        self._metadata_store = metadata_store

    @abstractmethod
    def delete(self, target: DeletionTarget) -> DeletionOutcome:
        """Delete the asset described by ``target``.

        Raises:
            AssetServiceError: On faults the executor does not recover from
        """


class ObjectStoreDeletionExecutor(DeletionExecutor):
    """Deletes the object from the bucket, then the metadata record."""

    backend = Backend.OBJECT_STORE

    def __init__(
        self,
        metadata_store: MetadataStoreRepository,
        object_storage: ObjectStorageRepository | None,
    ) -> None:
        super().__init__(metadata_store)
        self._objects = object_storage

    def delete(self, target: DeletionTarget) -> ObjectStoreDeletionOutcome:
        """Delete an R2-held asset.

        Raises:
            ConfigurationError: If no object storage is bound
            MetadataOperationFailedError: If no object key can be resolved
            ObjectStorageError: If the object delete fails (record kept)
            MetadataStoreError: If the record delete fails
        """
        r2_key = resolve_object_key(target)

        if self._objects is None:
            logger.error(
                "Object storage binding missing for R2 asset",
                extra={"file_id": target.file_id, "kv_key": target.kv_key},
            )
            raise ConfigurationError(
                message="R2 bucket is not configured.",
                details={"binding": ENV_R2_BUCKET_NAME},
            )

        if not r2_key:
            logger.error(
                "Could not resolve R2 object key",
                extra={"file_id": target.file_id, "kv_key": target.kv_key},
            )
            raise MetadataOperationFailedError(
                message="Failed to resolve R2 key.",
                error_code=ERROR_CODE_METADATA_INVALID_STATE,
                details={"fileId": target.file_id, "kvKey": target.kv_key},
            )

        # Object first: a failure here must leave the record for a retry
        self._objects.remove_object(key=r2_key)
        self._metadata_store.remove_record(kv_key=target.kv_key)

        logger.info(
            "Deleted R2 object and KV metadata",
            extra={"file_id": target.file_id, "r2_key": r2_key, "kv_key": target.kv_key},
        )

        return ObjectStoreDeletionOutcome(
            message=MESSAGE_R2_DELETED,
            file_id=target.file_id,
            kv_key=target.kv_key,
            r2_key=r2_key,
        )


class MessageDeletionExecutor(DeletionExecutor):
    """Deletes the Telegram message best-effort, the metadata record always."""

    backend = Backend.MESSAGING

    def __init__(
        self,
        metadata_store: MetadataStoreRepository,
        messages: MessageRepository | None,
    ) -> None:
        super().__init__(metadata_store)
        self._messages = messages

    @contextmanager
    def _record_removed_on_exit(self, kv_key: str) -> Iterator[None]:
        """Remove the metadata record once the block exits, however it exits."""
        try:
            yield
        finally:
            self._metadata_store.remove_record(kv_key=kv_key)
            logger.info("KV metadata deleted", extra={"kv_key": kv_key})

    def delete(self, target: DeletionTarget) -> MessageDeletionOutcome:
        """Delete a Telegram-held asset.

        Remote failures are recorded on the outcome, never raised.

        Raises:
            MetadataStoreError: If the record delete fails
        """
        message_id = target.metadata.telegram_message_id
        attempted = False
        deleted = False
        delete_error: str | None = None

        with self._record_removed_on_exit(target.kv_key):
            if not message_id:
                logger.warning(
                    "No telegramMessageId found in metadata",
                    extra={"file_id": target.file_id, "kv_key": target.kv_key},
                )
            else:
                attempted = True
                try:
                    deleted = self._remove_message(message_id)
                except Exception as exc:
                    delete_error = exc.message if isinstance(exc, AssetServiceError) else str(exc)
                    logger.exception(
                        "Telegram deleteMessage raised",
                        extra={"file_id": target.file_id, "message_id": message_id},
                    )

                if not deleted:
                    logger.error(
                        "Telegram message deletion failed",
                        extra={"file_id": target.file_id, "message_id": message_id},
                    )

        return MessageDeletionOutcome(
            message=MESSAGE_TELEGRAM_DELETED if deleted else MESSAGE_TELEGRAM_BEST_EFFORT,
            file_id=target.file_id,
            kv_key=target.kv_key,
            telegram_delete_attempted=attempted,
            telegram_deleted=deleted,
            warning="" if deleted else WARNING_TELEGRAM_NOT_DELETED,
            telegram_delete_error=delete_error,
        )

    def _remove_message(self, message_id: int | str) -> bool:
        if self._messages is None:
            logger.warning(
                "No messaging binding configured",
                extra={"message_id": message_id},
            )
            return False

        return self._messages.remove_message(message_id=message_id)
