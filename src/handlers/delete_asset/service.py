"""Business logic for asset deletion.

This module resolves an identifier to its metadata record, picks the
backend that holds the payload and runs that backend's deletion sequence.
Infrastructure is injected through ``DeleteBindings`` for each request.
"""

from aws_lambda_powertools import Logger

from core.deletion.classifier import classify_backend
from core.deletion.executors import (
    DeletionExecutor,
    MessageDeletionExecutor,
    ObjectStoreDeletionExecutor,
)
from core.deletion.key_resolver import KeyResolver
from core.infrastructure.bindings import DeleteBindings
from core.models.asset import Backend, DeletionTarget
from core.models.errors import NotFoundError
from core.models.outcome import DeletionOutcome
from core.repositories.metadata_repository import MetadataStoreRepository
from core.utils.constants import MESSAGE_NOT_FOUND

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting assets.

    This service orchestrates:
    - Resolving the identifier to a storage key and metadata record
    - Classifying the backend once
    - Delegating to the matching deletion executor

    It does not perform low-level infrastructure operations directly.
    """

    def __init__(self, bindings: DeleteBindings) -> None:
        self.bindings = bindings

    def delete_asset(self, file_id: str) -> DeletionOutcome:
        """Delete an asset and its metadata.

        Args:
            file_id: Decoded asset identifier

        Returns:
            The executor's outcome, possibly a degraded (best-effort) success

        Raises:
            ConfigurationError: If a required binding is missing
            NotFoundError: If no metadata record exists for the identifier
            ObjectStorageError: If an R2 object cannot be deleted
            MetadataStoreError: If the metadata store cannot be read or written
            MetadataOperationFailedError: If the record cannot be acted on
        """
        logger.debug("Starting asset deletion", extra={"file_id": file_id})

        metadata_store = self.bindings.require_metadata_store()

        resolved = KeyResolver(metadata_store).resolve(file_id)
        if not resolved.found or resolved.record is None or resolved.record.metadata is None:
            logger.warning(
                "File metadata not found",
                extra={"file_id": file_id, "kv_key": resolved.kv_key},
            )
            raise NotFoundError(
                message=MESSAGE_NOT_FOUND,
                details={"fileId": file_id, "kvKey": resolved.kv_key},
            )

        metadata = resolved.record.metadata
        backend = classify_backend(file_id, metadata)

        logger.info(
            "Deleting asset",
            extra={"file_id": file_id, "kv_key": resolved.kv_key, "backend": backend.value},
        )

        executor = self._executor_for(backend, metadata_store)
        return executor.delete(
            DeletionTarget(file_id=file_id, kv_key=resolved.kv_key, metadata=metadata)
        )

    def _executor_for(
        self,
        backend: Backend,
        metadata_store: MetadataStoreRepository,
    ) -> DeletionExecutor:
        if backend is Backend.OBJECT_STORE:
            return ObjectStoreDeletionExecutor(metadata_store, self.bindings.object_storage)

        return MessageDeletionExecutor(metadata_store, self.bindings.messages)
