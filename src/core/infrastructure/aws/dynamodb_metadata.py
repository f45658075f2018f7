"""DynamoDB-backed implementation of MetadataStoreRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.asset import AssetMetadata, MetadataRecord
from core.models.errors import MetadataOperationFailedError, MetadataStoreError
from core.repositories.metadata_repository import MetadataStoreRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    METADATA_TABLE_KEY_ATTRIBUTE,
    METADATA_TABLE_METADATA_ATTRIBUTE,
    METADATA_TABLE_VALUE_ATTRIBUTE,
)

logger = Logger(UTC=True)


class DynamoDBMetadataStore(MetadataStoreRepository):
    """Key-value metadata store kept in a DynamoDB table.

    Each item is keyed by ``kv_key`` and carries the raw ``value`` plus a
    ``metadata`` map. All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def fetch_record(self, *, kv_key: str) -> MetadataRecord | None:
        """Fetch the record stored under ``kv_key``.

        Raises:
            MetadataStoreError: If fetch fails
            MetadataOperationFailedError: If stored metadata is malformed
        """
        logger.debug("Fetching metadata record", extra={"kv_key": kv_key})

        try:
            response = self._db.get_item(key={METADATA_TABLE_KEY_ATTRIBUTE: kv_key})
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"kv_key": kv_key})
            raise MetadataStoreError(
                message="Unable to retrieve file metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"kv_key": kv_key},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching metadata record")
            raise MetadataStoreError(
                message="Unable to retrieve file metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"kv_key": kv_key},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        return self._to_record(kv_key, item)

    def remove_record(self, *, kv_key: str) -> None:
        """Remove the record stored under ``kv_key``.

        Raises:
            MetadataStoreError: If deletion fails
        """
        logger.debug("Removing metadata record", extra={"kv_key": kv_key})

        try:
            self._db.delete_item(key={METADATA_TABLE_KEY_ATTRIBUTE: kv_key})
            logger.info("Metadata record removed", extra={"kv_key": kv_key})

        except ClientError as exc:
            logger.error("DynamoDB delete_item failed", extra={"kv_key": kv_key})
            raise MetadataStoreError(
                message="Unable to delete file metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"kv_key": kv_key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing metadata record")
            raise MetadataStoreError(
                message="Unable to delete file metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"kv_key": kv_key},
            ) from exc

    @staticmethod
    def _to_record(kv_key: str, item: Any) -> MetadataRecord:
        if not isinstance(item, dict):
            raise MetadataOperationFailedError(
                message="Invalid file metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"kv_key": kv_key},
            )

        raw_metadata = item.get(METADATA_TABLE_METADATA_ATTRIBUTE)
        if raw_metadata is not None and not isinstance(raw_metadata, dict):
            logger.error("Metadata attribute is not a map", extra={"kv_key": kv_key})
            raise MetadataOperationFailedError(
                message="Invalid file metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"kv_key": kv_key},
            )

        try:
            metadata = AssetMetadata.model_validate(raw_metadata) if raw_metadata else None
        except PydanticValidationError as exc:
            logger.error(
                "Metadata attributes failed validation",
                extra={"kv_key": kv_key, "errors": exc.errors(include_url=False)},
            )
            raise MetadataOperationFailedError(
                message="Invalid file metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"kv_key": kv_key},
            ) from exc

        return MetadataRecord(
            value=item.get(METADATA_TABLE_VALUE_ATTRIBUTE),
            metadata=metadata,
        )
