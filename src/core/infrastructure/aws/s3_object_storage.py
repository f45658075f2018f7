"""S3-compatible implementation of ObjectStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import ObjectStorageError
from core.repositories.storage_repository import ObjectStorageRepository
from core.utils.constants import ERROR_CODE_OBJECT_DELETE_FAILED

logger = Logger(UTC=True)


class S3ObjectStorage(ObjectStorageRepository):
    """Object storage backed by an R2 (or plain S3) bucket."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def remove_object(self, *, key: str) -> None:
        """Delete an object from the bucket."""
        logger.debug("Deleting object", extra={"r2_key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Object deleted successfully", extra={"r2_key": key})

        except ClientError as exc:
            logger.error(
                "Object deletion failed",
                extra={
                    "r2_key": key,
                    "error_code": exc.response.get("Error", {}).get("Code"),
                },
            )
            raise ObjectStorageError(
                message="Unable to delete file from R2",
                error_code=ERROR_CODE_OBJECT_DELETE_FAILED,
                details={"r2_key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting object")
            raise ObjectStorageError(
                message="Unable to delete file from R2",
                error_code=ERROR_CODE_OBJECT_DELETE_FAILED,
                details={"r2_key": key},
            ) from exc
