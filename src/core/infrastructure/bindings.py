"""Backend bindings injected into the deletion service per request."""

import os

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.aws.dynamodb_metadata import DynamoDBMetadataStore
from core.infrastructure.aws.s3_object_storage import S3ObjectStorage
from core.infrastructure.telegram.telegram_messages import TelegramMessages
from core.models.errors import ConfigurationError
from core.models.settings import TelegramSettings
from core.repositories.message_repository import MessageRepository
from core.repositories.metadata_repository import MetadataStoreRepository
from core.repositories.storage_repository import ObjectStorageRepository
from core.utils.constants import ENV_ASSET_METADATA_TABLE_NAME, ENV_R2_BUCKET_NAME

logger = Logger(UTC=True)


class DeleteBindings(BaseModel):
    """Store handles available to one deletion request.

    A binding left as None is "not configured". Whether that is fatal
    depends on the path the request takes, so checks happen through the
    executors and ``require_metadata_store`` rather than at construction.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    metadata_store: MetadataStoreRepository | None = None
    object_storage: ObjectStorageRepository | None = None
    messages: MessageRepository | None = None

    def require_metadata_store(self) -> MetadataStoreRepository:
        if self.metadata_store is None:
            raise ConfigurationError(
                message="Metadata store binding is not configured.",
                details={"binding": ENV_ASSET_METADATA_TABLE_NAME},
            )
        return self.metadata_store

    @classmethod
    def from_env(cls) -> "DeleteBindings":
        """Build bindings for whichever backends the environment configures.

        Raises:
            ConfigurationError: If a configured Telegram setting is invalid
        """
        table_name = os.getenv(ENV_ASSET_METADATA_TABLE_NAME)
        bucket_name = os.getenv(ENV_R2_BUCKET_NAME)

        try:
            telegram_settings = TelegramSettings.from_env()
        except PydanticValidationError as exc:
            logger.error(
                "Invalid Telegram configuration",
                extra={"errors": exc.errors(include_url=False, include_input=False)},
            )
            raise ConfigurationError(message="Telegram configuration is invalid.") from exc

        messages = TelegramMessages(telegram_settings)
        bindings = cls(
            metadata_store=DynamoDBMetadataStore(DynamoDBAdapter(table_name)) if table_name else None,
            object_storage=S3ObjectStorage(S3Adapter(bucket_name)) if bucket_name else None,
            messages=messages,
        )

        logger.debug(
            "Bindings resolved from environment",
            extra={
                "metadata_store": bindings.metadata_store is not None,
                "object_storage": bindings.object_storage is not None,
                "telegram_configured": messages.is_configured,
            },
        )

        return bindings
