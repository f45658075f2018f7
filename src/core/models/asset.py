"""Shared asset metadata models."""

from decimal import Decimal
from enum import Enum
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import STORAGE_TYPE_R2, STORAGE_TYPE_TELEGRAM

logger = Logger(UTC=True)


def _integral(value: Decimal | float) -> int | None:
    """Return ``value`` as an int when it is a finite whole number."""
    try:
        as_int = int(value)
    except (ValueError, OverflowError):
        return None
    return as_int if as_int == value else None


class StorageType(str, Enum):
    """Physical backend recorded on a metadata record at upload time."""

    R2 = STORAGE_TYPE_R2
    TELEGRAM = STORAGE_TYPE_TELEGRAM
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: Any) -> "StorageType":
        """Map a raw attribute value to a storage type, tolerating unknown values."""
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member

        return cls.UNSPECIFIED


class Backend(str, Enum):
    """Backend that owns an asset's payload, as decided by the classifier."""

    OBJECT_STORE = STORAGE_TYPE_R2
    MESSAGING = STORAGE_TYPE_TELEGRAM


class AssetMetadata(BaseModel):
    """Structured attributes attached to a storage key.

    Attribute names are kept exactly as the upload path writes them.
    Attributes this service does not use are preserved as extras.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    storage_type: StorageType = Field(
        StorageType.UNSPECIFIED,
        alias="storageType",
        description="Backend holding the payload",
    )
    storage: StorageType = Field(
        StorageType.UNSPECIFIED,
        description="Legacy alias of storageType",
    )
    r2_key: str | None = Field(
        None,
        alias="r2Key",
        description="Explicit object key in the R2 bucket",
    )
    telegram_message_id: int | str | None = Field(
        None,
        alias="telegramMessageId",
        description="Telegram message holding the payload",
    )

    @field_validator("storage_type", "storage", mode="before")
    @classmethod
    def parse_storage_type(cls, value: Any) -> StorageType:
        return StorageType.parse(value)

    @field_validator("r2_key", mode="before")
    @classmethod
    def normalize_r2_key(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        # DynamoDB hands numbers back as Decimal
        if isinstance(value, (Decimal, float)):
            whole = _integral(value)
            return str(value) if whole is None else str(whole)

        logger.warning(
            "Ignoring r2Key of unexpected type",
            extra={"r2_key_type": type(value).__name__},
        )
        return None

    @field_validator("telegram_message_id", mode="before")
    @classmethod
    def normalize_message_id(cls, value: Any) -> int | str | None:
        if value is None or value == "":
            return None
        if isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool)):
            return value
        if isinstance(value, (Decimal, float)):
            whole = _integral(value)
            return str(value) if whole is None else whole

        logger.warning(
            "Ignoring telegramMessageId of unexpected type",
            extra={"message_id_type": type(value).__name__},
        )
        return None

    @property
    def is_object_store(self) -> bool:
        return StorageType.R2 in (self.storage_type, self.storage)


class MetadataRecord(BaseModel):
    """Raw value and metadata stored under a single storage key."""

    value: Any = Field(None, description="Raw value stored under the key")
    metadata: AssetMetadata | None = Field(
        None,
        description="Structured metadata attributes, None when absent or empty",
    )


class ResolvedRecord(BaseModel):
    """Result of resolving an asset identifier to a storage key."""

    record: MetadataRecord | None = None
    kv_key: str = Field(..., description="Storage key the record was found under, or the last one tried")

    @property
    def found(self) -> bool:
        return self.record is not None and self.record.metadata is not None


class DeletionTarget(BaseModel):
    """Everything an executor needs to delete one asset."""

    file_id: str = Field(..., description="Asset identifier as supplied by the caller")
    kv_key: str = Field(..., description="Resolved storage key")
    metadata: AssetMetadata
