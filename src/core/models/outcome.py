"""Deletion outcome models returned by the executors."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from core.models.asset import Backend


class DeletionOutcome(BaseModel):
    """Common fields of every deletion outcome.

    Serialized with ``by_alias=True`` so response bodies keep the
    camelCase field names clients already depend on.
    """

    model_config = ConfigDict(populate_by_name=True)

    backend: Backend = Field(..., exclude=True)
    success: StrictBool = Field(True, description="Whether the asset is gone from the user's view")
    message: str = Field(..., description="Human-readable summary")
    file_id: str = Field(..., alias="fileId", description="Asset identifier as supplied")
    kv_key: str = Field(..., alias="kvKey", description="Storage key that was removed")


class ObjectStoreDeletionOutcome(DeletionOutcome):
    """Outcome of deleting an asset held in the object store."""

    backend: Backend = Field(Backend.OBJECT_STORE, exclude=True)
    r2_key: str = Field(..., alias="r2Key", description="Object key that was removed")


class MessageDeletionOutcome(DeletionOutcome):
    """Outcome of deleting an asset held as a Telegram message."""

    backend: Backend = Field(Backend.MESSAGING, exclude=True)
    telegram_delete_attempted: StrictBool = Field(..., alias="telegramDeleteAttempted")
    telegram_deleted: StrictBool = Field(..., alias="telegramDeleted")
    warning: str = Field("", description="Set when the Telegram message may still exist")
    telegram_delete_error: str | None = Field(None, alias="telegramDeleteError")
