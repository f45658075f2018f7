"""Pydantic models for the delete asset request."""

from pydantic import BaseModel, Field, StrictStr, field_validator

from core.utils.validators import decode_path_identifier


class DeleteAssetRequest(BaseModel):
    """Validation model for delete asset request.

    The identifier is opaque: surrounding whitespace is part of the key.
    """

    file_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Asset identifier from the request path, possibly percent-encoded",
    )

    @field_validator("file_id")
    @classmethod
    def decode_file_id(cls, value: str) -> str:
        decoded = decode_path_identifier(value)
        if not decoded.strip():
            raise ValueError("file_id must not be blank")
        return decoded
