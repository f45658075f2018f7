"""Request validation utilities."""

import re
from typing import Any, TypeVar
from urllib.parse import unquote

from aws_lambda_powertools import Logger
from pydantic import BaseModel

logger = Logger(UTC=True)

ModelT = TypeVar("ModelT", bound=BaseModel)

# A '%' not followed by two hex digits is a malformed escape
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_path_identifier(raw: str) -> str:
    """Percent-decode an identifier taken from the request path.

    Malformed escapes or escapes that do not decode to UTF-8 leave the
    raw value in place, so a caller can still address oddly named keys.
    """
    if _MALFORMED_ESCAPE.search(raw):
        logger.warning("Failed to decode file id, using raw value", extra={"file_id": raw})
        return raw

    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError:
        logger.warning("Failed to decode file id, using raw value", extra={"file_id": raw})
        return raw


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "at least 1 character" in msg_lower:
            msg = "This field must not be empty"
        elif "type" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate

    Returns:
        The validated model instance

    Raises:
        pydantic.ValidationError: If the data does not satisfy the model
    """
    return model.model_validate(data)
