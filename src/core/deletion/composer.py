"""Maps deletion results onto uniform API responses."""

from core.models.errors import AssetServiceError
from core.models.outcome import DeletionOutcome
from core.utils.constants import MESSAGE_NOT_FOUND
from core.utils.response import JsonDict, ResponseBuilder


def compose_success(
    outcome: DeletionOutcome,
    *,
    request_id: str | None = None,
) -> JsonDict:
    """200 response for a full or degraded (best-effort) deletion."""
    return ResponseBuilder.ok(
        outcome.model_dump(by_alias=True),
        request_id=request_id,
    )


def compose_not_found(
    file_id: str,
    kv_key: str,
    *,
    request_id: str | None = None,
) -> JsonDict:
    """404 response echoing the identifier and the last storage key tried."""
    return ResponseBuilder.not_found(
        MESSAGE_NOT_FOUND,
        fields={"fileId": file_id, "kvKey": kv_key},
        request_id=request_id,
    )


def compose_failure(
    exc: AssetServiceError,
    *,
    request_id: str | None = None,
) -> JsonDict:
    """500 response carrying only the error's short message and code."""
    return ResponseBuilder.internal_error(
        exc.message,
        code=exc.error_code,
        request_id=request_id,
    )
