"""
Lambda handler responsible for deleting a stored asset.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.deletion.composer import compose_failure, compose_not_found, compose_success
from core.infrastructure.bindings import DeleteBindings
from core.models.errors import AssetServiceError, NotFoundError
from core.models.outcome import DeletionOutcome, MessageDeletionOutcome
from core.utils.constants import (
    METRIC_ASSETS_DELETED,
    METRIC_TELEGRAM_DELETE_FAILURES,
    METRICS_NAMESPACE,
    PATH_PARAM_FILE_ID,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteAssetRequest
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle asset deletion requests.

    This function:
    - Extracts and percent-decodes the asset identifier from the path
    - Builds backend bindings from the environment
    - Delegates deletion to the service layer
    - Translates not-found and fatal errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received asset delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
            "remaining_time_ms": context.get_remaining_time_in_millis()
            if hasattr(context, "get_remaining_time_in_millis")
            else None,
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteAssetRequest,
            {"file_id": path_params.get(PATH_PARAM_FILE_ID)},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors(include_url=False, include_input=False)},
        )
        return ResponseBuilder.validation_error(
            message="Invalid request parameters",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    logger.info("Deleting file", extra={"file_id": request.file_id})

    try:
        service = DeleteService(DeleteBindings.from_env())
        outcome = service.delete_asset(request.file_id)

    except NotFoundError as exc:
        return compose_not_found(
            request.file_id,
            exc.details.get("kvKey", request.file_id),
            request_id=request_id,
        )

    except AssetServiceError as exc:
        logger.exception(
            "Delete error",
            extra={"file_id": request.file_id, "error_code": exc.error_code},
        )
        return compose_failure(exc, request_id=request_id)

    _record_metrics(outcome)

    return compose_success(outcome, request_id=request_id)


def _record_metrics(outcome: DeletionOutcome) -> None:
    metrics.add_dimension(name="Backend", value=outcome.backend.value)
    metrics.add_metric(name=METRIC_ASSETS_DELETED, unit=MetricUnit.Count, value=1)

    if isinstance(outcome, MessageDeletionOutcome) and not outcome.telegram_deleted:
        metrics.add_metric(name=METRIC_TELEGRAM_DELETE_FAILURES, unit=MetricUnit.Count, value=1)
