"""
Common decorators for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, NamedTuple

from aws_lambda_powertools import Logger

from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

GENERIC_SERVER_MESSAGE = "We're experiencing technical difficulties. Please try again in a few moments."


class _ErrorMapping(NamedTuple):
    exc_types: tuple[type[BaseException], ...]
    status: HTTPStatus
    message: str | None
    log_message: str
    server_side: bool


# First match wins. KeyError is a LookupError, so client input errors go first.
_ERROR_MAPPINGS: tuple[_ErrorMapping, ...] = (
    _ErrorMapping(
        (ValueError, KeyError, TypeError, AttributeError),
        HTTPStatus.BAD_REQUEST,
        None,
        "Invalid request reached handler",
        False,
    ),
    _ErrorMapping(
        (PermissionError,),
        HTTPStatus.FORBIDDEN,
        "You don't have permission to perform this action.",
        "Permission denied in handler",
        False,
    ),
    _ErrorMapping(
        (LookupError,),
        HTTPStatus.NOT_FOUND,
        "The requested file was not found.",
        "Lookup failed in handler",
        False,
    ),
    _ErrorMapping(
        (TimeoutError,),
        HTTPStatus.GATEWAY_TIMEOUT,
        "The request took too long to process. Please try again.",
        "Request timeout",
        True,
    ),
    _ErrorMapping(
        (ConnectionError, OSError),
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Unable to connect to storage services. Please try again later.",
        "Connection error",
        True,
    ),
)


def _client_message(exc: Exception) -> str:
    """Keep messages that already read as user-facing, replace the rest."""
    text = str(exc)

    if text.startswith(("Invalid", "Missing", "Cannot", "Unable to", "Failed to")):
        return text

    if isinstance(exc, ValueError):
        return "The provided file id is invalid. Please check it and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "The request is missing a required path parameter."

    return "The request format is incorrect."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    server_side: bool,
) -> None:
    log_extra: dict[str, Any] = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if server_side:
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Answers CORS preflight (OPTIONS) without calling the handler and turns
    any exception the handler lets escape into a JSON error response, so no
    stack trace reaches a client. Domain errors are handled inside the
    handler itself.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"message": "done"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)
        except Exception as exc:
            mapping = next(
                (m for m in _ERROR_MAPPINGS if isinstance(exc, m.exc_types)),
                None,
            )

            if mapping is None:
                _log_error(
                    "Unexpected error in handler",
                    handler_name=func.__name__,
                    request_id=request_id,
                    exc=exc,
                    server_side=True,
                )
                return ResponseBuilder.internal_error(
                    GENERIC_SERVER_MESSAGE,
                    request_id=request_id,
                    cors_origin=cors_origin,
                )

            _log_error(
                mapping.log_message,
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                server_side=mapping.server_side,
            )
            return ResponseBuilder.error(
                status=mapping.status,
                message=mapping.message or _client_message(exc),
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
