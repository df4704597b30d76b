"""Exception handlers that render every failure as an ErrorResponse.

Status mapping:
- ValidationError, litestar client errors and undecodable bodies: 400
- NotFoundError and unmatched routes: 404
- ConflictError: 409
- NotAuthorizedException / PermissionDeniedException: 401 / 403
- RepositoryError and anything unexpected: 500

Internal errors are logged with the originating exception and answered
with a generic body; nothing from the exception reaches the client.
"""

from collections.abc import Mapping
from http import HTTPStatus

import structlog
from litestar import Request, Response
from litestar.exceptions import HTTPException, SerializationException
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from litestar.types import ExceptionHandlersMap

from confhub.api.schemas import ErrorResponse
from confhub.core.exceptions import (
    ConflictError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)  # pyright: ignore[reportAny]

STATUS_TEXTS: dict[int, str] = {
    400: "Invalid request.",
    401: "Unauthorized.",
    403: "Forbidden.",
    404: "Resource not found.",
    409: "Resource conflict.",
    500: "Internal server error.",
}


def status_text_for(status_code: int, /) -> str:
    """Return the user-level status message for an HTTP status code."""
    if status_code in STATUS_TEXTS:
        return STATUS_TEXTS[status_code]
    try:
        return f"{HTTPStatus(status_code).phrase}."
    except ValueError:
        return "Error."


def error_response(
    status_code: int, /, *, error: str | None = None
) -> Response[ErrorResponse]:
    """Build an ErrorResponse with the matching status code."""
    return Response(
        ErrorResponse(
            status=status_code,
            status_text=status_text_for(status_code),
            error=error,
        ),
        status_code=status_code,
    )


def validation_error_handler(
    _request: Request, exc: ValidationError
) -> Response[ErrorResponse]:
    return error_response(HTTP_400_BAD_REQUEST, error=exc.message)


def not_found_handler(
    _request: Request, exc: NotFoundError
) -> Response[ErrorResponse]:
    return error_response(HTTP_404_NOT_FOUND, error=exc.message)


def conflict_handler(
    _request: Request, exc: ConflictError
) -> Response[ErrorResponse]:
    return error_response(HTTP_409_CONFLICT, error=exc.message)


def serialization_error_handler(
    _request: Request, exc: SerializationException
) -> Response[ErrorResponse]:
    """Reject request bodies that are not valid JSON."""
    return error_response(
        HTTP_400_BAD_REQUEST, error=f"malformed request body: {exc.detail}"
    )


def http_exception_handler(
    request: Request, exc: HTTPException
) -> Response[ErrorResponse]:
    """Render litestar's own HTTP exceptions in the common error shape."""
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        return internal_error_handler(request, exc)
    return error_response(exc.status_code, error=_describe_http_exception(exc))


def internal_error_handler(
    request: Request, exc: Exception
) -> Response[ErrorResponse]:
    """Log the failure server-side and answer with a generic 500."""
    if isinstance(exc, RepositoryError):
        logger.error(
            "repository_error",
            operation=exc.operation,
            error=str(exc.original) if exc.original is not None else exc.message,
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
    else:
        logger.error(
            "unhandled_error",
            error_type=type(exc).__name__,
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
    return error_response(HTTP_500_INTERNAL_SERVER_ERROR)


def _describe_http_exception(exc: HTTPException) -> str:
    """Condense litestar's detail and field-level extras into one message."""
    extra = exc.extra
    if isinstance(extra, list) and extra:
        messages: list[str] = []
        for item in extra:  # pyright: ignore[reportUnknownVariableType]
            if isinstance(item, Mapping):
                key = item.get("key")  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
                message = item.get("message", "")  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
                messages.append(f"{key}: {message}" if key else str(message))  # pyright: ignore[reportUnknownArgumentType]
        if messages:
            return "; ".join(messages)
    return exc.detail


EXCEPTION_HANDLERS: ExceptionHandlersMap = {
    ValidationError: validation_error_handler,
    NotFoundError: not_found_handler,
    ConflictError: conflict_handler,
    SerializationException: serialization_error_handler,
    HTTPException: http_exception_handler,
    Exception: internal_error_handler,
}
