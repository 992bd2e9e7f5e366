"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Every error body has the shape
{"message": str, "field"?: str, "errors"?: [str]}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nexus_obra.core.config import get_settings
from nexus_obra.core.limiter import rate_limit_headers
from nexus_obra.domain.exceptions import NexusObraException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "DUPLICATE_RESOURCE": 409,
    "MEMBERSHIP_CONFLICT": 409,
    "RATE_LIMITED": 429,
    "CLIENT_LINK_FAILED": 500,
    "UPLOAD_NOT_CONFIGURED": 500,
}

GENERIC_ERROR_MESSAGE = "Internal server error. Check the server console"
ROUTE_NOT_FOUND_MESSAGE = "This route does not exist"


def error_body(
    message: str,
    *,
    field: str | None = None,
    errors: list[str] | None = None,
) -> dict[str, Any]:
    """Build the error response body."""
    body: dict[str, Any] = {"message": message}
    if field:
        body["field"] = field
    if errors is not None:
        body["errors"] = errors
    return body


def _domain_exception_handler(
    request: Request, exc: NexusObraException
) -> JSONResponse:
    """Return {message, field?} with the status mapped from error_code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error(
            "Request failed: %s %s -> %s (%s)",
            request.method,
            request.url.path,
            exc.error_code,
            exc.message,
        )
    return JSONResponse(
        status_code=status,
        content=error_body(exc.message, field=exc.details.get("field")),
        headers=_rate_limit_response_headers(exc),
    )


def _rate_limit_response_headers(exc: NexusObraException) -> dict[str, str] | None:
    """Retry-After plus the RateLimit pair for a 429 that knows its window."""
    details = exc.details
    if exc.error_code != "RATE_LIMITED" or details.get("limit") is None:
        return None
    headers = rate_limit_headers(
        details["scope"],
        details["limit"],
        details["window_seconds"],
        details["remaining"],
        details["retry_after"],
    )
    headers["Retry-After"] = str(details["retry_after"])
    return headers


def _format_validation_error(error: dict[str, Any]) -> str:
    """Render one pydantic error as '"<field>" <message>'."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    label = ".".join(loc)
    message = error.get("msg", "is invalid")
    return f'"{label}" {message}' if label else message


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 before any handler logic runs; lists one message per failed field."""
    return JSONResponse(
        status_code=400,
        content=error_body(
            "Validation failed",
            errors=[_format_validation_error(e) for e in exc.errors()],
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return {message} for Starlette HTTP exceptions; unknown routes get a fixed message."""
    message = exc.detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = ROUTE_NOT_FOUND_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(message)),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log method/path/error and return 500; include detail only when debug is True."""
    logger.exception(
        "Unhandled request error: method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc,
    )
    detail = str(exc) if get_settings().debug else GENERIC_ERROR_MESSAGE
    return JSONResponse(status_code=500, content=error_body(detail))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: NexusObraException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(NexusObraException, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
