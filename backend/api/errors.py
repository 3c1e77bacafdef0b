"""
Exception handlers for the API.

Every error leaves the API as an ErrorResponse body. Domain exceptions
carry their own status code; the status-to-title mapping below is the
only place response titles are decided.
"""

import logging
from http import HTTPStatus
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import WhiteboardError

from .models.errors import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

STATUS_TITLES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_409_CONFLICT: "Conflict",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Server Error",
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def title_for(status_code: int) -> str:
    """Human-readable title for an HTTP status code."""
    if status_code in STATUS_TITLES:
        return STATUS_TITLES[status_code]
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(
    status_code: int,
    message: str,
    code: str,
    errors: Optional[list[FieldError]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        title=title_for(status_code),
        message=message,
        code=code,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def field_errors(errors: list[dict[str, Any]]) -> list[FieldError]:
    """Flatten pydantic/FastAPI validation errors into field/message pairs."""
    result = []
    for error in errors:
        # First loc element is the request part (body, query, path)
        loc = [str(part) for part in error.get("loc", ())[1:]]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        result.append(FieldError(field=".".join(loc) or "body", message=message))
    return result


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Install the API's exception handlers on an application."""

    @app.exception_handler(WhiteboardError)
    async def whiteboard_error_handler(request: Request, exc: WhiteboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.message, exc.details)
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(exc.status_code, exc.message, exc.code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = field_errors(exc.errors())
        message = errors[0].message if len(errors) == 1 else "Invalid request"
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            message,
            "VALIDATION_ERROR",
            errors=errors,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            exc.status_code,
            str(exc.detail),
            f"HTTP_{exc.status_code}",
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) if debug else GENERIC_ERROR_MESSAGE,
            "INTERNAL_ERROR",
        )
