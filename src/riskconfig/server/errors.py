"""HTTP error types and handlers.

Every error leaves the API as ``{"error": ..., "message": ...}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("riskconfig.server")


class APIError(Exception):
    """Base class for errors rendered as an ``{error, message}`` body."""
    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class ValidationError(APIError):
    """Client sent a missing or malformed field."""
    status_code = 400
    error = "Invalid request body"


class NotFoundError(APIError):
    """Resource (or endpoint) does not exist."""
    status_code = 404
    error = "Configuration not found"


class PayloadTooLargeError(APIError):
    """Request body exceeds the configured limit."""
    status_code = 413
    error = "Payload too large"


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message},
    )


async def _api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.status_code, exc.error, exc.message)


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Unmatched routes and unsupported methods
    if exc.status_code in (404, 405):
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        return error_response(
            404,
            "Endpoint not found",
            f"The endpoint {request.method} {target} does not exist",
        )
    return error_response(exc.status_code, "Request failed", str(exc.detail))


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        400,
        "Invalid request body",
        "Request body must be a valid JSON object",
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error", "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    """Install the ``{error, message}`` handlers on ``app``."""
    app.add_exception_handler(APIError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
