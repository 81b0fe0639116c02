"""Exception handlers: map domain, storage and framework errors to JSON responses.

Every error body has the same envelope:
{"status": "error", "error": <code>, "message": <text>, "details": {...}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import FragmentsException
from app.infrastructure.exceptions import StorageException

logger = logging.getLogger(__name__)

# Unlisted codes are client errors.
ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "RESOURCE_NOT_FOUND": 404,
    "UNSUPPORTED_TYPE": 415,
    "CONVERSION_UNSUPPORTED": 415,
}


def _error_response(status_code: int, code: str, message: Any, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "error": code,
            "message": message,
            "details": details if details is not None else {},
        },
    )


def _fragments_exception_handler(request: Request, exc: FragmentsException) -> JSONResponse:
    if isinstance(exc, StorageException):
        # Backend paths and OS errors stay in the log unless debugging.
        logger.error(
            "Storage failure on %s %s: %s %s",
            request.method, request.url.path, exc.message, exc.details,
        )
        details = exc.details if get_settings().debug else None
        return _error_response(500, exc.error_code, exc.message, details)

    status_code = ERROR_CODE_STATUS.get(exc.error_code, 400)
    logger.warning("%s %s rejected (%d): %s", request.method, request.url.path, status_code, exc.message)
    return _error_response(status_code, exc.error_code, exc.message, exc.details)


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", exc.errors())


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", exc.detail)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the handlers above on app. Call once, right after creating it."""
    app.add_exception_handler(FragmentsException, _fragments_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
