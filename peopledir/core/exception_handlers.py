"""Exception handlers producing the `{type, message}` error body.

Every failure the API reports, whether raised by the user service, by
FastAPI request parsing, or by routing, leaves through one of these
handlers so the directory client can always read `type` and `message`.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from peopledir.core.exceptions import AppException, InternalError, ValidationError

logger = logging.getLogger("peopledir.exception")


def error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"type": error_type, "message": message},
    )


def format_validation_errors(errors: Sequence[Any]) -> str:
    """Join pydantic errors into one `field: msg; field: msg` string.

    The `body` location prefix added by FastAPI is dropped so JSON and
    multipart requests report fields the same way.
    """
    parts = []
    for error in errors:
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts)


def _request_extra(request: Request, status_code: int, error_type: str) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "error_type": error_type,
    }


def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Domain errors: client mistakes log at INFO, server failures at ERROR."""
    extra = _request_extra(request, exc.status_code, exc.error_type)
    if exc.status_code >= 500:
        # The traceback is only useful when a lower-level error was wrapped.
        logger.error(
            "%s: %s",
            exc.error_type,
            exc.message,
            extra=extra,
            exc_info=exc.__cause__ is not None,
        )
    else:
        logger.info("%s: %s", exc.error_type, exc.message, extra=extra)
    return error_response(exc.status_code, exc.error_type, exc.message)


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown paths and wrong methods."""
    return error_response(exc.status_code, "http_error", str(exc.detail))


def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON bodies are client errors (400), like invalid form fields."""
    error = ValidationError(format_validation_errors(exc.errors()))
    return app_exception_handler(request, error)


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error = InternalError("An unexpected error occurred")
    logger.error(
        "Unhandled %s on %s %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        extra=_request_extra(request, error.status_code, error.error_type),
        exc_info=exc,
    )
    return error_response(error.status_code, error.error_type, error.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
