"""Exception handlers that turn framework and unhandled errors into ApiResponse envelopes."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.responses import error

logger = logging.getLogger(__name__)


def _format_validation_error(err: dict) -> str:
    """'body.email: value is not a valid email address' -> 'email: value is not ...'."""
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "request"
    return f"{field}: {err.get('msg', 'invalid value')}"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the envelope-producing handlers on the application."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = [_format_validation_error(e) for e in exc.errors()]
        logger.warning("Validation error on %s %s: %s", request.method, request.url.path, errors)
        return error(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            path=request.url.path,
            errors=errors,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        response = error(exc.status_code, str(exc.detail), path=request.url.path)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            path=request.url.path,
        )
