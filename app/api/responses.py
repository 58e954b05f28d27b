"""Build ApiResponse envelopes as JSON responses."""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.schemas.common import ApiResponse


def _envelope(envelope: ApiResponse) -> JSONResponse:
    return JSONResponse(
        status_code=envelope.code,
        content=envelope.model_dump(mode="json", exclude_none=True),
    )


def success(
    data: Any = None,
    message: str | None = None,
    path: str | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Success envelope; pydantic payloads are dumped with their camelCase aliases."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return _envelope(
        ApiResponse(status="success", code=status_code, message=message, data=data, path=path)
    )


def error(
    status_code: int,
    message: str,
    path: str | None = None,
    errors: list[str] | None = None,
) -> JSONResponse:
    return _envelope(
        ApiResponse(status="error", code=status_code, message=message, errors=errors, path=path)
    )


def bad_request(message: str, path: str | None = None) -> JSONResponse:
    return error(status.HTTP_400_BAD_REQUEST, message, path)
