"""Response envelope shared by every API endpoint."""

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """
    Uniform wrapper: status/code/message always present, data on success,
    errors for validation failures. Null fields are omitted on the wire.
    """

    status: Literal["success", "error"] = Field(..., description="Response status")
    code: int = Field(..., description="HTTP status code")
    message: str | None = Field(default=None, description="Human-readable message")
    data: Any = Field(default=None, description="Payload on success")
    errors: list[str] | None = Field(default=None, description="Field-level validation errors")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    path: str | None = Field(default=None, description="Request path")
