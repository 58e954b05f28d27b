"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthErrorKind,
    AuthResponse,
    AuthResult,
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from app.schemas.calculator import CalculationRequest, CalculationResponse
from app.schemas.common import ApiResponse
from app.schemas.health import HealthResponse

__all__ = [
    "ApiResponse",
    "AuthErrorKind",
    "AuthResponse",
    "AuthResult",
    "CalculationRequest",
    "CalculationResponse",
    "CurrentUser",
    "ForgotPasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RefreshTokenRequest",
    "ResetPasswordRequest",
    "SignupRequest",
]
