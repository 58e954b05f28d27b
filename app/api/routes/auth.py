"""Signup, login, token refresh, password reset and the current-user dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api import responses
from app.api.deps import get_auth_service, get_token_service, get_user_repository
from app.repositories.user import UserRepository
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
from app.schemas.common import ApiResponse
from app.services.auth import AuthService
from app.services.tokens import TOKEN_TYPE_ACCESS, InvalidTokenError, TokenService

AUTH_HEALTH_MESSAGE = "Authentication API is running!"

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _reply(result: AuthResult, request: Request) -> JSONResponse:
    """Flow failures are 400s; an unexpected error is a 500."""
    path = request.url.path
    if result.ok:
        return responses.success(AuthResponse.from_result(result), result.message, path)
    if result.error is AuthErrorKind.UNEXPECTED_ERROR:
        return responses.error(status.HTTP_500_INTERNAL_SERVER_ERROR, result.message, path)
    return responses.bad_request(result.message, path)


@router.post("/signup", response_model=ApiResponse)
def signup(
    body: SignupRequest,
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Register a new account and return an access token and a refresh token."""
    result = auth.signup(
        username=body.username,
        email=str(body.email),
        password=body.password,
        full_name=body.full_name,
    )
    return _reply(result, request)


@router.post("/login", response_model=ApiResponse)
def login(
    body: LoginRequest,
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """
    Authenticate with username or email and password.
    Include the returned token in the Authorization header as: Bearer <token>
    """
    result = auth.login(body.username_or_email, body.password)
    return _reply(result, request)


@router.post("/refresh", response_model=ApiResponse)
def refresh(
    body: RefreshTokenRequest,
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Exchange the current refresh token for a new token pair; the old refresh token stops working."""
    result = auth.refresh(body.refresh_token)
    return _reply(result, request)


@router.post("/forgot-password", response_model=ApiResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Email a password reset link. The reply never reveals whether the address is registered."""
    result = auth.forgot_password(str(body.email))
    if result.error is AuthErrorKind.UNEXPECTED_ERROR:
        return _reply(result, request)
    return responses.success(
        MessageResponse(message=result.message),
        result.message,
        request.url.path,
    )


@router.post("/reset-password", response_model=ApiResponse)
def reset_password(
    body: ResetPasswordRequest,
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Set a new password using the token from the reset email."""
    result = auth.reset_password(body.reset_token, body.new_password, body.confirm_password)
    return _reply(result, request)


@router.get("/health", response_model=ApiResponse)
def health(request: Request) -> JSONResponse:
    """Liveness check for the authentication API."""
    return responses.success(AUTH_HEALTH_MESSAGE, AUTH_HEALTH_MESSAGE, request.url.path)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> CurrentUser:
    """Dependency: require a valid Bearer access token and return its user. Raises 401 otherwise."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = tokens.decode(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if payload.get("type") != TOKEN_TYPE_ACCESS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = users.find_by_username(payload["sub"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.enabled:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
    )


@router.get("/me", response_model=ApiResponse)
def me(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> JSONResponse:
    """Profile of the authenticated user."""
    return responses.success(current_user, "Current user", request.url.path)
