"""Auth flows: signup, login, token refresh, forgot password and reset password.

AuthService coordinates the credential store, token service, password hasher
and notification gateway. Expected failures come back as AuthResult values with
an AuthErrorKind; unexpected exceptions are logged and returned as
UNEXPECTED_ERROR so nothing escapes to the HTTP layer.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.models.user import ROLE_USER, User
from app.schemas.auth import AuthErrorKind, AuthResult
from app.services.tokens import InvalidTokenError

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.core.security import PasswordHasher
    from app.repositories.user import UserRepository
    from app.services.notifications import NotificationGateway
    from app.services.tokens import TokenService

logger = logging.getLogger(__name__)

MSG_USER_REGISTERED = "User registered successfully"
MSG_LOGIN_SUCCESSFUL = "Login successful"
MSG_TOKEN_REFRESHED = "Token refreshed successfully"
MSG_FORGOT_PASSWORD = "If the email exists, a password reset link has been sent"
MSG_PASSWORD_RESET = "Password reset successfully"
MSG_INVALID_RESET_TOKEN = "Invalid reset token"

ERROR_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.USERNAME_TAKEN: "Username already exists",
    AuthErrorKind.EMAIL_TAKEN: "Email already exists",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid username/email or password",
    AuthErrorKind.ACCOUNT_DISABLED: "Account is disabled",
    AuthErrorKind.INVALID_REFRESH_TOKEN: "Invalid refresh token",
    AuthErrorKind.INVALID_RESET_TOKEN: "Invalid or expired reset token",
    AuthErrorKind.RESET_TOKEN_EXPIRED: "Reset token has expired",
    AuthErrorKind.PASSWORD_MISMATCH: "Passwords do not match",
    AuthErrorKind.EMAIL_SEND_FAILURE: "Failed to send email",
    AuthErrorKind.UNEXPECTED_ERROR: "An unexpected error occurred",
}


def _failure(kind: AuthErrorKind, message: str | None = None) -> AuthResult:
    return AuthResult(error=kind, message=message or ERROR_MESSAGES[kind])


def _describe(exc: Exception) -> str:
    """
    Client-safe cause for an unexpected failure. SQLAlchemy errors render their SQL
    and bound parameters (password hashes, tokens); only the driver message is kept.
    """
    if isinstance(exc, SQLAlchemyError):
        orig = getattr(exc, "orig", None)
        return f"{type(exc).__name__}: {orig}" if orig is not None else type(exc).__name__
    return str(exc)


def _unexpected(flow: str, exc: Exception) -> AuthResult:
    logger.exception("Unexpected error during %s: %s", flow.lower(), _describe(exc))
    return AuthResult(
        error=AuthErrorKind.UNEXPECTED_ERROR,
        message=f"{flow} failed: {_describe(exc)}",
    )


def _as_utc(value: datetime) -> datetime:
    # Some backends (SQLite) hand timestamps back without tzinfo; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class AuthService:
    """Application service for account signup, login and credential lifecycle."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        notifications: NotificationGateway,
        hasher: PasswordHasher,
        settings: Settings,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._notifications = notifications
        self._hasher = hasher
        self._reset_url = settings.PASSWORD_RESET_URL

    def _issue_credentials(self, user: User, message: str) -> AuthResult:
        """Issue a fresh access/refresh pair and persist the refresh token, replacing any prior one."""
        access_token = self._tokens.issue_access_token(user.username)
        refresh_token = self._tokens.issue_refresh_token(user)
        user.refresh_token = refresh_token
        self._users.save(user)
        return AuthResult(
            token=access_token,
            refresh_token=refresh_token,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            message=message,
        )

    def signup(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str | None = None,
    ) -> AuthResult:
        logger.info("Processing signup for username: %s", username)
        try:
            if self._users.exists_by_username(username):
                logger.warning("Signup rejected: username already exists: %s", username)
                return _failure(AuthErrorKind.USERNAME_TAKEN)
            if self._users.exists_by_email(email):
                logger.warning("Signup rejected: email already exists: %s", email)
                return _failure(AuthErrorKind.EMAIL_TAKEN)

            user = User(
                username=username,
                email=email,
                password_hash=self._hasher.hash(password),
                full_name=full_name,
                role=ROLE_USER,
                enabled=True,
            )
            try:
                user = self._users.save(user)
            except IntegrityError:
                # Lost the race between the exists checks and the insert
                return self._signup_conflict(username)
            result = self._issue_credentials(user, MSG_USER_REGISTERED)
        except Exception as e:
            return _unexpected("Registration", e)

        self._send_welcome(user)
        logger.info("User registered: %s", user.username)
        return result

    def _signup_conflict(self, username: str) -> AuthResult:
        if self._users.find_by_username(username) is not None:
            logger.warning("Signup rejected on insert: username already exists: %s", username)
            return _failure(AuthErrorKind.USERNAME_TAKEN)
        logger.warning("Signup rejected on insert: email already exists for username: %s", username)
        return _failure(AuthErrorKind.EMAIL_TAKEN)

    def _send_welcome(self, user: User) -> None:
        """Best effort: a failed welcome email never fails signup."""
        try:
            sent = self._notifications.send_welcome_email(user.email, user.username)
        except Exception as e:
            logger.warning("Failed to send welcome email to %s: %s", user.email, e)
            sent = False
        if not sent:
            logger.warning(
                "Welcome email not delivered",
                extra={"error_kind": AuthErrorKind.EMAIL_SEND_FAILURE.value, "username": user.username},
            )

    def login(self, username_or_email: str, password: str) -> AuthResult:
        logger.info("Processing login for: %s", username_or_email)
        try:
            user = self._users.find_by_username_or_email(username_or_email)
            if user is None:
                logger.warning("Login failed: user not found: %s", username_or_email)
                return _failure(AuthErrorKind.INVALID_CREDENTIALS)
            if not user.enabled:
                logger.warning("Login failed: account disabled: %s", user.username)
                return _failure(AuthErrorKind.ACCOUNT_DISABLED)
            if not self._hasher.matches(password, user.password_hash):
                logger.warning("Login failed: wrong password for: %s", user.username)
                return _failure(AuthErrorKind.INVALID_CREDENTIALS)

            result = self._issue_credentials(user, MSG_LOGIN_SUCCESSFUL)
        except Exception as e:
            return _unexpected("Login", e)

        logger.info("User logged in: %s", user.username)
        return result

    def refresh(self, refresh_token: str | None) -> AuthResult:
        logger.info("Processing token refresh")
        try:
            if not refresh_token or not refresh_token.strip():
                logger.warning("Refresh rejected: empty token")
                return _failure(AuthErrorKind.INVALID_REFRESH_TOKEN)
            try:
                username = self._tokens.extract_username(refresh_token)
            except InvalidTokenError as e:
                logger.warning("Refresh rejected: %s", e.message)
                return _failure(AuthErrorKind.INVALID_REFRESH_TOKEN)

            user = self._users.find_by_username(username)
            if user is None:
                logger.warning("Refresh rejected: user not found: %s", username)
                return _failure(AuthErrorKind.INVALID_REFRESH_TOKEN)
            if user.refresh_token != refresh_token:
                logger.warning("Refresh rejected: token is not the current one for: %s", username)
                return _failure(AuthErrorKind.INVALID_REFRESH_TOKEN)
            if not self._tokens.is_valid(refresh_token, user):
                logger.warning("Refresh rejected: token failed validation for: %s", username)
                return _failure(AuthErrorKind.INVALID_REFRESH_TOKEN)
            if not user.enabled:
                logger.warning("Refresh rejected: account disabled: %s", username)
                return _failure(AuthErrorKind.ACCOUNT_DISABLED)

            result = self._issue_credentials(user, MSG_TOKEN_REFRESHED)
        except Exception as e:
            return _unexpected("Token refresh", e)

        logger.info("Tokens refreshed for: %s", user.username)
        return result

    def forgot_password(self, email: str) -> AuthResult:
        """
        Start a password reset. The reply is the same generic message whether the
        account exists, is disabled, or the email could not be sent, so callers
        cannot probe for registered addresses.
        """
        logger.info("Processing forgot password for: %s", email)
        generic = AuthResult(message=MSG_FORGOT_PASSWORD)
        try:
            user = self._users.find_by_email(email)
            if user is None:
                logger.info("Forgot password for unknown email: %s", email)
                return generic
            if not user.enabled:
                logger.warning("Forgot password for disabled account: %s", email)
                return generic

            reset_token = self._tokens.issue_password_reset_token(user.email)
            user.password_reset_token = reset_token
            user.password_reset_token_expiry = (
                datetime.now(UTC) + self._tokens.password_reset_lifetime
            )
            self._users.save(user)
        except Exception as e:
            return _unexpected("Forgot password", e)

        reset_url = f"{self._reset_url}?{urlencode({'token': reset_token})}"
        try:
            sent = self._notifications.send_password_reset_email(
                user.email,
                user.username,
                reset_token,
                reset_url,
            )
        except Exception as e:
            logger.error("Password reset email to %s raised: %s", email, e)
            sent = False

        if sent:
            logger.info("Password reset email sent to: %s", email)
        else:
            logger.error(
                "Password reset email not delivered",
                extra={"error_kind": AuthErrorKind.EMAIL_SEND_FAILURE.value, "email": email},
            )
        return generic

    def reset_password(
        self,
        reset_token: str,
        new_password: str,
        confirm_password: str,
    ) -> AuthResult:
        logger.info("Processing password reset")
        try:
            if new_password != confirm_password:
                logger.warning("Password reset rejected: passwords do not match")
                return _failure(AuthErrorKind.PASSWORD_MISMATCH)
            if not self._tokens.is_reset_token_valid(reset_token):
                logger.warning("Password reset rejected: token signature or expiry invalid")
                return _failure(AuthErrorKind.INVALID_RESET_TOKEN)
            try:
                email = self._tokens.extract_email(reset_token)
            except InvalidTokenError as e:
                logger.warning("Password reset rejected: %s", e.message)
                return _failure(AuthErrorKind.INVALID_RESET_TOKEN, MSG_INVALID_RESET_TOKEN)

            user = self._users.find_by_email(email)
            if user is None:
                logger.warning("Password reset rejected: no user for email: %s", email)
                return _failure(AuthErrorKind.INVALID_RESET_TOKEN, MSG_INVALID_RESET_TOKEN)
            if not user.enabled:
                logger.warning("Password reset rejected: account disabled: %s", email)
                return _failure(AuthErrorKind.ACCOUNT_DISABLED)
            if user.password_reset_token != reset_token:
                logger.warning("Password reset rejected: token is not the current one for: %s", user.username)
                return _failure(AuthErrorKind.INVALID_RESET_TOKEN, MSG_INVALID_RESET_TOKEN)
            expiry = user.password_reset_token_expiry
            if expiry is None or _as_utc(expiry) < datetime.now(UTC):
                logger.warning("Password reset rejected: token expired for: %s", user.username)
                return _failure(AuthErrorKind.RESET_TOKEN_EXPIRED)

            user.password_hash = self._hasher.hash(new_password)
            user.password_reset_token = None
            user.password_reset_token_expiry = None
            self._users.save(user)
        except Exception as e:
            return _unexpected("Password reset", e)

        logger.info("Password reset for: %s", user.username)
        return AuthResult(
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            message=MSG_PASSWORD_RESET,
        )
