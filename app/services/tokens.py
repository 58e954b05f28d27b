"""JWT issuance and validation for access, refresh and password-reset tokens."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.models.user import User

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"
TOKEN_TYPE_PASSWORD_RESET = "password_reset"


class InvalidTokenError(Exception):
    """Raised when a token is malformed, forged, expired or of the wrong type."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        self.message = message
        super().__init__(message)


class TokenService:
    """
    Signs and verifies tokens with the configured secret. Holds no token state:
    which refresh/reset token is current is tracked on the user record.

    Every token carries a random jti, so two tokens issued for the same subject
    within the same second still differ.
    """

    def __init__(self, settings: Settings) -> None:
        secret = settings.JWT_SECRET.get_secret_value()
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        self._secret = secret
        self._algorithm = settings.JWT_ALGORITHM
        self._access_expire = timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES)
        self._refresh_expire = timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)
        self._reset_expire = timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)

    @property
    def password_reset_lifetime(self) -> timedelta:
        return self._reset_expire

    def issue_access_token(self, username: str) -> str:
        """Short-lived token identifying the user by username."""
        return self._encode(username, TOKEN_TYPE_ACCESS, self._access_expire)

    def issue_refresh_token(self, user: User) -> str:
        """Longer-lived token bound to the user's identity."""
        return self._encode(
            user.username,
            TOKEN_TYPE_REFRESH,
            self._refresh_expire,
            {"uid": user.id, "role": user.role},
        )

    def issue_password_reset_token(self, email: str) -> str:
        """Token encoding the account email; expires after the reset lifetime."""
        return self._encode(email, TOKEN_TYPE_PASSWORD_RESET, self._reset_expire)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry and return the claims.
        Raises InvalidTokenError on any failure.
        """
        if not token or not token.strip():
            raise InvalidTokenError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        if not isinstance(payload.get("sub"), str) or not payload["sub"]:
            raise InvalidTokenError("Malformed token payload: missing subject")
        return payload

    def extract_username(self, token: str) -> str:
        return self.decode(token)["sub"]

    def extract_email(self, reset_token: str) -> str:
        payload = self.decode(reset_token)
        if payload.get("type") != TOKEN_TYPE_PASSWORD_RESET:
            raise InvalidTokenError("Not a password reset token")
        return payload["sub"]

    def is_valid(self, token: str, user: User) -> bool:
        """True if the token verifies, is unexpired and was issued for this user."""
        try:
            payload = self.decode(token)
        except InvalidTokenError:
            return False
        return payload["sub"] == user.username

    def is_reset_token_valid(self, token: str) -> bool:
        """Signature, expiry and type only; binding to a user is checked by the caller."""
        try:
            payload = self.decode(token)
        except InvalidTokenError:
            return False
        return payload.get("type") == TOKEN_TYPE_PASSWORD_RESET

    def _encode(
        self,
        subject: str,
        token_type: str,
        lifetime: timedelta,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": subject,
            "type": token_type,
            "iat": now,
            "exp": now + lifetime,
            "jti": uuid.uuid4().hex,
        }
        if extra_claims:
            payload.update(extra_claims)
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)
