"""Request/response schemas for auth endpoints and the auth flow result."""

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from app.core.security import (
    FULL_NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Stored form of an address as EmailStr produces it (domain lowercased). Raises ValidationError."""
    return str(_EMAIL_ADAPTER.validate_python(value))


class CamelModel(BaseModel):
    """Accepts and emits camelCase field names (fullName, refreshToken, ...)."""

    model_config = ConfigDict(populate_by_name=True)


class SignupRequest(CamelModel):
    """New account details."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Username",
    )
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )
    full_name: str | None = Field(
        default=None,
        alias="fullName",
        max_length=FULL_NAME_MAX_LEN,
        description="Display name",
    )


class LoginRequest(CamelModel):
    """Credentials for login; the identifier may be a username or an email."""

    username_or_email: str = Field(
        ...,
        alias="usernameOrEmail",
        min_length=1,
        max_length=255,
        description="Username or email",
    )
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("username_or_email")
    @classmethod
    def normalize_identifier(cls, v: str) -> str:
        # Emails are stored normalized at signup; anything that does not parse is looked up as-is
        v = v.strip()
        if "@" not in v:
            return v
        try:
            return normalize_email(v)
        except ValidationError:
            return v


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., alias="refreshToken", min_length=1, description="Refresh token")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email")


class ResetPasswordRequest(CamelModel):
    """Reset token from the emailed link plus the new password, typed twice."""

    reset_token: str = Field(..., alias="resetToken", min_length=1, description="Reset token")
    new_password: str = Field(
        ...,
        alias="newPassword",
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="New password",
    )
    confirm_password: str = Field(
        ...,
        alias="confirmPassword",
        min_length=1,
        description="New password again",
    )


class AuthErrorKind(str, Enum):
    """Why an auth flow did not succeed."""

    USERNAME_TAKEN = "USERNAME_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"
    RESET_TOKEN_EXPIRED = "RESET_TOKEN_EXPIRED"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    EMAIL_SEND_FAILURE = "EMAIL_SEND_FAILURE"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class AuthResult(BaseModel):
    """
    Outcome of an auth flow. Failures are values: error is set, tokens are None
    and message says why. Nothing else escapes the auth service.
    """

    # Tokens stay out of repr so results can be logged.
    token: str | None = Field(default=None, repr=False)
    refresh_token: str | None = Field(default=None, repr=False)
    token_type: str = "Bearer"
    username: str | None = None
    email: str | None = None
    full_name: str | None = None
    message: str
    error: AuthErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AuthResponse(CamelModel):
    """Body returned by signup, login, refresh and reset-password."""

    token: str | None = Field(default=None, description="JWT access token")
    refresh_token: str | None = Field(default=None, alias="refreshToken", description="JWT refresh token")
    type: str = Field(default="Bearer", description="Token type")
    username: str | None = None
    email: str | None = None
    full_name: str | None = Field(default=None, alias="fullName")
    message: str | None = None

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            token=result.token,
            refresh_token=result.refresh_token,
            type=result.token_type,
            username=result.username,
            email=result.email,
            full_name=result.full_name,
            message=result.message,
        )


class MessageResponse(BaseModel):
    message: str


class CurrentUser(CamelModel):
    """Authenticated user resolved from a Bearer access token."""

    id: int
    username: str
    email: str
    full_name: str | None = Field(default=None, alias="fullName")
    role: str
