"""FastAPI dependencies that assemble services from settings and the request's DB session."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import PasswordHasher
from app.repositories.user import UserRepository
from app.services.auth import AuthService
from app.services.notifications import NotificationGateway, build_notification_gateway
from app.services.tokens import TokenService


@lru_cache
def get_notification_gateway() -> NotificationGateway:
    """Gateway chosen once per process from EMAIL_PROVIDER."""
    return build_notification_gateway(get_settings())


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    return TokenService(settings)


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
) -> UserRepository:
    return UserRepository(db)


def get_auth_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    notifications: Annotated[NotificationGateway, Depends(get_notification_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return AuthService(
        users=users,
        tokens=tokens,
        notifications=notifications,
        hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        settings=settings,
    )
