"""Credential store: keyed lookups and upserts for user accounts."""

import logging
from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_username(self, username: str) -> User | None:
        """Retrieves a User by their unique username."""
        return self.session.query(User).filter(User.username == username).first()

    def find_by_email(self, email: str) -> User | None:
        """Retrieves a User by their unique email."""
        return self.session.query(User).filter(User.email == email).first()

    def find_by_username_or_email(self, username_or_email: str) -> User | None:
        """Username match wins over email match when both exist."""
        candidates = (
            self.session.query(User)
            .filter(
                or_(
                    User.username == username_or_email,
                    User.email == username_or_email,
                )
            )
            .all()
        )
        for user in candidates:
            if user.username == username_or_email:
                return user
        return candidates[0] if candidates else None

    def exists_by_username(self, username: str) -> bool:
        return (
            self.session.query(User.id).filter(User.username == username).first()
            is not None
        )

    def exists_by_email(self, email: str) -> bool:
        return self.session.query(User.id).filter(User.email == email).first() is not None

    def save(self, user: User) -> User:
        """
        Insert or update the user in a single transaction and return the refreshed row.

        Stamps updated_at on every save (and created_at on first insert).
        Rolls back and re-raises on any database error, including unique violations.
        """
        now = datetime.now(UTC)
        if user.created_at is None:
            user.created_at = now
        user.updated_at = now
        try:
            self.session.add(user)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to save user %s", user.username)
            raise
        self.session.refresh(user)
        return user
