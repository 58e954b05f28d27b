"""ORM model for user accounts and their outstanding tokens."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from app.models.base import Base

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


class User(Base):
    """
    User account for signup/login, JWT refresh and password reset.

    role: 'USER' or 'ADMIN'
    refresh_token: the single refresh token currently accepted for this user
    password_reset_token / password_reset_token_expiry: set by forgot-password,
    cleared by a successful reset
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    enabled = Column(Boolean, nullable=False, default=True)
    refresh_token = Column(Text, nullable=True)
    password_reset_token = Column(Text, nullable=True)
    password_reset_token_expiry = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"
