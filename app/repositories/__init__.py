"""Persistence access for ORM models."""

from app.repositories.user import UserRepository

__all__ = ["UserRepository"]
