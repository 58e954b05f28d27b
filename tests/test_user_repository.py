"""Tests for app.repositories.user against an in-memory SQLite database."""

import unittest
from datetime import datetime

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, User
from app.repositories.user import UserRepository


def _session() -> Session:
    """Fresh in-memory database with the users table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()


def _user(username: str = "alice", email: str = "alice@x.com", **kwargs: object) -> User:
    defaults = {"password_hash": "hash", "full_name": "Alice A", "role": "USER", "enabled": True}
    defaults.update(kwargs)
    return User(username=username, email=email, **defaults)


class TestSave(unittest.TestCase):
    def setUp(self) -> None:
        self.session = _session()
        self.users = UserRepository(self.session)

    def tearDown(self) -> None:
        self.session.close()

    def test_assigns_id_and_timestamps(self) -> None:
        user = self.users.save(_user())
        self.assertIsNotNone(user.id)
        self.assertIsInstance(user.created_at, datetime)
        self.assertIsInstance(user.updated_at, datetime)

    def test_update_refreshes_updated_at_only(self) -> None:
        user = self.users.save(_user())
        created_at = user.created_at
        first_update = user.updated_at
        user.refresh_token = "rt"
        user = self.users.save(user)
        self.assertEqual(user.created_at, created_at)
        self.assertGreaterEqual(user.updated_at, first_update)
        self.assertEqual(self.users.find_by_username("alice").refresh_token, "rt")

    def test_duplicate_username_raises_and_rolls_back(self) -> None:
        self.users.save(_user())
        with self.assertRaises(IntegrityError):
            self.users.save(_user(email="other@x.com"))
        # Session is usable again after the rollback
        self.assertTrue(self.users.exists_by_username("alice"))

    def test_duplicate_email_raises(self) -> None:
        self.users.save(_user())
        with self.assertRaises(IntegrityError):
            self.users.save(_user(username="alice2"))


class TestLookups(unittest.TestCase):
    def setUp(self) -> None:
        self.session = _session()
        self.users = UserRepository(self.session)
        self.users.save(_user())

    def tearDown(self) -> None:
        self.session.close()

    def test_find_by_username(self) -> None:
        self.assertEqual(self.users.find_by_username("alice").email, "alice@x.com")
        self.assertIsNone(self.users.find_by_username("nobody"))

    def test_find_by_email(self) -> None:
        self.assertEqual(self.users.find_by_email("alice@x.com").username, "alice")
        self.assertIsNone(self.users.find_by_email("nobody@x.com"))

    def test_exists(self) -> None:
        self.assertTrue(self.users.exists_by_username("alice"))
        self.assertFalse(self.users.exists_by_username("bob"))
        self.assertTrue(self.users.exists_by_email("alice@x.com"))
        self.assertFalse(self.users.exists_by_email("bob@x.com"))

    def test_find_by_username_or_email(self) -> None:
        self.assertEqual(self.users.find_by_username_or_email("alice").username, "alice")
        self.assertEqual(self.users.find_by_username_or_email("alice@x.com").username, "alice")
        self.assertIsNone(self.users.find_by_username_or_email("nobody"))

    def test_username_match_wins_over_email_match(self) -> None:
        # bob's username happens to equal alice's email address
        self.users.save(_user(username="alice@x.com", email="bob@x.com"))
        found = self.users.find_by_username_or_email("alice@x.com")
        self.assertEqual(found.email, "bob@x.com")


if __name__ == "__main__":
    unittest.main()
