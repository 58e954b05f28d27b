"""Unit tests for app.schemas.auth: email normalization shared by signup, login and the CLI."""

import unittest

from pydantic import ValidationError

from app.schemas.auth import LoginRequest, SignupRequest, normalize_email


class TestNormalizeEmail(unittest.TestCase):
    def test_lowercases_domain_only(self) -> None:
        self.assertEqual(normalize_email("Alice@Example.COM"), "Alice@example.com")

    def test_matches_signup_storage(self) -> None:
        signup = SignupRequest(username="alice", email="Alice@Example.COM", password="secret1")
        self.assertEqual(str(signup.email), normalize_email("Alice@Example.COM"))

    def test_rejects_invalid_address(self) -> None:
        with self.assertRaises(ValidationError):
            normalize_email("alice@")


class TestLoginIdentifier(unittest.TestCase):
    def _identifier(self, value: str) -> str:
        return LoginRequest(usernameOrEmail=value, password="secret1").username_or_email

    def test_email_identifier_is_normalized(self) -> None:
        self.assertEqual(self._identifier("Alice@Example.COM"), "Alice@example.com")

    def test_username_is_left_alone(self) -> None:
        self.assertEqual(self._identifier("Alice"), "Alice")

    def test_unparseable_identifier_is_kept(self) -> None:
        self.assertEqual(self._identifier("alice@"), "alice@")


if __name__ == "__main__":
    unittest.main()
