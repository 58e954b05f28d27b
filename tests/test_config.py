"""Unit tests for app.core.config: settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDefaults(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        settings = _settings()
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.EMAIL_PROVIDER, "logging")
        self.assertEqual(settings.PASSWORD_RESET_EXPIRE_MINUTES, 60)
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")


class TestValidation(unittest.TestCase):
    """Out-of-range or malformed values are rejected at load time."""

    def test_rejects_non_sql_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mongodb://localhost:27017/abacus")

    def test_accepts_sqlite_database_url(self) -> None:
        self.assertEqual(_settings(DATABASE_URL="sqlite:///./abacus.db").DATABASE_URL, "sqlite:///./abacus.db")

    def test_rejects_blank_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_rejects_zero_access_lifetime(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ACCESS_EXPIRE_MINUTES=0)

    def test_rejects_reset_url_without_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(PASSWORD_RESET_URL="localhost:3000/reset-password")

    def test_normalizes_log_level(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")

    def test_rejects_unknown_log_level(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_brevo_requires_api_key(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(EMAIL_PROVIDER="brevo")

    def test_brevo_with_api_key(self) -> None:
        settings = _settings(EMAIL_PROVIDER="brevo", BREVO_API_KEY="xkeysib-test")
        self.assertEqual(settings.BREVO_API_KEY.get_secret_value(), "xkeysib-test")


if __name__ == "__main__":
    unittest.main()
