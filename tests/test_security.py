"""Unit tests for app.core.security: bcrypt password hashing."""

import unittest

from app.core.security import PasswordHasher


class TestPasswordHasher(unittest.TestCase):
    """hash is one-way and salted; matches verifies only the original password."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(hashed.startswith("$2"))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(self.hasher.hash("secret1"), self.hasher.hash("secret1"))

    def test_matches_original_password(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertTrue(self.hasher.matches("secret1", hashed))

    def test_rejects_wrong_password(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertFalse(self.hasher.matches("secret2", hashed))

    def test_rejects_missing_or_corrupt_hash(self) -> None:
        self.assertFalse(self.hasher.matches("secret1", None))
        self.assertFalse(self.hasher.matches("secret1", ""))
        self.assertFalse(self.hasher.matches("secret1", "not-a-bcrypt-hash"))


if __name__ == "__main__":
    unittest.main()
