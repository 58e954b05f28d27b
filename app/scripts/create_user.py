"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--full-name NAME] [--role USER|ADMIN]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password --role ADMIN
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    PasswordHasher,
)
from app.models.user import ROLE_ADMIN, ROLE_USER, User
from app.repositories.user import UserRepository
from app.schemas.auth import normalize_email


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Abacus user from the command line.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--full-name", default=None, help="Display name")
    parser.add_argument("--role", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    try:
        # Same stored form the signup endpoint writes
        email = normalize_email(args.email.strip())
    except ValidationError:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    hasher = PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        users = UserRepository(db)
        if users.exists_by_username(username):
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        if users.exists_by_email(email):
            print(f"Email '{email}' is already registered.", file=sys.stderr)
            return 1
        users.save(
            User(
                username=username,
                email=email,
                password_hash=hasher.hash(args.password),
                full_name=args.full_name,
                role=args.role,
                enabled=True,
            )
        )
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
