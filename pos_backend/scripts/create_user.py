"""
Create a user without going through the public register route (e.g. the first admin).
Run from project root:
  python -m pos_backend.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m pos_backend.scripts.create_user admin admin@shop.example your-secure-password ADMIN
"""
import argparse
import sys

from sqlalchemy.orm import Session

from pos_backend.core.database import SessionLocal
from pos_backend.core.errors import EmailTaken, UsernameTaken
from pos_backend.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from pos_backend.models.user import Role, User
from pos_backend.repositories.users import UserRepository


def create_user(db: Session, username: str, email: str, password: str, role: Role) -> User:
    """Insert an active user; raises UsernameTaken/EmailTaken on duplicates."""
    users = UserRepository(db)
    if users.exists_by_username(username):
        raise UsernameTaken(f"User '{username}' already exists.")
    if users.exists_by_email(email):
        raise EmailTaken(f"Email '{email}' is already in use.")
    user = users.add(
        User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            enabled=True,
            account_non_expired=True,
            account_non_locked=True,
            credentials_non_expired=True,
        )
    )
    db.commit()
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a POS user.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=Role.STAFF.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        create_user(db, username, args.email.strip(), args.password, Role(args.role))
    except (UsernameTaken, EmailTaken) as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
