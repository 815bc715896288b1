"""
Create a user with any role (signup only creates ROLE_USER). Run from project root:
  python -m app.scripts.create_user EMAIL NICKNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@example.com admin your-secure-password ROLE_ADMIN
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal
from app.core.security import hash_password
from app.models import User, UserRole
from app.repositories import users
from app.schemas.auth import SignupRequest


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Bundler user (e.g. the first admin).")
    parser.add_argument("email", help="Login email")
    parser.add_argument("nickname", help="Display name (1-50 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    try:
        request = SignupRequest(
            email=args.email.strip(),
            nickname=args.nickname.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(p) for p in error["loc"])
            print(f"Invalid {field}: {error['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if users.exists_by_email(db, request.email):
            print(f"User '{request.email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=request.email,
            nickname=request.nickname,
            password_hash=hash_password(request.password),
            role=args.role,
        )
        users.save(db, user)
        db.commit()
        print(f"Created user '{request.email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
