"""User lookups and persistence."""

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from app.models import User


def find_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def find_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def exists_by_email(db: Session, email: str) -> bool:
    return bool(db.execute(select(exists().where(User.email == email))).scalar())


def list_all(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.id)).scalars())


def save(db: Session, user: User) -> User:
    """Add the user to the session and flush so the generated id is available."""
    db.add(user)
    db.flush()
    return user
