"""Credential store: user lookup, creation and authentication."""

import logging

from sqlalchemy.orm import Session

from backend.auth.security import hash_password, verify_password
from backend.database import utcnow
from backend.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class EmailAlreadyRegistered(Exception):
    pass


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    normalized = normalize_email(email)
    if not normalized:
        return None
    return db.query(User).filter(User.email == normalized).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_active_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id, User.is_banned.is_(False)).first()


def create_user(db: Session, *, name: str, email: str, password: str, is_admin: bool = False) -> User:
    normalized = normalize_email(email)
    if get_user_by_email(db, normalized) is not None:
        raise EmailAlreadyRegistered(normalized)

    user = User(
        name=name.strip(),
        email=normalized,
        hashed_password=hash_password(password),
        is_admin=is_admin,
        is_banned=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def bootstrap_admin(db: Session, *, email: str, password: str, name: str) -> User | None:
    """Ensure an administrator exists for the given email.

    Creates the account when the email is unknown, otherwise promotes the
    existing user. Returns None when email or password is blank.
    """
    if not normalize_email(email) or not password:
        return None

    user = get_user_by_email(db, email)
    if user is None:
        user = create_user(db, name=name, email=email, password=password, is_admin=True)
        logger.info("Created administrator %s", user.email)
        return user

    if not user.is_admin:
        user.is_admin = True
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
        logger.info("Promoted %s to administrator", user.email)
    return user
