from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config


class InvalidToken(Exception):
    """Raised when a bearer token cannot be trusted."""


@dataclass(frozen=True)
class TokenIdentity:
    user_id: str
    is_admin: bool


def create_access_token(user_id: str, is_admin: bool = False, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "is_admin": bool(is_admin),
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )


def verify_access_token(token: str) -> TokenIdentity:
    if not token:
        raise InvalidToken("Token missing")
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise InvalidToken("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(f"Token invalid: {exc}") from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidToken("Token subject missing")
    return TokenIdentity(user_id=user_id, is_admin=bool(payload.get("is_admin", False)))
