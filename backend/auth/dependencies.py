import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.users import get_active_user
from backend.core import config
from backend.core.errors import database_error
from backend.database import get_db
from backend.models.user import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

UNAUTHENTICATED_DETAIL = "Authentication required."
FORBIDDEN_DETAIL = "Administrator access required."


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHENTICATED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    # Every failure below surfaces as the same 401; the reason is only logged.
    if credentials is None or not credentials.credentials:
        logger.info("Rejected request: bearer token missing")
        raise _unauthenticated()

    try:
        identity = jwt_handler.verify_access_token(credentials.credentials)
    except jwt_handler.InvalidToken as exc:
        logger.info("Rejected request: %s", exc)
        raise _unauthenticated() from exc

    try:
        user = get_active_user(db, identity.user_id)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc
    if user is None:
        logger.info("Rejected request: user %s banned or not found", identity.user_id)
        raise _unauthenticated()
    return user


def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User | None:
    # Any Authorization header, bearer or not, goes through the full gate.
    if request.headers.get("Authorization") is None and not config.CONTENT_REQUIRES_AUTH:
        return None
    return get_current_user(credentials=credentials, db=db)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_DETAIL)
    return current_user
