import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import require_admin
from backend.core.errors import database_error
from backend.core.schemas import ApiModel, ApiRequest
from backend.database import get_db, utcnow
from backend.models.chord_note import ChordNote
from backend.models.recording import Recording
from backend.models.song import Song
from backend.models.user import User
from backend.models.vocal_recording import VocalRecording
from backend.routes.auth_routes import UserResponse
from backend.routes.common import clean_optional_text, get_or_404

# Every route below runs get_current_user, then require_admin, before the handler.
router = APIRouter(tags=['admin'], dependencies=[Depends(require_admin)])

logger = logging.getLogger(__name__)


class DashboardResponse(ApiModel):
    total_users: int
    active_users: int
    banned_users: int
    total_songs: int
    total_vocal_recordings: int
    total_recordings: int
    total_chord_notes: int


class BanRequest(ApiRequest):
    reason: str | None = None


class UserActionResponse(BaseModel):
    success: bool
    message: str
    user: UserResponse


@router.get('/dashboard', response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)):
    try:
        banned_users = db.query(User).filter(User.is_banned.is_(True)).count()
        total_users = db.query(User).count()
        return DashboardResponse(
            total_users=total_users,
            active_users=total_users - banned_users,
            banned_users=banned_users,
            total_songs=db.query(Song).count(),
            total_vocal_recordings=db.query(VocalRecording).count(),
            total_recordings=db.query(Recording).count(),
            total_chord_notes=db.query(ChordNote).count(),
        )
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.post('/ban/{user_id}', response_model=UserActionResponse)
def ban_user(
    user_id: str,
    data: BanRequest | None = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    reason = clean_optional_text(data.reason) if data is not None else None
    try:
        user = get_or_404(db, User, user_id, 'user')
        user.is_banned = True
        user.ban_reason = reason
        user.banned_at = utcnow()
        user.banned_by = admin.id
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    # Outstanding tokens stay valid until expiry but fail the active-user lookup.
    logger.info('Admin %s banned user %s', admin.id, user.id)
    return UserActionResponse(
        success=True,
        message=f'{user.email} has been banned.',
        user=UserResponse.model_validate(user),
    )


@router.post('/unban/{user_id}', response_model=UserActionResponse)
def unban_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        user = get_or_404(db, User, user_id, 'user')
        user.is_banned = False
        user.ban_reason = None
        user.banned_at = None
        user.banned_by = None
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    logger.info('Admin %s unbanned user %s', admin.id, user.id)
    return UserActionResponse(
        success=True,
        message=f'{user.email} has been unbanned.',
        user=UserResponse.model_validate(user),
    )


@router.get('/users', response_model=list[UserResponse])
def list_users(
    banned: bool | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(User)
        if banned is not None:
            query = query.filter(User.is_banned.is_(banned))
        return query.order_by(User.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc
