from datetime import datetime
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_optional_user
from backend.core.errors import database_error
from backend.core.schemas import ApiModel, ApiRequest, MessageResponse
from backend.database import get_db
from backend.models.recording import Recording
from backend.models.song import Song
from backend.models.user import User
from backend.routes.common import (
    MAX_TITLE_LENGTH,
    apply_update,
    clean_optional_text,
    clean_required_text,
    get_or_404,
    owner_id,
    require_valid_id,
)

router = APIRouter(tags=['recordings'])


class RecordingType(str, Enum):
    SESSION = 'session'
    INTRO = 'intro'
    BREAK = 'break'


class RecordingUpdateRequest(ApiRequest):
    title: str | None = None
    recording_type: RecordingType | None = Field(default=None, alias='type')
    audio_url: str | None = None
    notes: str | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        return clean_required_text(value, 'Title', MAX_TITLE_LENGTH)

    @field_validator('recording_type')
    @classmethod
    def validate_recording_type(cls, value: RecordingType | None) -> RecordingType:
        if value is None:
            raise ValueError('Recording type is required.')
        return value

    @field_validator('audio_url')
    @classmethod
    def validate_audio_url(cls, value: str | None) -> str:
        return clean_required_text(value, 'Audio URL')

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return clean_optional_text(value)


class RecordingCreateRequest(RecordingUpdateRequest):
    song_id: str
    title: str
    recording_type: RecordingType = Field(default=RecordingType.SESSION, alias='type')
    audio_url: str


class RecordingResponse(ApiModel):
    id: str
    song_id: str
    title: str
    recording_type: str = Field(alias='type')
    audio_url: str
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


def recording_fields(data: RecordingUpdateRequest) -> dict:
    changes = data.model_dump(exclude_unset=True)
    if 'recording_type' in changes:
        changes['recording_type'] = RecordingType(changes['recording_type']).value
    return changes


def require_song(db: Session, song_id: str) -> str:
    """Resolve a parent song reference, raising 400/404 like any other lookup."""
    normalized = require_valid_id(song_id, 'song')
    if db.query(Song.id).filter(Song.id == normalized).first() is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Song not found.')
    return normalized


@router.post('', response_model=RecordingResponse, status_code=status.HTTP_201_CREATED)
def create_recording(
    data: RecordingCreateRequest,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        changes = recording_fields(data)
        changes['song_id'] = require_song(db, data.song_id)
        recording = Recording(**changes, created_by=owner_id(current_user))
        db.add(recording)
        db.commit()
        db.refresh(recording)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return recording


@router.get('', response_model=list[RecordingResponse])
def list_recordings(
    song_id: str | None = Query(default=None, alias='songId'),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Recording)
        if song_id is not None:
            query = query.filter(Recording.song_id == require_valid_id(song_id, 'song'))
        return query.order_by(Recording.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.get('/{recording_id}', response_model=RecordingResponse)
def get_recording(recording_id: str, db: Session = Depends(get_db)):
    try:
        return get_or_404(db, Recording, recording_id, 'recording')
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.put('/{recording_id}', response_model=RecordingResponse)
def update_recording(recording_id: str, data: RecordingUpdateRequest, db: Session = Depends(get_db)):
    try:
        recording = get_or_404(db, Recording, recording_id, 'recording')
        apply_update(recording, recording_fields(data))
        db.commit()
        db.refresh(recording)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return recording


@router.delete('/{recording_id}', response_model=MessageResponse)
def delete_recording(recording_id: str, db: Session = Depends(get_db)):
    try:
        recording = get_or_404(db, Recording, recording_id, 'recording')
        db.delete(recording)
        db.commit()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return MessageResponse(message='Recording deleted.')
