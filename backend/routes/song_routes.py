import logging
from datetime import datetime
from enum import Enum

from fastapi import APIRouter, Depends, status
from pydantic import Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_optional_user
from backend.core.errors import database_error
from backend.core.schemas import ApiModel, ApiRequest, MessageResponse
from backend.database import get_db
from backend.models.song import DEFAULT_COVER_IMAGE, Song
from backend.models.user import User
from backend.models.vocal_recording import VocalRecording
from backend.routes.common import (
    MAX_TITLE_LENGTH,
    RECORDING_AUDIO_EXTENSIONS,
    apply_update,
    clean_audio_file,
    clean_optional_text,
    clean_required_text,
    get_or_404,
    owner_id,
)

router = APIRouter(tags=['songs'])

logger = logging.getLogger(__name__)

SONG_TYPE = 'song'
VOCAL_TYPE = 'vocal'


class Genre(str, Enum):
    POP = 'Pop'
    ROCK = 'Rock'
    HIP_HOP = 'Hip-Hop'
    CLASSICAL = 'Classical'
    JAZZ = 'Jazz'
    OTHER = 'Other'


class SongUpdateRequest(ApiRequest):
    title: str | None = None
    artist: str | None = None
    cover_image: str | None = None
    audio_file: str | None = None
    duration: int | None = Field(default=None, ge=1)
    genre: Genre | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        return clean_required_text(value, 'Title', MAX_TITLE_LENGTH)

    @field_validator('artist')
    @classmethod
    def validate_artist(cls, value: str | None) -> str:
        return clean_required_text(value, 'Artist')

    @field_validator('cover_image')
    @classmethod
    def validate_cover_image(cls, value: str | None) -> str:
        return clean_optional_text(value) or DEFAULT_COVER_IMAGE

    @field_validator('audio_file')
    @classmethod
    def validate_audio_file(cls, value: str | None) -> str:
        return clean_audio_file(value)


class SongCreateRequest(SongUpdateRequest):
    title: str
    artist: str
    cover_image: str | None = DEFAULT_COVER_IMAGE
    audio_file: str


class SongResponse(ApiModel):
    id: str
    title: str
    artist: str
    cover_image: str
    audio_file: str
    duration: int | None = None
    genre: str | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class VocalRecordingUpdateRequest(ApiRequest):
    title: str | None = None
    audio_file: str | None = None
    duration: int | None = Field(default=None, ge=1)
    notes: str | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        return clean_required_text(value, 'Title', MAX_TITLE_LENGTH)

    @field_validator('audio_file')
    @classmethod
    def validate_audio_file(cls, value: str | None) -> str:
        return clean_audio_file(value, RECORDING_AUDIO_EXTENSIONS)

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return clean_optional_text(value)


class VocalRecordingCreateRequest(VocalRecordingUpdateRequest):
    title: str
    audio_file: str


class VocalRecordingResponse(ApiModel):
    id: str
    title: str
    audio_file: str
    duration: int | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


def song_update_fields(data: SongUpdateRequest) -> dict:
    changes = data.model_dump(exclude_unset=True)
    if changes.get('genre') is not None:
        changes['genre'] = Genre(changes['genre']).value
    return changes


def tag_content(record, response_model, content_type: str) -> dict:
    payload = response_model.model_validate(record).model_dump(mode='json', by_alias=True)
    payload['type'] = content_type
    return payload


def merge_content(songs: list[Song], vocal_recordings: list[VocalRecording]) -> list[dict]:
    """Interleave songs and vocal recordings, newest first, tagged by origin."""
    tagged = [(song.created_at, tag_content(song, SongResponse, SONG_TYPE)) for song in songs]
    tagged.extend(
        (vocal.created_at, tag_content(vocal, VocalRecordingResponse, VOCAL_TYPE))
        for vocal in vocal_recordings
    )
    tagged.sort(key=lambda item: item[0], reverse=True)
    return [payload for _, payload in tagged]


@router.post('', response_model=SongResponse, status_code=status.HTTP_201_CREATED)
def create_song(
    data: SongCreateRequest,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        song = Song(**song_update_fields(data), created_by=owner_id(current_user))
        db.add(song)
        db.commit()
        db.refresh(song)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    logger.info('Saved song "%s" (%s)', song.title, song.id)
    return song


@router.get('', response_model=list[SongResponse])
def list_songs(db: Session = Depends(get_db)):
    try:
        return db.query(Song).order_by(Song.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.get('/all')
def list_all_content(db: Session = Depends(get_db)):
    try:
        songs = db.query(Song).all()
        vocal_recordings = db.query(VocalRecording).all()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return merge_content(songs, vocal_recordings)


# Vocal routes are registered before /{song_id} so "vocal" is not read as an id.

@router.post('/vocal', response_model=VocalRecordingResponse, status_code=status.HTTP_201_CREATED)
def create_vocal_recording(
    data: VocalRecordingCreateRequest,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        vocal_recording = VocalRecording(**data.model_dump(exclude_unset=True), created_by=owner_id(current_user))
        db.add(vocal_recording)
        db.commit()
        db.refresh(vocal_recording)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return vocal_recording


@router.get('/vocal', response_model=list[VocalRecordingResponse])
def list_vocal_recordings(db: Session = Depends(get_db)):
    try:
        return db.query(VocalRecording).order_by(VocalRecording.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.get('/vocal/{recording_id}', response_model=VocalRecordingResponse)
def get_vocal_recording(recording_id: str, db: Session = Depends(get_db)):
    try:
        return get_or_404(db, VocalRecording, recording_id, 'vocal recording')
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.put('/vocal/{recording_id}', response_model=VocalRecordingResponse)
def update_vocal_recording(
    recording_id: str,
    data: VocalRecordingUpdateRequest,
    db: Session = Depends(get_db),
):
    try:
        vocal_recording = get_or_404(db, VocalRecording, recording_id, 'vocal recording')
        apply_update(vocal_recording, data.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(vocal_recording)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return vocal_recording


@router.delete('/vocal/{recording_id}', response_model=MessageResponse)
def delete_vocal_recording(recording_id: str, db: Session = Depends(get_db)):
    try:
        vocal_recording = get_or_404(db, VocalRecording, recording_id, 'vocal recording')
        db.delete(vocal_recording)
        db.commit()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return MessageResponse(message='Vocal recording deleted.')


@router.get('/{song_id}', response_model=SongResponse)
def get_song(song_id: str, db: Session = Depends(get_db)):
    try:
        return get_or_404(db, Song, song_id, 'song')
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.put('/{song_id}', response_model=SongResponse)
def update_song(song_id: str, data: SongUpdateRequest, db: Session = Depends(get_db)):
    try:
        song = get_or_404(db, Song, song_id, 'song')
        apply_update(song, song_update_fields(data))
        db.commit()
        db.refresh(song)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return song


@router.delete('/{song_id}', response_model=MessageResponse)
def delete_song(song_id: str, db: Session = Depends(get_db)):
    try:
        song = get_or_404(db, Song, song_id, 'song')
        logger.info('Deleting song "%s" (%s)', song.title, song.id)
        db.delete(song)
        db.commit()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return MessageResponse(message='Song deleted.')
