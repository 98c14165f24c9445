from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_optional_user
from backend.core.errors import database_error
from backend.core.schemas import ApiModel, ApiRequest, MessageResponse
from backend.database import get_db
from backend.models.chord_note import ChordNote
from backend.models.user import User
from backend.routes.common import (
    apply_update,
    clean_optional_text,
    clean_required_text,
    get_or_404,
    owner_id,
    require_valid_id,
)
from backend.routes.recording_routes import require_song

router = APIRouter(tags=['chords'])


class ChordNoteUpdateRequest(ApiRequest):
    chord_progression: str | None = None
    position: int | None = Field(default=None, ge=0)
    notes: str | None = None

    @field_validator('chord_progression')
    @classmethod
    def validate_chord_progression(cls, value: str | None) -> str:
        return clean_required_text(value, 'Chord progression')

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return clean_optional_text(value)


class ChordNoteCreateRequest(ChordNoteUpdateRequest):
    song_id: str
    chord_progression: str


class ChordNoteResponse(ApiModel):
    id: str
    song_id: str
    chord_progression: str
    position: int | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


@router.post('', response_model=ChordNoteResponse, status_code=status.HTTP_201_CREATED)
def create_chord_note(
    data: ChordNoteCreateRequest,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        changes = data.model_dump(exclude_unset=True)
        changes['song_id'] = require_song(db, data.song_id)
        chord_note = ChordNote(**changes, created_by=owner_id(current_user))
        db.add(chord_note)
        db.commit()
        db.refresh(chord_note)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return chord_note


@router.get('', response_model=list[ChordNoteResponse])
def list_chord_notes(
    song_id: str | None = Query(default=None, alias='songId'),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(ChordNote)
        if song_id is not None:
            query = query.filter(ChordNote.song_id == require_valid_id(song_id, 'song'))
        return query.order_by(ChordNote.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.get('/{chord_note_id}', response_model=ChordNoteResponse)
def get_chord_note(chord_note_id: str, db: Session = Depends(get_db)):
    try:
        return get_or_404(db, ChordNote, chord_note_id, 'chord note')
    except SQLAlchemyError as exc:
        raise database_error(db) from exc


@router.put('/{chord_note_id}', response_model=ChordNoteResponse)
def update_chord_note(chord_note_id: str, data: ChordNoteUpdateRequest, db: Session = Depends(get_db)):
    try:
        chord_note = get_or_404(db, ChordNote, chord_note_id, 'chord note')
        apply_update(chord_note, data.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(chord_note)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return chord_note


@router.delete('/{chord_note_id}', response_model=MessageResponse)
def delete_chord_note(chord_note_id: str, db: Session = Depends(get_db)):
    try:
        chord_note = get_or_404(db, ChordNote, chord_note_id, 'chord note')
        db.delete(chord_note)
        db.commit()
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    return MessageResponse(message='Chord note deleted.')
