"""Helpers shared by the content routers."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from backend.database import normalize_id, utcnow
from backend.models.user import User

SONG_AUDIO_EXTENSIONS = ('mp3', 'wav', 'ogg')
# Device recorders also produce m4a.
RECORDING_AUDIO_EXTENSIONS = SONG_AUDIO_EXTENSIONS + ('m4a',)
MAX_TITLE_LENGTH = 100


def require_valid_id(value: str, label: str) -> str:
    normalized = normalize_id(value)
    if normalized is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f'Invalid {label} id.')
    return normalized


def get_or_404(db: Session, model, record_id: str, label: str):
    record = db.query(model).filter(model.id == require_valid_id(record_id, label)).first()
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f'{label.capitalize()} not found.')
    return record


def apply_update(record, changes: dict) -> None:
    for field, value in changes.items():
        setattr(record, field, value)
    record.updated_at = utcnow()


def owner_id(user: User | None) -> str | None:
    return user.id if user is not None else None


def clean_required_text(value: str | None, field: str, max_length: int | None = None) -> str:
    if value is None:
        raise ValueError(f'{field} is required.')
    normalized = value.strip()
    if not normalized:
        raise ValueError(f'{field} is required.')
    if max_length is not None and len(normalized) > max_length:
        raise ValueError(f'{field} must be {max_length} characters or fewer.')
    return normalized


def clean_audio_file(value: str | None, extensions: tuple[str, ...] = SONG_AUDIO_EXTENSIONS) -> str:
    normalized = clean_required_text(value, 'Audio file')
    if not normalized.lower().endswith(tuple(f'.{extension}' for extension in extensions)):
        raise ValueError(f"Unsupported audio format ({', '.join(extensions)}).")
    return normalized


def clean_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None
