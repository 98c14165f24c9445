import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across FastAPI's threadpool workers.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(config.DATABASE_URL, connect_args=_connect_args(config.DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    # Import for side effects: every model must be registered on Base.metadata.
    from backend.models import chord_note, recording, song, user, vocal_recording  # noqa: F401

    Base.metadata.create_all(bind=engine)


def generate_id() -> str:
    return uuid.uuid4().hex


def normalize_id(value: str | None) -> str | None:
    """Return the canonical hex form of an identifier, or None if malformed."""
    if not value:
        return None
    try:
        return uuid.UUID(value.strip()).hex
    except (ValueError, AttributeError):
        return None


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
