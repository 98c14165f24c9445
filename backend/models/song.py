"""Song model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from backend.database import Base, generate_id, utcnow

DEFAULT_COVER_IMAGE = "default-cover.jpg"


class Song(Base):
    """Represents a song in a musician's library."""
    __tablename__ = "songs"

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(100), nullable=False, index=True)
    artist = Column(String, nullable=False, index=True)
    cover_image = Column(String, default=DEFAULT_COVER_IMAGE, nullable=False)
    audio_file = Column(String, nullable=False)
    duration = Column(Integer)
    genre = Column(String)
    created_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
