"""Practice recording model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from backend.database import Base, generate_id, utcnow


class Recording(Base):
    """Represents a practice take attached to a song."""
    __tablename__ = "recordings"

    id = Column(String(32), primary_key=True, default=generate_id)
    # Plain reference, not a foreign key: deleting a song leaves its recordings in place.
    song_id = Column(String(32), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    recording_type = Column(String, default="session", nullable=False)  # session/intro/break
    audio_url = Column(String, nullable=False)
    notes = Column(Text)
    created_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
