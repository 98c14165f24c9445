"""Vocal recording model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from backend.database import Base, generate_id, utcnow


class VocalRecording(Base):
    """Represents a standalone voice take, listed alongside songs."""
    __tablename__ = "vocal_recordings"

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(100), nullable=False)
    audio_file = Column(String, nullable=False)
    duration = Column(Integer)
    notes = Column(Text)
    created_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
