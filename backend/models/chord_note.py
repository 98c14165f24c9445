"""Chord note model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from backend.database import Base, generate_id, utcnow


class ChordNote(Base):
    """Represents a chord progression noted against a song."""
    __tablename__ = "chord_notes"

    id = Column(String(32), primary_key=True, default=generate_id)
    song_id = Column(String(32), nullable=False, index=True)
    chord_progression = Column(Text, nullable=False)
    position = Column(Integer)  # seconds into the song
    notes = Column(Text)
    created_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
