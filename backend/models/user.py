"""User model definitions."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from backend.database import Base, generate_id, utcnow


class User(Base):
    """Represents an application user and their ban state."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    is_banned = Column(Boolean, default=False, nullable=False, index=True)
    ban_reason = Column(String)
    banned_at = Column(DateTime)
    banned_by = Column(String(32), ForeignKey("users.id"))
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
