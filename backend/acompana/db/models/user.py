from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from acompana.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User account used for authentication."""

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=False)

    # Status
    is_active = Column(Boolean, default=True)

    # Relationships
    profile = relationship("UserProfile", back_populates="user", uselist=False)
    history = relationship("UserHistory", back_populates="user", uselist=False)
    chat_sessions = relationship("ChatSession", back_populates="user")
