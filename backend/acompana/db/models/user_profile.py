from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text, UUID
from sqlalchemy.orm import relationship

from acompana.db.base import Base, TimestampMixin


class UserProfile(Base, TimestampMixin):
    """Structured profile plus an open-ended ``data`` mapping, one per user."""

    user_id = Column(
        UUID(as_uuid=True), ForeignKey("user.id"), unique=True, nullable=False
    )

    age = Column(Integer, nullable=True)
    occupation = Column(String(255), nullable=True)
    sleep_notes = Column(Text, nullable=True)
    stressors = Column(Text, nullable=True)
    goals = Column(Text, nullable=True)
    boundaries = Column(Text, nullable=True)

    # Free-form settings, including applied suggestions
    data = Column(JSON, default=dict)

    # Relationships
    user = relationship("User", back_populates="profile")
