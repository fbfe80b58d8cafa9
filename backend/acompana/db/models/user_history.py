from sqlalchemy import Column, ForeignKey, Text, UUID
from sqlalchemy.orm import relationship

from acompana.db.base import Base, TimestampMixin


class UserHistory(Base, TimestampMixin):
    """Free-form summary of a user's history."""

    user_id = Column(
        UUID(as_uuid=True), ForeignKey("user.id"), unique=True, nullable=False
    )
    summary = Column(Text, nullable=True)

    user = relationship("User", back_populates="history")
