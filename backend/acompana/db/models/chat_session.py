from sqlalchemy import Column, DateTime, ForeignKey, UUID
from sqlalchemy.orm import relationship

from acompana.db.base import Base
from acompana.utils.datetime_helper import utc_now


class ChatSession(Base):
    """Conversation between one user and the responder."""

    user_id = Column(
        UUID(as_uuid=True), ForeignKey("user.id"), index=True, nullable=False
    )
    start_date = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="chat_sessions")
    messages = relationship(
        "Message", back_populates="chat_session", order_by="Message.created_at"
    )
