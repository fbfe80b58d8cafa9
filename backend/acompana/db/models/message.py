from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UUID
from sqlalchemy.orm import relationship

from acompana.db.base import Base
from acompana.utils.datetime_helper import utc_now

AUTHOR_USER = "user"
AUTHOR_BOT = "bot"


class Message(Base):
    """Single message within a chat session. Never updated once written."""

    chat_session_id = Column(
        UUID(as_uuid=True), ForeignKey("chatsession.id"), index=True, nullable=False
    )
    author = Column(String(10), nullable=False)  # 'user' or 'bot'
    content = Column(Text, nullable=False)

    # 'feliz' or 'triste', only set on bot messages
    emotion_type = Column(String(20), nullable=True)

    created_at = Column(
        DateTime(timezone=True), default=utc_now, index=True, nullable=False
    )

    # Relationships
    chat_session = relationship("ChatSession", back_populates="messages")
