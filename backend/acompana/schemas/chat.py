"""
Pydantic models for chat-related schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from acompana.schemas.crisis import HelpResources


class SessionRequest(BaseModel):
    """Create a new session, or resume one when ``session_id`` is given."""

    session_id: Optional[uuid.UUID] = None


class ChatSessionResponse(BaseModel):
    """Schema for chat session response."""

    id: uuid.UUID
    start_date: datetime
    end_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Schema for chat message response."""

    id: uuid.UUID
    chat_session_id: uuid.UUID
    author: str  # 'user' or 'bot'
    content: str
    emotion_type: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SessionHistoryResponse(BaseModel):
    """Resumed session with its messages, oldest first."""

    session_id: uuid.UUID
    start_date: datetime
    messages: List[MessageResponse] = Field(default_factory=list)


class SendMessageRequest(BaseModel):
    """Schema for sending a message to the responder."""

    session_id: Optional[uuid.UUID] = None
    content: Optional[str] = None


class SendMessageResponse(BaseModel):
    """Both persisted messages plus the crisis signal of the exchange."""

    session_id: uuid.UUID
    user: MessageResponse
    bot: MessageResponse
    crisis: bool = False
    help: Optional[HelpResources] = None
