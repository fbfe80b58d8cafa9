"""
Service for storing and retrieving chat messages.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from acompana.core.exceptions import StorageError
from acompana.db.models import Message
from acompana.utils.datetime_helper import utc_now

logger = logging.getLogger(__name__)

# Messages of context sent to the responder
CONTEXT_WINDOW = 15


def store_message(
    db: Session,
    session_id: uuid.UUID,
    author: str,
    content: str,
    emotion: Optional[str] = None,
) -> Message:
    """
    Append a message to a chat session.

    The caller is responsible for checking that the session belongs to the
    requesting user.

    Args:
        db: Database session
        session_id: Chat session ID
        author: Message author ('user' or 'bot')
        content: Message content
        emotion: Optional emotion tag for bot messages

    Returns:
        Created message
    """
    message = Message(
        chat_session_id=session_id,
        author=author,
        content=content,
        emotion_type=emotion,
        created_at=utc_now(),
    )

    try:
        db.add(message)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error storing message in session {session_id}: {str(e)}")
        raise StorageError("Could not store message") from e

    db.refresh(message)
    logger.info(f"Stored {author} message {message.id} in session {session_id}")
    return message


def get_session_messages(db: Session, session_id: uuid.UUID) -> List[Message]:
    """Return every message of a session, oldest first."""
    return (
        db.query(Message)
        .filter(Message.chat_session_id == session_id)
        .order_by(Message.created_at)
        .all()
    )


def get_recent_messages(
    db: Session, session_id: uuid.UUID, limit: int = CONTEXT_WINDOW
) -> List[Message]:
    """
    Return the latest ``limit`` messages of a session in chronological order.
    """
    messages = (
        db.query(Message)
        .filter(Message.chat_session_id == session_id)
        .order_by(desc(Message.created_at))
        .limit(limit)
        .all()
    )

    # Reverse to get oldest first
    messages.reverse()
    return messages
