"""
Service for managing chat sessions.
"""

import logging
import uuid
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy import desc, and_
from sqlalchemy.exc import SQLAlchemyError

from acompana.core.exceptions import NotFoundError, StorageError
from acompana.db.models import ChatSession
from acompana.utils.datetime_helper import utc_now

logger = logging.getLogger(__name__)


def create_session(db: Session, user_id: uuid.UUID) -> ChatSession:
    """
    Create a new chat session.

    Args:
        db: Database session
        user_id: Owner of the session

    Returns:
        Created chat session
    """
    session = ChatSession(user_id=user_id, start_date=utc_now())

    try:
        db.add(session)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating chat session for user {user_id}: {str(e)}")
        raise StorageError("Could not create chat session") from e

    db.refresh(session)
    logger.info(f"Created new chat session {session.id} for user {user_id}")
    return session


def get_owned_session(
    db: Session, session_id: uuid.UUID, user_id: uuid.UUID
) -> ChatSession:
    """
    Fetch a session, making sure it belongs to the user.

    Raises:
        NotFoundError: If the session doesn't exist or belongs to someone else
    """
    session = (
        db.query(ChatSession)
        .filter(and_(ChatSession.id == session_id, ChatSession.user_id == user_id))
        .first()
    )

    if not session:
        logger.warning(
            f"Session {session_id} not found or doesn't belong to user {user_id}"
        )
        raise NotFoundError("Session not found")

    return session


def get_user_sessions(db: Session, user_id: uuid.UUID) -> List[ChatSession]:
    """List a user's chat sessions, most recent first."""
    return (
        db.query(ChatSession)
        .filter(ChatSession.user_id == user_id)
        .order_by(desc(ChatSession.start_date))
        .all()
    )
