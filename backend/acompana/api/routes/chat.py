"""
REST API endpoints related to chat functionality.

Sessions are created or resumed explicitly, or implicitly by sending a
message without a session id.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from acompana.db.session import get_db
from acompana.db.models import User
from acompana.dependencies import get_current_user, get_responder
from acompana.schemas.chat import (
    ChatSessionResponse,
    MessageResponse,
    SendMessageRequest,
    SendMessageResponse,
    SessionHistoryResponse,
    SessionRequest,
)
from acompana.services.chat import (
    create_session,
    get_owned_session,
    get_session_messages,
    get_user_sessions,
    send_message,
)

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/sessions")
async def create_or_resume_session(
    payload: SessionRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create a new chat session, or resume an existing one.

    Resuming returns the session's messages, oldest first. Creating returns
    the new session with status 201.
    """
    if payload.session_id is not None:
        session = get_owned_session(db, payload.session_id, user.id)
        return SessionHistoryResponse(
            session_id=session.id,
            start_date=session.start_date,
            messages=[
                MessageResponse.model_validate(message)
                for message in get_session_messages(db, session.id)
            ],
        )

    session = create_session(db, user.id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder(ChatSessionResponse.model_validate(session)),
    )


@router.get("/sessions", response_model=List[ChatSessionResponse])
async def list_sessions(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get all chat sessions for the current user, newest first."""
    return get_user_sessions(db, user.id)


@router.get("/sessions/{session_id}/messages", response_model=List[MessageResponse])
async def list_session_messages(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get messages for a specific chat session.

    Args:
        session_id: ID of the chat session

    Returns:
        Messages of the session in chronological order
    """
    session = get_owned_session(db, session_id, user.id)
    return get_session_messages(db, session.id)


@router.post("/messages", response_model=SendMessageResponse)
async def post_message(
    payload: SendMessageRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    responder=Depends(get_responder),
):
    """
    Send a message and get the responder's reply.

    Creates a session when ``session_id`` is omitted. Responder failures are
    answered with an apology rather than an error. ``help`` carries crisis
    resources only when ``crisis`` is true.
    """
    result = await send_message(
        db,
        user_id=user.id,
        content=payload.content,
        responder=responder,
        session_id=payload.session_id,
    )

    return SendMessageResponse(
        session_id=result.session.id,
        user=MessageResponse.model_validate(result.user_message),
        bot=MessageResponse.model_validate(result.bot_message),
        crisis=result.crisis,
        help=result.help,
    )
