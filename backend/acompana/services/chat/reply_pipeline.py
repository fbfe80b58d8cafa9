"""
Message pipeline: stores the user's message, asks the responder for a
reply, and stores the reply.

Steps, in order:
1. Validate the content (nothing is written for empty content)
2. Create the session, or check the given one belongs to the user
3. Store the user message
4. Load the last ``CONTEXT_WINDOW`` messages as context
5. Call the responder, bounded by ``RESPONDER_TIMEOUT_SECONDS``
6. Parse the reply, inferring the emotion when the responder gave none
7. Fall back to an apology if the responder failed
8. Store the bot message
9. Attach help resources when the reply is flagged as a crisis
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from acompana.core.exceptions import ExternalServiceError, ValidationError
from acompana.db.models import ChatSession, Message
from acompana.db.models.message import AUTHOR_BOT, AUTHOR_USER
from acompana.schemas.crisis import HelpResources
from acompana.services.chat.message_store import (
    CONTEXT_WINDOW,
    get_recent_messages,
    store_message,
)
from acompana.services.chat.session_manager import create_session, get_owned_session
from acompana.services.crisis import get_help_resources
from acompana.services.responder import (
    ConversationTurn,
    ReplyResult,
    RESPONDER_TIMEOUT_SECONDS,
    resolve_reply,
)
from acompana.services.responder.prompts import APOLOGY_MESSAGE

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    session: ChatSession
    user_message: Message
    bot_message: Message
    crisis: bool
    help: Optional[HelpResources] = None


async def generate_reply(
    responder, conversation, timeout: float = RESPONDER_TIMEOUT_SECONDS
) -> ReplyResult:
    """
    Call the responder and resolve its output.

    Never raises for responder problems: a timeout, an
    ``ExternalServiceError`` or any other failure while producing the reply
    yields the apology message with no emotion and no crisis flag.
    """
    try:
        result = await asyncio.wait_for(responder.generate(conversation), timeout)
        return resolve_reply(result)
    except (ExternalServiceError, asyncio.TimeoutError) as e:
        logger.error(f"Responder error: {e!r}")
    except Exception:
        logger.exception("Unexpected responder failure")

    return ReplyResult(text=APOLOGY_MESSAGE, emotion=None, crisis=False)


async def send_message(
    db: Session,
    user_id: uuid.UUID,
    content: Optional[str],
    responder,
    session_id: Optional[uuid.UUID] = None,
) -> PipelineResult:
    """
    Run one message exchange for ``user_id``.

    Args:
        db: Database session
        user_id: Authenticated user
        content: Text typed by the user
        responder: Object with an async ``generate(conversation)`` method
        session_id: Session to continue; a new one is created when omitted

    Raises:
        ValidationError: If the content is empty after trimming
        NotFoundError: If ``session_id`` is not one of the user's sessions
    """
    content = (content or "").strip()
    if not content:
        raise ValidationError("content required")

    if session_id is None:
        session = create_session(db, user_id)
    else:
        session = get_owned_session(db, session_id, user_id)

    user_message = store_message(db, session.id, AUTHOR_USER, content)

    context = [
        ConversationTurn(author=message.author, content=message.content)
        for message in get_recent_messages(db, session.id, CONTEXT_WINDOW)
    ]

    reply = await generate_reply(responder, context)

    bot_message = store_message(
        db, session.id, AUTHOR_BOT, reply.text, emotion=reply.emotion
    )

    help_resources = get_help_resources() if reply.crisis else None
    if reply.crisis:
        logger.warning(f"Crisis flagged in session {session.id}")

    return PipelineResult(
        session=session,
        user_message=user_message,
        bot_message=bot_message,
        crisis=reply.crisis,
        help=help_resources,
    )
