"""
Chat services package initialization.
"""

from acompana.services.chat.session_manager import (
    create_session,
    get_owned_session,
    get_user_sessions,
)
from acompana.services.chat.message_store import (
    get_recent_messages,
    get_session_messages,
    store_message,
)
from acompana.services.chat.reply_pipeline import send_message

__all__ = [
    "create_session",
    "get_owned_session",
    "get_user_sessions",
    "get_recent_messages",
    "get_session_messages",
    "store_message",
    "send_message",
]
