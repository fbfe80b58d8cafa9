from acompana.db.models.user import User
from acompana.db.models.chat_session import ChatSession
from acompana.db.models.message import Message
from acompana.db.models.user_profile import UserProfile
from acompana.db.models.user_history import UserHistory

__all__ = [
    "User",
    "ChatSession",
    "Message",
    "UserProfile",
    "UserHistory",
]
