"""
Boundary to the generative-AI responder.
"""

from acompana.services.responder.client import (
    ConversationTurn,
    GeminiResponder,
    RESPONDER_TIMEOUT_SECONDS,
)
from acompana.services.responder.parser import (
    RawReply,
    ReplyResult,
    ResponderResult,
    StructuredReply,
    parse_reply,
    resolve_reply,
)

__all__ = [
    "ConversationTurn",
    "GeminiResponder",
    "RESPONDER_TIMEOUT_SECONDS",
    "RawReply",
    "ReplyResult",
    "ResponderResult",
    "StructuredReply",
    "parse_reply",
    "resolve_reply",
]
