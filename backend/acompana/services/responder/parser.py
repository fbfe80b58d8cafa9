"""
Parsing of responder output.

The responder is asked for a JSON object but may answer with plain text.
``parse_reply`` turns its output into one of two variants, and
``resolve_reply`` reduces either variant to the reply that gets stored.
"""

import json
import re
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from acompana.services.emotion import EMOTIONS, infer_emotion
from acompana.services.emotion.lexicon import Lexicon

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class StructuredReply(BaseModel):
    """Responder output that parsed as ``{answer, emotion, crisis}``."""

    answer: str = ""
    emotion: Optional[str] = None
    crisis: bool = False

    @field_validator("answer", mode="before")
    @classmethod
    def answer_as_text(cls, value):
        return "" if value is None else str(value)

    @field_validator("answer")
    @classmethod
    def trim_answer(cls, value: str) -> str:
        return value.strip()

    @field_validator("emotion", mode="before")
    @classmethod
    def lower_emotion(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return None

    @field_validator("crisis", mode="before")
    @classmethod
    def crisis_as_flag(cls, value):
        # any truthy value flags a crisis; null and missing do not
        return bool(value)


class RawReply(BaseModel):
    """Responder output that was not structured data."""

    text: str


ResponderResult = Union[StructuredReply, RawReply]


class ReplyResult(BaseModel):
    """Reply ready to be persisted as a bot message."""

    text: str
    emotion: Optional[str] = None
    crisis: bool = False


def parse_reply(raw: str) -> ResponderResult:
    """
    Classify responder output as structured or raw.

    Any JSON object (optionally wrapped in a markdown code fence) becomes a
    ``StructuredReply``, its fields coerced to text and flag; anything else
    is a ``RawReply`` carrying the original text.
    """
    body = raw.strip()
    fenced = _FENCE_RE.match(body)
    if fenced:
        body = fenced.group(1)

    try:
        payload = json.loads(body)
    except ValueError:
        return RawReply(text=raw)

    if not isinstance(payload, dict):
        return RawReply(text=raw)

    return StructuredReply.model_validate(payload)


def resolve_reply(
    result: ResponderResult, lexicon: Optional[Lexicon] = None
) -> ReplyResult:
    """
    Apply the emotion fallback to a parsed responder result.

    Unknown emotion tags, and raw text replies, get a heuristic emotion.
    Raw replies never carry a crisis flag.
    """
    if isinstance(result, StructuredReply):
        emotion = result.emotion
        if emotion not in EMOTIONS:
            emotion = infer_emotion(result.answer, lexicon)
        return ReplyResult(text=result.answer, emotion=emotion, crisis=result.crisis)

    text = result.text.strip()
    return ReplyResult(text=text, emotion=infer_emotion(text, lexicon), crisis=False)
