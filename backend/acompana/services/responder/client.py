"""
Client for the Gemini ``generateContent`` REST endpoint.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from acompana.core.exceptions import ExternalServiceError
from acompana.services.responder.parser import ResponderResult, parse_reply
from acompana.services.responder.prompts import SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
)

# Upper bound for one responder call, connection included
RESPONDER_TIMEOUT_SECONDS = float(os.getenv("RESPONDER_TIMEOUT_SECONDS", "20"))


class ConversationTurn(BaseModel):
    """One message of conversation context, oldest first."""

    author: str  # 'user' or 'bot'
    content: str


class GeminiResponder:
    """Generates supportive replies through the Gemini API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        system_instruction: str = SYSTEM_INSTRUCTION,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else GEMINI_API_KEY
        self.model = model or GEMINI_MODEL
        self.base_url = (base_url or GEMINI_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else RESPONDER_TIMEOUT_SECONDS
        self.system_instruction = system_instruction
        self.transport = transport

        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set. Bot replies will fail.")

    def build_request(self, conversation: List[ConversationTurn]) -> Dict[str, Any]:
        """Build the ``generateContent`` body for a conversation."""
        contents = [
            {
                "role": "user" if turn.author == "user" else "model",
                "parts": [{"text": turn.content}],
            }
            for turn in conversation
        ]

        # The API expects the conversation to open with a user turn
        while contents and contents[0]["role"] != "user":
            contents.pop(0)

        return {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": contents,
            "generationConfig": {"responseMimeType": "application/json"},
        }

    async def _request(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Send a request to the Gemini API."""
        if not self.api_key:
            raise ExternalServiceError("Responder API key is not configured")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                transport=self.transport, timeout=self.timeout
            ) as client:
                response = await client.post(url, json=body, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise ExternalServiceError("Responder timed out") from e
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"Responder returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Responder request failed: {e}") from e
        except ValueError as e:
            raise ExternalServiceError("Responder returned invalid JSON") from e

    @staticmethod
    def extract_text(data: Dict[str, Any]) -> str:
        """
        Join the text parts of the first candidate.

        Raises:
            ExternalServiceError: If the payload has no usable candidate text
        """
        if not isinstance(data, dict):
            raise ExternalServiceError("Responder returned an unexpected payload")

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            raise ExternalServiceError("Responder returned no candidates")

        candidate = candidates[0]
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise ExternalServiceError("Responder returned an empty candidate")

        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        if not texts:
            raise ExternalServiceError("Responder returned an empty candidate")

        return "".join(texts)

    async def generate(self, conversation: List[ConversationTurn]) -> ResponderResult:
        """
        Ask the model for a reply to ``conversation``.

        Returns:
            ``StructuredReply`` when the model honoured the JSON contract,
            otherwise ``RawReply``

        Raises:
            ExternalServiceError: On timeout, transport or HTTP failure
        """
        data = await self._request(self.build_request(conversation))
        return parse_reply(self.extract_text(data))
