"""Tests for the message pipeline."""

import uuid
from datetime import datetime, timedelta, UTC

import httpx
import pytest

from acompana.core.exceptions import (
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from acompana.db.models import ChatSession, Message
from acompana.services.chat import send_message
from acompana.services.chat.reply_pipeline import generate_reply
from acompana.services.responder import (
    ConversationTurn,
    GeminiResponder,
    RawReply,
    StructuredReply,
)
from acompana.services.responder.prompts import APOLOGY_MESSAGE


def stored_messages(db_session, session_id):
    return (
        db_session.query(Message)
        .filter(Message.chat_session_id == session_id)
        .order_by(Message.created_at)
        .all()
    )


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", " \n\t ", None])
    async def test_empty_content_writes_nothing(
        self, db_session, test_user, responder, content
    ):
        with pytest.raises(ValidationError, match="content required"):
            await send_message(db_session, test_user.id, content, responder)

        assert db_session.query(ChatSession).count() == 0
        assert db_session.query(Message).count() == 0
        assert responder.calls == []

    @pytest.mark.asyncio
    async def test_foreign_session_is_not_found(
        self, db_session, test_user, other_user, responder
    ):
        foreign = ChatSession(user_id=other_user.id, start_date=datetime.now(UTC))
        db_session.add(foreign)
        db_session.commit()

        with pytest.raises(NotFoundError):
            await send_message(
                db_session, test_user.id, "Hola", responder, session_id=foreign.id
            )

        assert db_session.query(Message).count() == 0

    @pytest.mark.asyncio
    async def test_unknown_session_is_not_found(self, db_session, test_user, responder):
        with pytest.raises(NotFoundError):
            await send_message(
                db_session, test_user.id, "Hola", responder, session_id=uuid.uuid4()
            )


class TestExchange:
    @pytest.mark.asyncio
    async def test_new_session_stores_both_messages(
        self, db_session, test_user, responder
    ):
        result = await send_message(db_session, test_user.id, " Hola ", responder)

        assert result.session.user_id == test_user.id
        assert result.user_message.content == "Hola"
        assert result.user_message.emotion_type is None
        assert result.bot_message.content == "Me alegra mucho"
        assert result.bot_message.emotion_type == "feliz"
        assert result.crisis is False
        assert result.help is None

        messages = stored_messages(db_session, result.session.id)
        assert [m.author for m in messages] == ["user", "bot"]

    @pytest.mark.asyncio
    async def test_user_message_is_last_context_turn(
        self, db_session, test_user, chat_session, add_message, responder
    ):
        add_message(chat_session, "Antes", at=datetime(2025, 1, 1, tzinfo=UTC))

        await send_message(
            db_session, test_user.id, "Ahora", responder, session_id=chat_session.id
        )

        conversation = responder.calls[0]
        assert all(isinstance(turn, ConversationTurn) for turn in conversation)
        assert [turn.content for turn in conversation] == ["Antes", "Ahora"]
        assert conversation[-1].author == "user"

    @pytest.mark.asyncio
    async def test_context_is_limited_to_latest_messages(
        self, db_session, test_user, chat_session, add_message, responder
    ):
        start = datetime(2025, 1, 1, tzinfo=UTC)
        for i in range(20):
            author = "user" if i % 2 == 0 else "bot"
            add_message(
                chat_session, f"m{i}", author=author, at=start + timedelta(minutes=i)
            )

        await send_message(
            db_session, test_user.id, "nuevo", responder, session_id=chat_session.id
        )

        contents = [turn.content for turn in responder.calls[0]]
        assert len(contents) == 15
        assert contents[0] == "m6"
        assert contents[-1] == "nuevo"
        assert contents.count("nuevo") == 1

    @pytest.mark.asyncio
    async def test_crisis_attaches_help(self, db_session, test_user, responder):
        responder.result = StructuredReply(
            answer="No estás solo, busquemos ayuda.", emotion="triste", crisis=True
        )

        result = await send_message(db_session, test_user.id, "Me rindo", responder)

        assert result.crisis is True
        assert result.help is not None
        assert result.help.country == "CO"

    @pytest.mark.asyncio
    async def test_unknown_emotion_is_inferred(self, db_session, test_user, responder):
        responder.result = StructuredReply(
            answer="Lamento mucho lo que pasó", emotion="melancolia"
        )

        result = await send_message(db_session, test_user.id, "Hola", responder)

        assert result.bot_message.emotion_type == "triste"

    @pytest.mark.asyncio
    async def test_unknown_emotion_with_crisis_still_gets_help(
        self, db_session, test_user, responder
    ):
        responder.result = StructuredReply(
            answer="Lamento que estés así, busca apoyo ahora",
            emotion="bogus",
            crisis=True,
        )

        result = await send_message(db_session, test_user.id, "No aguanto", responder)

        assert result.bot_message.emotion_type == "triste"
        assert result.crisis is True
        assert result.help is not None
        assert result.help.items

    @pytest.mark.asyncio
    async def test_raw_reply(self, db_session, test_user, responder):
        responder.result = RawReply(text="  ¡Qué bien! Me alegra  ")

        result = await send_message(db_session, test_user.id, "Aprobé", responder)

        assert result.bot_message.content == "¡Qué bien! Me alegra"
        assert result.bot_message.emotion_type == "feliz"
        assert result.crisis is False


class TestResponderFailures:
    @pytest.mark.asyncio
    async def test_service_error_yields_apology(
        self, db_session, test_user, responder
    ):
        responder.error = ExternalServiceError("Responder returned HTTP 500")

        result = await send_message(db_session, test_user.id, "Hola", responder)

        assert result.bot_message.content == APOLOGY_MESSAGE
        assert result.bot_message.emotion_type is None
        assert result.crisis is False
        assert result.help is None
        assert len(stored_messages(db_session, result.session.id)) == 2

    @pytest.mark.asyncio
    async def test_timeout_yields_apology(self, responder):
        responder.delay = 1.0

        reply = await generate_reply(
            responder, [ConversationTurn(author="user", content="Hola")], timeout=0.01
        )

        assert reply.text == APOLOGY_MESSAGE
        assert reply.emotion is None
        assert reply.crisis is False

    @pytest.mark.asyncio
    async def test_unexpected_error_yields_apology(self, responder):
        responder.error = RuntimeError("bug")

        reply = await generate_reply(
            responder, [ConversationTurn(author="user", content="Hola")]
        )

        assert reply.text == APOLOGY_MESSAGE
        assert reply.emotion is None
        assert reply.crisis is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"candidates": ["oops"]},
            {"candidates": [{"content": {"parts": ["plain"]}}]},
            {"candidates": {"content": "x"}},
        ],
    )
    async def test_malformed_gemini_payload_still_replies(
        self, db_session, test_user, payload
    ):
        gemini = GeminiResponder(
            api_key="test-key",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, json=payload)
            ),
        )

        result = await send_message(db_session, test_user.id, "Hola", gemini)

        messages = stored_messages(db_session, result.session.id)
        assert [m.author for m in messages] == ["user", "bot"]
        assert result.bot_message.content == APOLOGY_MESSAGE
        assert result.crisis is False
