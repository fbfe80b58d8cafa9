"""
Test configuration and fixtures for pytest.
"""

import asyncio
import os

# Point the application at SQLite before anything imports the engine
os.environ["TESTING"] = "True"
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime, UTC
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from acompana.core.security import create_access_token, get_password_hash
from acompana.db.base import Base
from acompana.db.models import ChatSession, Message, User
from acompana.main import app
from acompana.dependencies import db_dependency, get_responder
from acompana.services.responder import StructuredReply


class FakeResponder:
    """Scripted stand-in for the Gemini client."""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate(self, conversation):
        self.calls.append(list(conversation))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(scope="function")
def test_engine():
    """Create a fresh in-memory database for a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine):
    """Create a new database session for a test."""
    session_factory = sessionmaker(bind=test_engine, autoflush=False)
    session = session_factory()

    yield session

    session.close()


@pytest.fixture
def responder():
    """Responder answering with a cheerful structured reply."""
    return FakeResponder(
        result=StructuredReply(answer="Me alegra mucho", emotion="feliz", crisis=False)
    )


@pytest.fixture
def client(db_session, responder):
    """Create a test client with database and responder overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[db_dependency] = override_get_db
    app.dependency_overrides[get_responder] = lambda: responder

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


def make_user(db_session, email="test@example.com", password="secret-password"):
    user = User(
        email=email,
        name="Test User",
        password_hash=get_password_hash(password),
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    return make_user(db_session)


@pytest.fixture
def other_user(db_session):
    """A second user, for ownership checks."""
    return make_user(db_session, email="other@example.com")


@pytest.fixture
def auth_headers(test_user):
    """Bearer header for ``test_user``."""
    token = create_access_token(data={"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def add_message(db_session):
    """Insert a message with a chosen timestamp."""

    def _add(session, content, author="user", at=None, emotion=None):
        message = Message(
            chat_session_id=session.id,
            author=author,
            content=content,
            emotion_type=emotion,
            created_at=at or datetime.now(UTC),
        )
        db_session.add(message)
        db_session.commit()
        return message

    return _add


@pytest.fixture
def chat_session(db_session, test_user):
    """An empty chat session owned by ``test_user``."""
    session = ChatSession(user_id=test_user.id, start_date=datetime.now(UTC))
    db_session.add(session)
    db_session.commit()
    db_session.refresh(session)
    return session


# Reset test environment at the end of session
def pytest_sessionfinish(session, exitstatus):
    """Clean up after all tests have run."""
    os.environ.pop("TESTING", None)
