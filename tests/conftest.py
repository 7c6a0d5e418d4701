import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LLM_API_KEY", "test-llm-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.errors import UpstreamError
from app.core.security import create_access_token
from app.models.quiz_db import quiz_crud  # noqa: F401  registers quiz models
from app.models.user_db.user_db import User
from app.services.llm_client import get_llm_client
from main import app


QUESTION_A = {"question_text": "A", "options": ["a", "b", "c", "d"], "correct_answer": "a"}
QUESTION_B = {"question_text": "B", "options": ["e", "f", "g", "h"], "correct_answer": "e"}


class FakeLLM:
    """Stands in for the generative backend, replaying canned outputs."""

    def __init__(self, output="", error=None):
        self.output = output
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(test_engine)
    yield test_engine
    Base.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user(db):
    host = User(email="host@example.com", username="host", name="Quiz Host", hashed_password="not-used")
    db.add(host)
    db.commit()
    return host


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def failing_llm():
    return FakeLLM(error=UpstreamError("generative backend unreachable"))


@pytest.fixture
def client(session_factory, user, fake_llm):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}
