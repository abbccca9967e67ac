"""Shared fixtures: a fresh in-memory database per test and an HTTP client bound to it."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from pressbutton.database import build_engine, build_sessionmaker, get_sessionmaker, init_models, transaction
from pressbutton.main import app
from pressbutton.models.comment import Comment
from pressbutton.models.question import Question
from pressbutton.models.user import User
from pressbutton.models.vote import ButtonChoice, Vote

# Cheap placeholder; tests that log in register through the API instead.
FAKE_HASH = "$2b$12$abcdefghijklmnopqrstuuE8Q3H6h3o4gqS3aX0d2mE1x6Q2bJz7a"


@pytest.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessions(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def client(sessions):
    app.dependency_overrides[get_sessionmaker] = lambda: sessions
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def lenient_client(sessions):
    """Client that hands back 500 responses instead of re-raising the app error."""
    app.dependency_overrides[get_sessionmaker] = lambda: sessions
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(sessions):
    counter = {"n": 0}

    async def _make_user(name: Optional[str] = None) -> User:
        counter["n"] += 1
        async with transaction(sessions) as db:
            user = User(
                email=f"user{counter['n']}@example.com",
                name=name or f"User {counter['n']}",
                password_hash=FAKE_HASH,
            )
            db.add(user)
            await db.flush()
        return user

    return _make_user


@pytest.fixture
def make_question(sessions):
    base_time = datetime(2025, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    async def _make_question(
        author: User,
        positive: str = "You get a million dollars",
        negative: str = "You lose your memories",
    ) -> Question:
        counter["n"] += 1
        async with transaction(sessions) as db:
            question = Question(
                author_id=author.id,
                positive_outcome=positive,
                negative_outcome=negative,
                # Strictly increasing timestamps keep newest/oldest ordering deterministic.
                created_at=base_time + timedelta(minutes=counter["n"]),
            )
            db.add(question)
            await db.flush()
        return question

    return _make_question


@pytest.fixture
def add_vote(sessions):
    async def _add_vote(question: Question, user: User, choice: ButtonChoice) -> Vote:
        async with transaction(sessions) as db:
            vote = Vote(question_id=question.id, user_id=user.id, choice=choice)
            db.add(vote)
            await db.flush()
        return vote

    return _add_vote


@pytest.fixture
def add_comment(sessions):
    async def _add_comment(question: Question, user: User, content: str = "Nice one") -> Comment:
        async with transaction(sessions) as db:
            comment = Comment(question_id=question.id, user_id=user.id, content=content)
            db.add(comment)
            await db.flush()
        return comment

    return _add_comment
