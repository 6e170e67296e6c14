"""
tests/conftest.py -- Shared test fixtures for Quora API tests.

This module provides:
  - engine: a private in-memory database per test (unit tests)
  - FakeClock / clock: a settable clock for driving session expiry
  - auth_service, question_service, answer_service: services wired on engine
  - _patch_lifespan(): wires a test Engine into app.state, bypassing real startup
  - api_client: TestClient against the real app with an isolated database

Design: Named shared-memory SQLite URIs (not plain :memory:) are required for
api_client because TestClient runs route handlers in a thread pool. Plain
:memory: DBs are per-connection and would present a blank schema to each
worker thread. Unit tests run on one thread and use a plain in-memory URL.

DEBUG and BCRYPT_ROUNDS must be set before any auth/core import so
get_settings() auto-generates SECRET_KEY instead of raising ValueError, and
hashing stays fast.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

# CRITICAL: Set before any auth/core import -- get_settings() is cached.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import app, wire_services
from auth.models import SignupDraft
from auth.service import AuthService
from auth.store import SessionStore, UserStore
from core.config import get_settings
from core.database import create_store_engine
from qa.service import AnswerService, QuestionService
from qa.store import QAStore

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock whose current time only moves when a test moves it."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


# ---------------------------------------------------------------------------
# Unit-test fixtures -- fresh database per test
# ---------------------------------------------------------------------------


@pytest.fixture
def engine():
    eng = create_store_engine("sqlite://")
    yield eng
    eng.dispose()


@pytest.fixture
def user_store(engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def auth_service(engine, user_store, clock) -> AuthService:
    return AuthService(
        user_store,
        SessionStore(engine),
        secret_key=get_settings().secret_key,
        session_ttl=timedelta(hours=8),
        clock=clock,
    )


@pytest.fixture
def question_service(engine, user_store) -> QuestionService:
    return QuestionService(QAStore(engine), user_store)


@pytest.fixture
def answer_service(engine, user_store) -> AnswerService:
    return AnswerService(QAStore(engine), user_store)


def make_draft(username: str, **overrides) -> SignupDraft:
    """Signup draft with a unique email derived from username."""
    fields = {
        "username": username,
        "email": f"{username}@example.com",
        "password": f"{username}-pw1",
        "first_name": username.capitalize(),
        "last_name": "Tester",
    }
    fields.update(overrides)
    return SignupDraft(**fields)


# ---------------------------------------------------------------------------
# Integration fixtures
# ---------------------------------------------------------------------------


def _patch_lifespan(engine):
    """Return an async context manager that replaces the real lifespan.

    Wires the test Engine into app.state through the same wire_services()
    the real lifespan uses, so routes see an isolated database.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        wire_services(app, engine)
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client(request) -> Generator[TestClient, None, None]:
    """Yield a TestClient against the real app backed by a private database.

    One database per test module; the module name keeps them apart. Tests
    sharing a module must use distinct usernames.
    """
    db_name = request.module.__name__.rsplit(".", 1)[-1]
    engine = create_store_engine(f"sqlite:///file:{db_name}?mode=memory&cache=shared&uri=true")
    app.router.lifespan_context = _patch_lifespan(engine)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client

    engine.dispose()
