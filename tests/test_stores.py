"""Unit tests for auth/store.py and qa/store.py -- SQLAlchemy Core repositories.

Covers:
- UNIQUE constraints on username, email and access token surface as IntegrityError
- session timestamps survive a round trip as aware UTC datetimes
- update() persists logout_at once and never re-stamps it
- question content edits leave owner and created_at alone
- delete_question() removes the question's answers in the same transaction
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import Session, User
from auth.store import SessionStore
from qa.models import Answer, Question
from qa.store import QAStore


def _user(name: str) -> User:
    return User(
        uuid=f"uuid-{name}",
        username=name,
        email=f"{name}@example.com",
        salt="$2b$04$abcdefghijklmnopqrstuu",
        password_digest="digest",
    )


@pytest.fixture
def alice(user_store) -> User:
    user = _user("alice")
    user.id = user_store.create_user(user)
    return user


# ---------------------------------------------------------------------------
# UserStore
# ---------------------------------------------------------------------------


def test_create_and_lookup_user(user_store, alice):
    assert user_store.get_by_id(alice.id).username == "alice"
    assert user_store.get_by_uuid("uuid-alice").id == alice.id
    assert user_store.get_by_email("alice@example.com").id == alice.id
    assert user_store.get_by_username("nobody") is None


def test_username_unique(user_store, alice):
    dup = _user("alice")
    dup.uuid = "uuid-other"
    dup.email = "other@example.com"
    with pytest.raises(IntegrityError):
        user_store.create_user(dup)


def test_email_unique(user_store, alice):
    dup = _user("alicia")
    dup.email = "alice@example.com"
    with pytest.raises(IntegrityError):
        user_store.create_user(dup)


# ---------------------------------------------------------------------------
# SessionStore
# ---------------------------------------------------------------------------


def _session(user: User, token: str, issued: datetime) -> Session:
    return Session(
        uuid=f"session-{token}",
        access_token=token,
        user=user,
        issued_at=issued,
        expires_at=issued + timedelta(hours=8),
    )


def test_session_round_trip(engine, alice):
    store = SessionStore(engine)
    issued = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    store.create(_session(alice, "tok-1", issued))

    found = store.find_by_token("tok-1")
    assert found.user.id == alice.id
    assert found.issued_at == issued
    assert found.expires_at == issued + timedelta(hours=8)
    assert found.expires_at.tzinfo is not None
    assert found.logout_at is None
    assert store.find_by_token("tok-2") is None


def test_duplicate_token_rejected(engine, alice):
    store = SessionStore(engine)
    issued = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    store.create(_session(alice, "tok-1", issued))
    dup = _session(alice, "tok-1", issued)
    dup.uuid = "session-other"
    with pytest.raises(IntegrityError):
        store.create(dup)


def test_update_sets_logout(engine, alice):
    store = SessionStore(engine)
    issued = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    session = store.create(_session(alice, "tok-1", issued))
    session.logout_at = issued + timedelta(hours=1)
    store.update(session)

    assert store.find_by_token("tok-1").logout_at == issued + timedelta(hours=1)


def test_update_never_restamps_logout(engine, alice):
    store = SessionStore(engine)
    issued = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    session = store.create(_session(alice, "tok-1", issued))
    session.logout_at = issued + timedelta(hours=1)
    assert store.update(session) == 1

    session.logout_at = issued + timedelta(hours=2)
    assert store.update(session) == 0
    assert store.find_by_token("tok-1").logout_at == issued + timedelta(hours=1)


# ---------------------------------------------------------------------------
# QAStore
# ---------------------------------------------------------------------------


def test_update_question_keeps_owner_and_created_at(engine, alice):
    store = QAStore(engine)
    question = store.create_question(Question(uuid="q-1", content="Old", user_id=alice.id))
    store.update_question_content(question.id, "New")

    reloaded = store.get_question_by_uuid("q-1")
    assert reloaded.content == "New"
    assert reloaded.user_id == alice.id
    assert reloaded.created_at == question.created_at


def test_delete_question_removes_answers(engine, alice):
    store = QAStore(engine)
    keep = store.create_question(Question(uuid="q-keep", content="Keep", user_id=alice.id))
    gone = store.create_question(Question(uuid="q-gone", content="Gone", user_id=alice.id))
    store.create_answer(Answer(uuid="a-1", content="A1", user_id=alice.id, question_id=gone.id))
    store.create_answer(Answer(uuid="a-2", content="A2", user_id=alice.id, question_id=keep.id))

    store.delete_question(gone.id)

    assert store.get_question_by_uuid("q-gone") is None
    assert store.get_answer_by_uuid("a-1") is None
    assert [a.uuid for a in store.list_answers_for_question(keep.id)] == ["a-2"]


def test_answer_needs_existing_question(engine, alice):
    store = QAStore(engine)
    with pytest.raises(IntegrityError):
        store.create_answer(Answer(uuid="a-x", content="A", user_id=alice.id, question_id=999))
