"""
qa/store.py -- SQLAlchemy-backed persistence for questions and answers.

Uses SQLAlchemy Core (not ORM) so the dataclasses in qa/models.py remain the
authoritative domain representation.

Pattern: Repository + Data Mapper. QAStore is the repository; the _row_to_*
functions are the mappers. Services never touch SQL directly.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = QAStore(engine)
    question = store.create_question(Question(content="Why?", user_id=1, uuid="..."))
    store.update_question_content(question.id, "Why not?")
    store.delete_question(question.id)   # removes its answers too
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, String, Table, select
from sqlalchemy.engine import Engine

import auth.store  # noqa: F401 -- registers the users table that the foreign keys below reference
from core.database import metadata
from qa.models import Answer, Question

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_questions = Table(
    "questions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", String(200), nullable=False, unique=True),
    Column("content", String(500), nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
)

_answers = Table(
    "answers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", String(200), nullable=False, unique=True),
    Column("content", String(255), nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("question_id", Integer, ForeignKey("questions.id"), nullable=False),
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# Answer rows always come back with their question's content attached.
_answer_select = select(_answers, _questions.c.content.label("question_content")).select_from(
    _answers.join(_questions, _answers.c.question_id == _questions.c.id)
)


class QAStore:
    """Repository for Question and Answer records.

    Questions and answers reference users.id, so the users table is created
    on the same engine alongside them.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def create_question(self, question: Question) -> Question:
        """Insert a question; fills in id and created_at on the passed object."""
        question.created_at = _now_iso()
        with self.engine.begin() as conn:
            result = conn.execute(
                _questions.insert().values(
                    uuid=question.uuid,
                    content=question.content,
                    created_at=question.created_at,
                    user_id=question.user_id,
                )
            )
            question.id = result.inserted_primary_key[0]
        return question

    def get_question_by_uuid(self, question_uuid: str) -> Optional[Question]:
        with self.engine.connect() as conn:
            row = conn.execute(_questions.select().where(_questions.c.uuid == question_uuid)).fetchone()
        return _row_to_question(row) if row is not None else None

    def list_questions(self) -> list[Question]:
        """Return every question, oldest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(_questions.select().order_by(_questions.c.id)).fetchall()
        return [_row_to_question(r) for r in rows]

    def list_questions_by_user(self, user_id: int) -> list[Question]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                _questions.select().where(_questions.c.user_id == user_id).order_by(_questions.c.id)
            ).fetchall()
        return [_row_to_question(r) for r in rows]

    def update_question_content(self, question_id: int, content: str) -> None:
        """Replace a question's content. Owner, uuid and created_at are untouched."""
        with self.engine.begin() as conn:
            conn.execute(_questions.update().where(_questions.c.id == question_id).values(content=content))

    def delete_question(self, question_id: int) -> None:
        """Delete a question and all of its answers in one transaction."""
        with self.engine.begin() as conn:
            conn.execute(_answers.delete().where(_answers.c.question_id == question_id))
            conn.execute(_questions.delete().where(_questions.c.id == question_id))

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def create_answer(self, answer: Answer) -> Answer:
        answer.created_at = _now_iso()
        with self.engine.begin() as conn:
            result = conn.execute(
                _answers.insert().values(
                    uuid=answer.uuid,
                    content=answer.content,
                    created_at=answer.created_at,
                    user_id=answer.user_id,
                    question_id=answer.question_id,
                )
            )
            answer.id = result.inserted_primary_key[0]
        return answer

    def get_answer_by_uuid(self, answer_uuid: str) -> Optional[Answer]:
        with self.engine.connect() as conn:
            row = conn.execute(_answer_select.where(_answers.c.uuid == answer_uuid)).fetchone()
        return _row_to_answer(row) if row is not None else None

    def list_answers_for_question(self, question_id: int) -> list[Answer]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                _answer_select.where(_answers.c.question_id == question_id).order_by(_answers.c.id)
            ).fetchall()
        return [_row_to_answer(r) for r in rows]

    def update_answer_content(self, answer_id: int, content: str) -> None:
        """Replace an answer's content. Owner, question, uuid and created_at are untouched."""
        with self.engine.begin() as conn:
            conn.execute(_answers.update().where(_answers.c.id == answer_id).values(content=content))

    def delete_answer(self, answer_id: int) -> None:
        with self.engine.begin() as conn:
            conn.execute(_answers.delete().where(_answers.c.id == answer_id))


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_question(row) -> Question:
    return Question(
        id=row.id,
        uuid=row.uuid,
        content=row.content,
        created_at=row.created_at,
        user_id=row.user_id,
    )


def _row_to_answer(row) -> Answer:
    return Answer(
        id=row.id,
        uuid=row.uuid,
        content=row.content,
        created_at=row.created_at,
        user_id=row.user_id,
        question_id=row.question_id,
        question_content=row.question_content,
    )
