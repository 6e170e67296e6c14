"""
qa/models.py -- Domain dataclasses for questions and answers.

These are pure data containers with zero logic. Ownership rules live in
auth/guard.py; persistence in qa/store.py.

user_id is the internal id of the owning User, fixed at creation and never
reassigned. uuid is the public identifier exposed over HTTP.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Question:
    """A question posted by a user.

    id is None before the record is written to the database.
    """

    content: str
    user_id: int
    uuid: str = ""
    created_at: str = ""  # ISO 8601, set by store on insert
    id: Optional[int] = None


@dataclass
class Answer:
    """An answer to a question.

    question_content is filled in by the store on reads (joined from the
    questions table) so list views don't need a second query.
    """

    content: str
    user_id: int
    question_id: int
    uuid: str = ""
    created_at: str = ""
    question_content: str = ""
    id: Optional[int] = None
