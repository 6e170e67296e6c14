"""
qa/service.py -- Question and answer use cases.

The caller (actor) is always an already-validated User handed over by the
api/ layer; these services never look at tokens. Every mutation of an
existing resource goes through auth.guard.authorize_mutation() with the
resource's owner, loaded by internal id:

  edit   -> Privilege.EDIT    (owner only)
  delete -> Privilege.DELETE  (owner or admin)

Lookups by public uuid raise InvalidQuestion / AnswerNotFound / UserNotFound
when nothing matches.
"""

from __future__ import annotations

import logging
import uuid

from auth.guard import Privilege, authorize_mutation
from auth.models import User
from auth.store import UserStore
from core.exceptions import AnswerNotFound, InvalidQuestion, UserNotFound
from qa.models import Answer, Question
from qa.store import QAStore

logger = logging.getLogger("quora.qa")


def _load_owner(users: UserStore, user_id: int) -> User:
    owner = users.get_by_id(user_id)
    if owner is None:
        raise UserNotFound()
    return owner


class QuestionService:
    def __init__(self, store: QAStore, users: UserStore) -> None:
        self._store = store
        self._users = users

    def create_question(self, actor: User, content: str) -> Question:
        question = self._store.create_question(Question(uuid=str(uuid.uuid4()), content=content, user_id=actor.id))
        logger.info("Question created uuid=%s by=%s", question.uuid, actor.uuid)
        return question

    def list_questions(self) -> list[Question]:
        return self._store.list_questions()

    def list_questions_by_user(self, user_uuid: str) -> list[Question]:
        """Questions posted by the user with this public id. UserNotFound if unknown."""
        user = self._users.get_by_uuid(user_uuid)
        if user is None:
            raise UserNotFound("User with entered uuid whose question details are to be seen does not exist")
        return self._store.list_questions_by_user(user.id)

    def get_question(self, question_uuid: str) -> Question:
        question = self._store.get_question_by_uuid(question_uuid)
        if question is None:
            raise InvalidQuestion()
        return question

    def edit_question(self, actor: User, question_uuid: str, content: str) -> Question:
        """Replace the content of a question the actor owns."""
        question = self.get_question(question_uuid)
        authorize_mutation(actor, _load_owner(self._users, question.user_id), Privilege.EDIT, "question")
        self._store.update_question_content(question.id, content)
        question.content = content
        logger.info("Question edited uuid=%s by=%s", question.uuid, actor.uuid)
        return question

    def delete_question(self, actor: User, question_uuid: str) -> Question:
        """Delete a question (and its answers) as its owner or an admin."""
        question = self.get_question(question_uuid)
        authorize_mutation(actor, _load_owner(self._users, question.user_id), Privilege.DELETE, "question")
        self._store.delete_question(question.id)
        logger.info("Question deleted uuid=%s by=%s", question.uuid, actor.uuid)
        return question


class AnswerService:
    def __init__(self, store: QAStore, users: UserStore) -> None:
        self._store = store
        self._users = users

    def create_answer(self, actor: User, question_uuid: str, content: str) -> Answer:
        question = self._store.get_question_by_uuid(question_uuid)
        if question is None:
            raise InvalidQuestion("The question entered is invalid")
        answer = self._store.create_answer(
            Answer(uuid=str(uuid.uuid4()), content=content, user_id=actor.id, question_id=question.id)
        )
        answer.question_content = question.content
        logger.info("Answer created uuid=%s question=%s by=%s", answer.uuid, question.uuid, actor.uuid)
        return answer

    def list_answers(self, question_uuid: str) -> list[Answer]:
        question = self._store.get_question_by_uuid(question_uuid)
        if question is None:
            raise InvalidQuestion("The question with entered uuid whose details are to be seen does not exist")
        return self._store.list_answers_for_question(question.id)

    def get_answer(self, answer_uuid: str) -> Answer:
        answer = self._store.get_answer_by_uuid(answer_uuid)
        if answer is None:
            raise AnswerNotFound()
        return answer

    def edit_answer(self, actor: User, answer_uuid: str, content: str) -> Answer:
        """Replace the content of an answer the actor owns."""
        answer = self.get_answer(answer_uuid)
        authorize_mutation(actor, _load_owner(self._users, answer.user_id), Privilege.EDIT, "answer")
        self._store.update_answer_content(answer.id, content)
        answer.content = content
        logger.info("Answer edited uuid=%s by=%s", answer.uuid, actor.uuid)
        return answer

    def delete_answer(self, actor: User, answer_uuid: str) -> Answer:
        answer = self.get_answer(answer_uuid)
        authorize_mutation(actor, _load_owner(self._users, answer.user_id), Privilege.DELETE, "answer")
        self._store.delete_answer(answer.id)
        logger.info("Answer deleted uuid=%s by=%s", answer.uuid, actor.uuid)
        return answer
