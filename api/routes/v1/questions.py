"""
api/routes/v1/questions.py -- Question routes for the Quora REST API.

Routes:
  POST   /question/create                -- create a question owned by the caller
  GET    /question/all                   -- list every question
  PUT    /question/edit/{question_id}    -- edit content (owner only, ATHR-003)
  GET    /question/all/{user_id}         -- questions posted by one user (USR-001)
  DELETE /question/delete/{question_id}  -- delete (owner or admin, ATHR-003)

All routes require a live session. The router-level dependency rejects
unknown, signed-out and expired tokens before any handler runs; handlers that
need the caller ask for get_current_user again (FastAPI caches the result
per request).
"""

from fastapi import APIRouter, Depends, Request

from api.models import QuestionDetailsResponse, QuestionEditRequest, QuestionRequest, QuestionResponse
from auth.dependencies import get_current_user
from auth.models import User
from qa.service import QuestionService

router = APIRouter(dependencies=[Depends(get_current_user)])


def _questions(request: Request) -> QuestionService:
    return request.app.state.question_service


@router.post("/question/create", response_model=QuestionResponse, status_code=201)
def create_question(
    body: QuestionRequest,
    current_user: User = Depends(get_current_user),
    service: QuestionService = Depends(_questions),
) -> QuestionResponse:
    question = service.create_question(current_user, body.content)
    return QuestionResponse(id=question.uuid, status="QUESTION CREATED")


@router.get("/question/all", response_model=list[QuestionDetailsResponse])
def list_questions(service: QuestionService = Depends(_questions)) -> list[QuestionDetailsResponse]:
    return [QuestionDetailsResponse.from_question(q) for q in service.list_questions()]


@router.put("/question/edit/{question_id}", response_model=QuestionResponse)
def edit_question(
    question_id: str,
    body: QuestionEditRequest,
    current_user: User = Depends(get_current_user),
    service: QuestionService = Depends(_questions),
) -> QuestionResponse:
    """Replace the content of a question. Only its owner may do this -- admins included."""
    question = service.edit_question(current_user, question_id, body.content)
    return QuestionResponse(id=question.uuid, status="QUESTION EDITED")


@router.get("/question/all/{user_id}", response_model=list[QuestionDetailsResponse])
def list_questions_by_user(
    user_id: str,
    service: QuestionService = Depends(_questions),
) -> list[QuestionDetailsResponse]:
    return [QuestionDetailsResponse.from_question(q) for q in service.list_questions_by_user(user_id)]


@router.delete("/question/delete/{question_id}", response_model=QuestionResponse)
def delete_question(
    question_id: str,
    current_user: User = Depends(get_current_user),
    service: QuestionService = Depends(_questions),
) -> QuestionResponse:
    """Delete a question and its answers. Owner or admin."""
    question = service.delete_question(current_user, question_id)
    return QuestionResponse(id=question.uuid, status="QUESTION DELETED")
