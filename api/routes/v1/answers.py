"""
api/routes/v1/answers.py -- Answer routes for the Quora REST API.

Routes:
  POST   /question/{question_id}/answer/create  -- answer a question (QUES-001)
  GET    /answer/all/{question_id}              -- answers of one question (QUES-001)
  PUT    /answer/edit/{answer_id}               -- edit content (owner only, ATHR-003)
  DELETE /answer/delete/{answer_id}             -- delete (owner or admin, ATHR-003)

All routes require a live session (router-level dependency).
"""

from fastapi import APIRouter, Depends, Request

from api.models import AnswerDetailsResponse, AnswerEditRequest, AnswerRequest, AnswerResponse
from auth.dependencies import get_current_user
from auth.models import User
from qa.service import AnswerService

router = APIRouter(dependencies=[Depends(get_current_user)])


def _answers(request: Request) -> AnswerService:
    return request.app.state.answer_service


@router.post("/question/{question_id}/answer/create", response_model=AnswerResponse, status_code=201)
def create_answer(
    question_id: str,
    body: AnswerRequest,
    current_user: User = Depends(get_current_user),
    service: AnswerService = Depends(_answers),
) -> AnswerResponse:
    answer = service.create_answer(current_user, question_id, body.answer)
    return AnswerResponse(id=answer.uuid, status="ANSWER CREATED")


@router.get("/answer/all/{question_id}", response_model=list[AnswerDetailsResponse])
def list_answers(question_id: str, service: AnswerService = Depends(_answers)) -> list[AnswerDetailsResponse]:
    return [AnswerDetailsResponse.from_answer(a) for a in service.list_answers(question_id)]


@router.put("/answer/edit/{answer_id}", response_model=AnswerResponse)
def edit_answer(
    answer_id: str,
    body: AnswerEditRequest,
    current_user: User = Depends(get_current_user),
    service: AnswerService = Depends(_answers),
) -> AnswerResponse:
    answer = service.edit_answer(current_user, answer_id, body.content)
    return AnswerResponse(id=answer.uuid, status="ANSWER EDITED")


@router.delete("/answer/delete/{answer_id}", response_model=AnswerResponse)
def delete_answer(
    answer_id: str,
    current_user: User = Depends(get_current_user),
    service: AnswerService = Depends(_answers),
) -> AnswerResponse:
    answer = service.delete_answer(current_user, answer_id)
    return AnswerResponse(id=answer.uuid, status="ANSWER DELETED")
