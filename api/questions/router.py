"""
Question API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from . import service
from .dependencies import get_questions_repository
from .repository import QuestionsRepository
from .schemas import Question, QuestionDetail, QuestionId

router = APIRouter()


@router.post("/question")
async def create_question(
    question: Question,
    repository: QuestionsRepository = Depends(get_questions_repository),
) -> QuestionDetail:
    return await service.create_question(question, repository)


@router.get("/questions")
async def read_questions(
    repository: QuestionsRepository = Depends(get_questions_repository),
) -> list[QuestionDetail]:
    return await service.read_questions(repository)


@router.delete("/question", response_class=Response)
async def delete_question(
    question_uuid: QuestionId,
    repository: QuestionsRepository = Depends(get_questions_repository),
) -> Response:
    await service.delete_question(question_uuid.question_uuid, repository)
    return Response(status_code=status.HTTP_200_OK)
