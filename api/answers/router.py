"""
Answer API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from . import service
from .dependencies import get_answers_repository
from .repository import AnswersRepository
from .schemas import Answer, AnswerDetail, AnswerId

router = APIRouter()


@router.post("/answer")
async def create_answer(
    answer: Answer,
    repository: AnswersRepository = Depends(get_answers_repository),
) -> AnswerDetail:
    return await service.create_answer(answer, repository)


@router.get("/answers")
async def read_answers(
    question_uuid: str = Query(...),
    repository: AnswersRepository = Depends(get_answers_repository),
) -> list[AnswerDetail]:
    """
    List answers of a question. An unknown (well-formed) question id yields [].
    """
    return await service.read_answers(question_uuid, repository)


@router.delete("/answer", response_class=Response)
async def delete_answer(
    answer_uuid: AnswerId,
    repository: AnswersRepository = Depends(get_answers_repository),
) -> Response:
    await service.delete_answer(answer_uuid.answer_uuid, repository)
    return Response(status_code=status.HTTP_200_OK)
