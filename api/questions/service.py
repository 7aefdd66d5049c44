"""
Question handlers: call the store and downgrade its errors.

InvalidIdentifier -> BadRequest (400), StorageFailure -> InternalError (500).
"""

from __future__ import annotations

import logging

from core.errors import HandlerError, InvalidIdentifier, StorageError, to_handler_error

from .repository import QuestionsRepository
from .schemas import Question, QuestionDetail

logger = logging.getLogger(__name__)

# Caller-supplied ids are logged quoted and cut short.
MAX_LOGGED_UUID_CHARS = 64


def _downgrade(exc: StorageError, operation: str) -> HandlerError:
    if isinstance(exc, InvalidIdentifier):
        logger.warning("%s_bad_request uuid=%r", operation, exc.uuid[:MAX_LOGGED_UUID_CHARS])
    else:
        logger.error("%s_failed detail=%s", operation, exc.detail, exc_info=exc)
    return to_handler_error(exc)


async def create_question(question: Question, repository: QuestionsRepository) -> QuestionDetail:
    try:
        return await repository.create_question(question)
    except StorageError as exc:
        raise _downgrade(exc, "create_question") from exc


async def read_questions(repository: QuestionsRepository) -> list[QuestionDetail]:
    try:
        return await repository.get_questions()
    except StorageError as exc:
        raise _downgrade(exc, "read_questions") from exc


async def delete_question(question_uuid: str, repository: QuestionsRepository) -> None:
    try:
        await repository.delete_question(question_uuid)
    except StorageError as exc:
        raise _downgrade(exc, "delete_question") from exc
