"""
Answer handlers: call the store and downgrade its errors.
"""

from __future__ import annotations

import logging

from core.errors import HandlerError, InvalidIdentifier, StorageError, to_handler_error

from .repository import AnswersRepository
from .schemas import Answer, AnswerDetail

logger = logging.getLogger(__name__)

# Caller-supplied ids are logged quoted and cut short.
MAX_LOGGED_UUID_CHARS = 64


def _downgrade(exc: StorageError, operation: str) -> HandlerError:
    if isinstance(exc, InvalidIdentifier):
        logger.warning("%s_bad_request uuid=%r detail=%s", operation, exc.uuid[:MAX_LOGGED_UUID_CHARS], exc.detail)
    else:
        logger.error("%s_failed detail=%s", operation, exc.detail, exc_info=exc)
    return to_handler_error(exc)


async def create_answer(answer: Answer, repository: AnswersRepository) -> AnswerDetail:
    try:
        return await repository.create_answer(answer)
    except StorageError as exc:
        raise _downgrade(exc, "create_answer") from exc


async def read_answers(question_uuid: str, repository: AnswersRepository) -> list[AnswerDetail]:
    try:
        return await repository.get_answers(question_uuid)
    except StorageError as exc:
        raise _downgrade(exc, "read_answers") from exc


async def delete_answer(answer_uuid: str, repository: AnswersRepository) -> None:
    try:
        await repository.delete_answer(answer_uuid)
    except StorageError as exc:
        raise _downgrade(exc, "delete_answer") from exc
