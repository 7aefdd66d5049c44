"""
Answers persistence.

Every answer references one question. The reference is enforced by the
database (`answers.question_uuid REFERENCES questions ... ON DELETE CASCADE`);
this module only interprets the violation. A foreign-key violation on insert
(SQLSTATE 23503) means the question does not exist and is reported as
`InvalidIdentifier`, same as a malformed id. Any other backend error is a
`StorageFailure`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import asyncpg

from core import db
from core.errors import InvalidIdentifier, StorageFailure, is_foreign_key_violation
from core.ids import parse_uuid, render_uuid
from core.memory import MemoryBackend

from .schemas import Answer, AnswerDetail

logger = logging.getLogger(__name__)


def _to_answer_detail(row: dict[str, Any]) -> AnswerDetail:
    return AnswerDetail(
        answer_uuid=render_uuid(row["answer_uuid"]),
        question_uuid=render_uuid(row["question_uuid"]),
        content=str(row["content"]),
        created_at=row["created_at"],
    )


class AnswersRepository(ABC):
    @abstractmethod
    async def create_answer(self, answer: Answer) -> AnswerDetail:
        """
        Insert an answer for `answer.question_uuid`.

        Raises InvalidIdentifier when the id is malformed or names no question.
        """

    @abstractmethod
    async def delete_answer(self, answer_uuid: str) -> None:
        """Delete by id. Missing rows are not an error."""

    @abstractmethod
    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        """
        Return the answers of one question. No existence check: an unknown
        question simply has no answers.
        """


class PostgresAnswersRepository(AnswersRepository):
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        uuid = parse_uuid(answer.question_uuid)

        try:
            row = await db.fetch_one(
                self._pool,
                """
                INSERT INTO answers (question_uuid, content)
                VALUES ($1, $2)
                RETURNING answer_uuid, question_uuid, content, created_at
                """,
                uuid,
                answer.content,
            )
        except Exception as exc:
            if is_foreign_key_violation(exc):
                logger.debug("create_answer_unknown_question question_uuid=%s", uuid)
                raise InvalidIdentifier(
                    render_uuid(uuid),
                    detail="Question does not exist.",
                ) from exc
            logger.debug("create_answer_failed question_uuid=%s error=%s", uuid, type(exc).__name__)
            raise StorageFailure(detail="Failed to create answer on database.") from exc

        if row is None:
            raise StorageFailure(detail="Insert into answers returned no row.")
        return _to_answer_detail(row)

    async def delete_answer(self, answer_uuid: str) -> None:
        uuid = parse_uuid(answer_uuid)

        try:
            await db.execute(
                self._pool,
                "DELETE FROM answers WHERE answer_uuid = $1",
                uuid,
            )
        except Exception as exc:
            logger.debug("delete_answer_failed answer_uuid=%s error=%s", uuid, type(exc).__name__)
            raise StorageFailure(detail="Failed to delete answer from database.") from exc

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        uuid = parse_uuid(question_uuid)

        try:
            rows = await db.fetch_all(
                self._pool,
                """
                SELECT answer_uuid, question_uuid, content, created_at
                FROM answers
                WHERE question_uuid = $1
                ORDER BY created_at, answer_uuid
                """,
                uuid,
            )
        except Exception as exc:
            logger.debug("get_answers_failed question_uuid=%s error=%s", uuid, type(exc).__name__)
            raise StorageFailure(detail="Failed to read answers from database.") from exc

        return [_to_answer_detail(r) for r in rows]


class InMemoryAnswersRepository(AnswersRepository):
    def __init__(self, backend: MemoryBackend) -> None:
        self._backend = backend

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        uuid = parse_uuid(answer.question_uuid)
        row = self._backend.insert_answer(question_uuid=uuid, content=answer.content)
        if row is None:
            raise InvalidIdentifier(render_uuid(uuid), detail="Question does not exist.")
        return _to_answer_detail(row)

    async def delete_answer(self, answer_uuid: str) -> None:
        uuid = parse_uuid(answer_uuid)
        self._backend.delete_answer(uuid)

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        uuid = parse_uuid(question_uuid)
        return [_to_answer_detail(r) for r in self._backend.answers_for(uuid)]
