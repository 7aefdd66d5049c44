"""
Questions persistence.

`QuestionsRepository` is the store contract. `PostgresQuestionsRepository`
runs raw SQL over an asyncpg pool; `InMemoryQuestionsRepository` keeps rows
in a `MemoryBackend` for tests and local runs without a database.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import asyncpg

from core import db
from core.errors import StorageFailure
from core.ids import parse_uuid, render_uuid
from core.memory import MemoryBackend

from .schemas import Question, QuestionDetail

logger = logging.getLogger(__name__)


def _to_question_detail(row: dict[str, Any]) -> QuestionDetail:
    return QuestionDetail(
        question_uuid=render_uuid(row["question_uuid"]),
        title=str(row["title"]),
        description=str(row["description"]),
        created_at=row["created_at"],
    )


class QuestionsRepository(ABC):
    @abstractmethod
    async def create_question(self, question: Question) -> QuestionDetail:
        """Insert a question; the store generates its uuid and created_at."""

    @abstractmethod
    async def delete_question(self, question_uuid: str) -> None:
        """Delete by id. Missing rows are not an error."""

    @abstractmethod
    async def get_questions(self) -> list[QuestionDetail]:
        """Return every stored question."""


class PostgresQuestionsRepository(QuestionsRepository):
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def create_question(self, question: Question) -> QuestionDetail:
        try:
            row = await db.fetch_one(
                self._pool,
                """
                INSERT INTO questions (title, description)
                VALUES ($1, $2)
                RETURNING question_uuid, title, description, created_at
                """,
                question.title,
                question.description,
            )
        except Exception as exc:
            logger.debug("create_question_failed error=%s", type(exc).__name__)
            raise StorageFailure(detail="Failed to create question on database.") from exc

        if row is None:
            raise StorageFailure(detail="Insert into questions returned no row.")
        return _to_question_detail(row)

    async def delete_question(self, question_uuid: str) -> None:
        uuid = parse_uuid(question_uuid)

        try:
            await db.execute(
                self._pool,
                "DELETE FROM questions WHERE question_uuid = $1",
                uuid,
            )
        except Exception as exc:
            logger.debug("delete_question_failed question_uuid=%s error=%s", uuid, type(exc).__name__)
            raise StorageFailure(detail="Failed to delete question from database.") from exc

    async def get_questions(self) -> list[QuestionDetail]:
        try:
            rows = await db.fetch_all(
                self._pool,
                """
                SELECT question_uuid, title, description, created_at
                FROM questions
                ORDER BY created_at, question_uuid
                """,
            )
        except Exception as exc:
            logger.debug("get_questions_failed error=%s", type(exc).__name__)
            raise StorageFailure(detail="Failed to read questions from database.") from exc

        return [_to_question_detail(r) for r in rows]


class InMemoryQuestionsRepository(QuestionsRepository):
    def __init__(self, backend: MemoryBackend) -> None:
        self._backend = backend

    async def create_question(self, question: Question) -> QuestionDetail:
        try:
            row = self._backend.insert_question(title=question.title, description=question.description)
        except ValueError as exc:
            raise StorageFailure(detail="Failed to create question in memory.") from exc
        return _to_question_detail(row)

    async def delete_question(self, question_uuid: str) -> None:
        uuid = parse_uuid(question_uuid)
        self._backend.delete_question(uuid)

    async def get_questions(self) -> list[QuestionDetail]:
        return [_to_question_detail(r) for r in self._backend.questions.values()]
