"""
In-process stand-in for the Postgres tables.

Both in-memory repositories share one `MemoryBackend`, so the answers ->
questions reference and the cascading delete behave the way the real schema
does (see `db/init/001_schema.sql`). Rows are plain dicts shaped like the
asyncpg records the Postgres repositories map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MemoryBackend:
    questions: dict[UUID, dict[str, Any]] = field(default_factory=dict)
    answers: dict[UUID, dict[str, Any]] = field(default_factory=dict)

    def new_uuid(self) -> UUID:
        while True:
            candidate = uuid4()
            if candidate not in self.questions and candidate not in self.answers:
                return candidate

    def insert_question(self, *, title: str, description: str) -> dict[str, Any]:
        if not title:
            # CHECK (title <> '')
            raise ValueError("questions.title must not be empty")
        row = {
            "question_uuid": self.new_uuid(),
            "title": title,
            "description": description,
            "created_at": _utc_now(),
        }
        self.questions[row["question_uuid"]] = row
        return dict(row)

    def delete_question(self, question_uuid: UUID) -> None:
        if self.questions.pop(question_uuid, None) is None:
            return None
        # ON DELETE CASCADE
        orphaned = [k for k, row in self.answers.items() if row["question_uuid"] == question_uuid]
        for key in orphaned:
            del self.answers[key]

    def insert_answer(self, *, question_uuid: UUID, content: str) -> dict[str, Any] | None:
        """
        Return the new row, or None when `question_uuid` references no question.
        """
        if question_uuid not in self.questions:
            return None
        row = {
            "answer_uuid": self.new_uuid(),
            "question_uuid": question_uuid,
            "content": content,
            "created_at": _utc_now(),
        }
        self.answers[row["answer_uuid"]] = row
        return dict(row)

    def delete_answer(self, answer_uuid: UUID) -> None:
        self.answers.pop(answer_uuid, None)

    def answers_for(self, question_uuid: UUID) -> list[dict[str, Any]]:
        return [dict(row) for row in self.answers.values() if row["question_uuid"] == question_uuid]
