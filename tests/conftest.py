"""
Shared fixtures. No database: Postgres repositories get a mocked asyncpg pool,
everything else runs on the in-memory backend.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from answers.repository import InMemoryAnswersRepository
from core.memory import MemoryBackend
from questions.repository import InMemoryQuestionsRepository

QUESTION_UUID = UUID("0f6d3c2a-5b1e-4c7d-9a8b-1e2f3a4b5c6d")
ANSWER_UUID = UUID("a1b2c3d4-e5f6-4789-8abc-def012345678")
CREATED_AT = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


def make_pool() -> MagicMock:
    """
    Mock asyncpg pool whose `acquire()` yields a mocked connection.

    The connection methods are also exposed on the pool itself so tests can
    write `pool.fetchrow.return_value = ...`.
    """
    con = MagicMock()
    con.fetchrow = AsyncMock(return_value=None)
    con.fetch = AsyncMock(return_value=[])
    con.execute = AsyncMock(return_value="DELETE 0")

    acquired = MagicMock()
    acquired.__aenter__ = AsyncMock(return_value=con)
    acquired.__aexit__ = AsyncMock(return_value=False)

    mock_pool = MagicMock()
    mock_pool.acquire = MagicMock(return_value=acquired)
    mock_pool.fetchrow = con.fetchrow
    mock_pool.fetch = con.fetch
    mock_pool.execute = con.execute
    return mock_pool


@pytest.fixture
def pool() -> MagicMock:
    return make_pool()


@pytest.fixture
def question_row() -> dict:
    return {
        "question_uuid": QUESTION_UUID,
        "title": "What is Rust ownership?",
        "description": "Explain briefly",
        "created_at": CREATED_AT,
    }


@pytest.fixture
def answer_row() -> dict:
    return {
        "answer_uuid": ANSWER_UUID,
        "question_uuid": QUESTION_UUID,
        "content": "Each value has one owner.",
        "created_at": CREATED_AT,
    }


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def questions_repo(backend: MemoryBackend) -> InMemoryQuestionsRepository:
    return InMemoryQuestionsRepository(backend)


@pytest.fixture
def answers_repo(backend: MemoryBackend) -> InMemoryAnswersRepository:
    return InMemoryAnswersRepository(backend)
