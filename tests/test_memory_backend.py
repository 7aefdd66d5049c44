"""
Store behaviour on the in-memory backend: generated fields, foreign-key
enforcement, idempotent deletes and the cascade on question delete.
"""

from uuid import UUID, uuid4

import pytest

from answers.repository import InMemoryAnswersRepository
from answers.schemas import Answer
from core.errors import InvalidIdentifier, StorageFailure
from core.memory import MemoryBackend
from questions.repository import InMemoryQuestionsRepository
from questions.schemas import Question


def _question(title: str = "What is Rust ownership?") -> Question:
    return Question(title=title, description="Explain briefly")


class TestQuestionsStore:
    @pytest.mark.asyncio
    async def test_create_generates_fields(self, questions_repo: InMemoryQuestionsRepository) -> None:
        detail = await questions_repo.create_question(_question())

        assert UUID(detail.question_uuid)
        assert detail.created_at is not None
        assert detail.title == "What is Rust ownership?"

    @pytest.mark.asyncio
    async def test_create_never_reuses_uuid(self, questions_repo: InMemoryQuestionsRepository) -> None:
        seen = set()
        for i in range(100):
            detail = await questions_repo.create_question(_question(f"q{i}"))
            assert detail.question_uuid not in seen
            seen.add(detail.question_uuid)

    @pytest.mark.asyncio
    async def test_list_is_stable(self, questions_repo: InMemoryQuestionsRepository) -> None:
        for i in range(3):
            await questions_repo.create_question(_question(f"q{i}"))

        first = await questions_repo.get_questions()
        second = await questions_repo.get_questions()

        assert first == second
        assert [q.title for q in first] == ["q0", "q1", "q2"]

    @pytest.mark.asyncio
    async def test_delete_twice_is_silent(self, questions_repo: InMemoryQuestionsRepository) -> None:
        detail = await questions_repo.create_question(_question())

        await questions_repo.delete_question(detail.question_uuid)
        await questions_repo.delete_question(detail.question_uuid)

        assert await questions_repo.get_questions() == []

    @pytest.mark.asyncio
    async def test_delete_unknown_uuid_is_silent(self, questions_repo: InMemoryQuestionsRepository) -> None:
        await questions_repo.delete_question(str(uuid4()))

    @pytest.mark.asyncio
    async def test_empty_title_rejected_like_postgres(
        self,
        backend: MemoryBackend,
        questions_repo: InMemoryQuestionsRepository,
    ) -> None:
        # model_construct skips the min_length check.
        question = Question.model_construct(title="", description="d")

        with pytest.raises(StorageFailure):
            await questions_repo.create_question(question)

        assert backend.questions == {}

    @pytest.mark.asyncio
    async def test_delete_malformed_uuid(self, questions_repo: InMemoryQuestionsRepository) -> None:
        with pytest.raises(InvalidIdentifier) as exc_info:
            await questions_repo.delete_question("12-34")
        assert exc_info.value.uuid == "12-34"


class TestAnswersStore:
    @pytest.mark.asyncio
    async def test_unknown_question_is_invalid_identifier(self, answers_repo: InMemoryAnswersRepository) -> None:
        missing = uuid4()

        with pytest.raises(InvalidIdentifier) as exc_info:
            await answers_repo.create_answer(Answer(question_uuid=missing.hex, content="orphan"))

        assert exc_info.value.uuid == str(missing)

    @pytest.mark.asyncio
    async def test_malformed_question_uuid(self, answers_repo: InMemoryAnswersRepository) -> None:
        with pytest.raises(InvalidIdentifier) as exc_info:
            await answers_repo.create_answer(Answer(question_uuid="xyz", content="x"))
        assert exc_info.value.uuid == "xyz"

    @pytest.mark.asyncio
    async def test_get_answers_for_question_without_answers(
        self,
        questions_repo: InMemoryQuestionsRepository,
        answers_repo: InMemoryAnswersRepository,
    ) -> None:
        question = await questions_repo.create_question(_question())
        assert await answers_repo.get_answers(question.question_uuid) == []

    @pytest.mark.asyncio
    async def test_get_answers_for_unknown_question(self, answers_repo: InMemoryAnswersRepository) -> None:
        assert await answers_repo.get_answers(str(uuid4())) == []

    @pytest.mark.asyncio
    async def test_answers_are_scoped_to_question(
        self,
        questions_repo: InMemoryQuestionsRepository,
        answers_repo: InMemoryAnswersRepository,
    ) -> None:
        first = await questions_repo.create_question(_question("first"))
        second = await questions_repo.create_question(_question("second"))
        await answers_repo.create_answer(Answer(question_uuid=first.question_uuid, content="a1"))
        await answers_repo.create_answer(Answer(question_uuid=first.question_uuid, content="a2"))
        await answers_repo.create_answer(Answer(question_uuid=second.question_uuid, content="b1"))

        answers = await answers_repo.get_answers(first.question_uuid)

        assert [a.content for a in answers] == ["a1", "a2"]
        assert {a.question_uuid for a in answers} == {first.question_uuid}

    @pytest.mark.asyncio
    async def test_delete_answer_twice_is_silent(
        self,
        questions_repo: InMemoryQuestionsRepository,
        answers_repo: InMemoryAnswersRepository,
    ) -> None:
        question = await questions_repo.create_question(_question())
        answer = await answers_repo.create_answer(Answer(question_uuid=question.question_uuid, content="x"))

        await answers_repo.delete_answer(answer.answer_uuid)
        await answers_repo.delete_answer(answer.answer_uuid)

        assert await answers_repo.get_answers(question.question_uuid) == []


class TestQuestionDeleteCascades:
    @pytest.mark.asyncio
    async def test_answers_removed_with_question(
        self,
        backend: MemoryBackend,
        questions_repo: InMemoryQuestionsRepository,
        answers_repo: InMemoryAnswersRepository,
    ) -> None:
        question = await questions_repo.create_question(_question())
        await answers_repo.create_answer(Answer(question_uuid=question.question_uuid, content="x"))

        await questions_repo.delete_question(question.question_uuid)

        assert await answers_repo.get_answers(question.question_uuid) == []
        assert backend.answers == {}

    @pytest.mark.asyncio
    async def test_cannot_answer_deleted_question(
        self,
        questions_repo: InMemoryQuestionsRepository,
        answers_repo: InMemoryAnswersRepository,
    ) -> None:
        question = await questions_repo.create_question(_question())
        await questions_repo.delete_question(question.question_uuid)

        with pytest.raises(InvalidIdentifier):
            await answers_repo.create_answer(Answer(question_uuid=question.question_uuid, content="late"))


class TestScenario:
    @pytest.mark.asyncio
    async def test_question_answer_lifecycle(
        self,
        questions_repo: InMemoryQuestionsRepository,
        answers_repo: InMemoryAnswersRepository,
    ) -> None:
        kept = await questions_repo.create_question(_question("Kept question"))
        question = await questions_repo.create_question(_question())

        answer = await answers_repo.create_answer(
            Answer(question_uuid=question.question_uuid, content="Each value has one owner.")
        )
        assert answer.question_uuid == question.question_uuid
        assert answer.content == "Each value has one owner."

        assert await answers_repo.get_answers(question.question_uuid) == [answer]

        await questions_repo.delete_question(question.question_uuid)

        assert await questions_repo.get_questions() == [kept]
        assert await answers_repo.get_answers(question.question_uuid) == []
