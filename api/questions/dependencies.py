"""
Store lookup for question routes.
"""

from __future__ import annotations

from fastapi import Request

from .repository import QuestionsRepository


async def get_questions_repository(request: Request) -> QuestionsRepository:
    return request.app.state.questions_repository
