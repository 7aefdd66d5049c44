"""
Store lookup for answer routes.
"""

from __future__ import annotations

from fastapi import Request

from .repository import AnswersRepository


async def get_answers_repository(request: Request) -> AnswersRepository:
    return request.app.state.answers_repository
