"""
Answer API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Answer(BaseModel):
    # Kept as raw text; the store validates it so a malformed id maps to 400.
    question_uuid: str
    content: str


class AnswerDetail(BaseModel):
    answer_uuid: str
    question_uuid: str
    content: str
    created_at: datetime


class AnswerId(BaseModel):
    answer_uuid: str
