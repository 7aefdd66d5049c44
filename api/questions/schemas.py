"""
Question API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Question(BaseModel):
    title: str = Field(..., min_length=1)
    description: str


class QuestionDetail(BaseModel):
    question_uuid: str
    title: str
    description: str
    created_at: datetime


class QuestionId(BaseModel):
    question_uuid: str
