from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt, StrictStr
from typing import Union

from app.apis.wizard.schemas import SessionState
from app.modules.quiz.models import QuizQuestion, QuizResult
from app.modules.wizard.achievements import Achievement


class QuizRequest(BaseModel):
    num_questions: int = Field(5, ge=1, le=20)


class QuizResponse(BaseModel):
    questions: list[QuizQuestion]
    state: SessionState
    notifications: list[Achievement] = Field(default_factory=list)


class SubmitRequest(BaseModel):
    # option index for multiple-choice, text otherwise; null when skipped
    answers: list[Union[StrictInt, StrictStr, None]]


class SubmitResponse(BaseModel):
    result: QuizResult
    display_score: int
    state: SessionState
    notifications: list[Achievement] = Field(default_factory=list)
