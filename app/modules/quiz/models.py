"""Pydantic models for generated quizzes and their scored results.

Questions are produced by the content adapter (model output or fallback) and
scored in-process by ``app.modules.quiz.scoring``; nothing here is persisted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, field_validator, model_validator

from app.core.schemas import CamelModel


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"


class QuizQuestion(CamelModel):
    """A single quiz question.

    ``correct_answer`` is an option index for multiple-choice questions and a
    literal string for the other types.
    """

    id: str
    type: QuestionType
    question: str
    options: Optional[list[str]] = None
    correct_answer: Union[int, str]
    explanation: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        # models often number questions 1..N
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode="after")
    def _check_answer_shape(self) -> "QuizQuestion":
        if self.type == QuestionType.MULTIPLE_CHOICE:
            if not self.options:
                raise ValueError("multiple-choice question needs options")
            if not isinstance(self.correct_answer, int):
                raise ValueError("multiple-choice correctAnswer must be an index")
            if not 0 <= self.correct_answer < len(self.options):
                raise ValueError("correctAnswer index out of range")
        elif not isinstance(self.correct_answer, str):
            raise ValueError(f"{self.type.value} correctAnswer must be a string")
        return self


class FeedbackTier(str, Enum):
    OUTSTANDING = "outstanding"
    GREAT = "great"
    GOOD_EFFORT = "good effort"
    KEEP_LEARNING = "keep learning"


class QuizResult(CamelModel):
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    # full precision; round only for display
    score: float
    tier: FeedbackTier
    feedback: str
    per_question: list[bool] = Field(default_factory=list)
