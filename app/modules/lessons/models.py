"""Pydantic models for generated lesson content.

Required fields have no defaults so a partially-shaped model response fails
validation and is replaced by fallback content instead of reaching the client.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from app.core.schemas import CamelModel
from app.modules.quiz.models import QuizQuestion


class ActivityType(str, Enum):
    QUESTION = "question"
    EXERCISE = "exercise"
    EXPERIMENT = "experiment"


class LessonActivity(CamelModel):
    type: ActivityType
    description: str
    solution: Optional[str] = None
    hints: Optional[list[str]] = None


class LessonSection(CamelModel):
    title: str
    content: str
    example: Optional[str] = None
    activity: Optional[LessonActivity] = None


class WorksheetProblem(CamelModel):
    question: str
    answer: Optional[str] = None
    difficulty: Optional[str] = None


class Worksheet(CamelModel):
    title: str
    instructions: Optional[str] = None
    problems: list[WorksheetProblem]


class LessonImage(CamelModel):
    description: str
    url: Optional[str] = None
    alt: str


class InteractiveExercise(CamelModel):
    title: str
    description: str
    instructions: Optional[str] = None


class VideoReference(CamelModel):
    title: str
    url: Optional[str] = None
    description: Optional[str] = None


class LessonContent(CamelModel):
    title: str
    introduction: str
    sections: list[LessonSection] = Field(..., min_length=1)
    summary: str
    related_topics: list[str]
    worksheets: Optional[list[Worksheet]] = None
    images: Optional[list[LessonImage]] = None
    interactive_exercises: Optional[list[InteractiveExercise]] = None
    videos: Optional[list[VideoReference]] = None


class GenerationResult(BaseModel):
    """Adapter output: ``error`` is set only for surfaced failures."""

    content: Union[LessonContent, list[QuizQuestion], None] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
