from __future__ import annotations

from pydantic import BaseModel, Field

from app.apis.wizard.schemas import SessionState
from app.modules.lessons.models import LessonContent
from app.modules.wizard.achievements import Achievement


class LessonResponse(BaseModel):
    lesson: LessonContent
    state: SessionState
    notifications: list[Achievement] = Field(default_factory=list)
