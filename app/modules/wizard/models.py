"""Pydantic models and enums for the learner wizard."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Step(str, Enum):
    ONBOARDING = "onboarding"
    SUBJECT = "subject"
    TOPIC = "topic"
    API_KEY = "apiKey"
    LESSON = "lesson"
    QUIZ = "quiz"


class Action(str, Enum):
    SET_PROFILE = "set_profile"
    SET_SUBJECT = "set_subject"
    SET_TOPIC = "set_topic"
    CONNECT = "connect"
    START_QUIZ = "start_quiz"
    RETURN_TO_LESSON = "return_to_lesson"
    CHANGE_TOPIC = "change_topic"
    BACK = "back"
    RESET = "reset"


class ProviderName(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class LearnerProfile(BaseModel):
    """Onboarding answers; immutable once set."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=5, le=18)
    grade: int = Field(..., ge=1, le=12)
    interests: list[str] = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("interests")
    @classmethod
    def _clean_interests(cls, v: list[str]) -> list[str]:
        out: list[str] = []
        for item in v:
            s = str(item).strip()
            if s and s not in out:
                out.append(s)
        if not out:
            raise ValueError("at least one interest is required")
        return out
