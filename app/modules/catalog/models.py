"""Pydantic models for the static subject and topic catalog."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Subject(BaseModel):
    """A catalog subject; ``icon`` and ``color`` are presentation tags."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    color: str


class Topic(BaseModel):
    """A catalog topic or a learner-authored one (slug id)."""

    model_config = ConfigDict(frozen=True)

    id: str
    subject_id: str
    name: str
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    custom: bool = False
