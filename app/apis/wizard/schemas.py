from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.modules.catalog.models import Difficulty, Subject, Topic
from app.modules.quiz.models import QuizResult
from app.modules.wizard.achievements import Achievement
from app.modules.wizard.models import LearnerProfile, ProviderName, Step
from app.modules.wizard.state import WizardState


class SessionState(BaseModel):
    """Client view of a wizard session; never includes secrets."""

    id: str
    step: Step
    profile: Optional[LearnerProfile] = None
    subject: Optional[Subject] = None
    topic: Optional[Topic] = None
    providers: list[ProviderName] = Field(default_factory=list)
    active_provider: Optional[ProviderName] = None
    achievements: list[Achievement] = Field(default_factory=list)
    has_lesson: bool = False
    quiz_questions: int = 0
    last_result: Optional[QuizResult] = None


class StateResponse(BaseModel):
    state: SessionState
    notifications: list[Achievement] = Field(default_factory=list)


class SubjectRequest(BaseModel):
    subject_id: str


class TopicRequest(BaseModel):
    """Pick a catalog topic by id, or author one by name."""

    topic_id: Optional[str] = None
    name: Optional[str] = Field(None, max_length=120)
    description: Optional[str] = Field(None, max_length=500)
    difficulty: Difficulty = Difficulty.BEGINNER


class CredentialRequest(BaseModel):
    api_key: str = Field(..., min_length=1)
    validate_key: bool = True


class CredentialResponse(StateResponse):
    valid: bool = True


class ConnectRequest(BaseModel):
    provider: Optional[ProviderName] = None


def snapshot(state: WizardState) -> SessionState:
    return SessionState(
        id=state.id,
        step=state.step,
        profile=state.profile,
        subject=state.subject,
        topic=state.topic,
        providers=sorted(state.credentials, key=lambda p: p.value),
        active_provider=state.active_provider,
        achievements=list(state.achievements),
        has_lesson=state.lesson is not None,
        quiz_questions=len(state.quiz),
        last_result=state.last_result,
    )


def state_response(state: WizardState) -> StateResponse:
    return StateResponse(
        state=snapshot(state), notifications=state.drain_notifications()
    )
