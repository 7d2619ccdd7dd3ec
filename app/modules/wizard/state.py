"""In-memory wizard sessions with an explicit step transition table.

Each session holds the learner's selections, provider credentials, unlocked
achievements and the most recently generated lesson/quiz. Sessions are kept
in-process only and swept after a period of inactivity.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from app.core.logging import get_logger
from app.modules.catalog.models import Subject, Topic
from app.modules.lessons.models import LessonContent
from app.modules.quiz.models import QuizQuestion, QuizResult
from app.modules.wizard.achievements import Achievement
from app.modules.wizard.models import Action, LearnerProfile, ProviderName, Step

logger = get_logger(__name__)


class WizardError(Exception):
    pass


class InvalidTransition(WizardError):
    def __init__(self, step: Step, action: Action) -> None:
        super().__init__(f"Cannot {action.value} from step '{step.value}'")
        self.step = step
        self.action = action


class MissingSelection(WizardError):
    pass


class MissingCredential(WizardError):
    pass


TRANSITIONS: dict[tuple[Step, Action], Step] = {
    (Step.ONBOARDING, Action.SET_PROFILE): Step.SUBJECT,
    (Step.SUBJECT, Action.SET_SUBJECT): Step.TOPIC,
    (Step.TOPIC, Action.SET_TOPIC): Step.API_KEY,
    (Step.API_KEY, Action.CONNECT): Step.LESSON,
    (Step.LESSON, Action.START_QUIZ): Step.QUIZ,
    (Step.QUIZ, Action.RETURN_TO_LESSON): Step.LESSON,
    (Step.LESSON, Action.CHANGE_TOPIC): Step.TOPIC,
    (Step.SUBJECT, Action.BACK): Step.ONBOARDING,
    (Step.TOPIC, Action.BACK): Step.SUBJECT,
    (Step.API_KEY, Action.BACK): Step.TOPIC,
    (Step.LESSON, Action.BACK): Step.TOPIC,
    (Step.QUIZ, Action.BACK): Step.LESSON,
}


def next_step(step: Step, action: Action) -> Step:
    if action == Action.RESET:
        return Step.ONBOARDING
    try:
        return TRANSITIONS[(step, action)]
    except KeyError:
        raise InvalidTransition(step, action) from None


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _short_id() -> str:
    return uuid4().hex[:12]


Notifier = Callable[[Achievement], None]


@dataclass
class WizardState:
    id: str = field(default_factory=_short_id)
    step: Step = Step.ONBOARDING
    profile: Optional[LearnerProfile] = None
    subject: Optional[Subject] = None
    topic: Optional[Topic] = None
    credentials: dict[ProviderName, str] = field(default_factory=dict)
    active_provider: Optional[ProviderName] = None
    achievements: list[Achievement] = field(default_factory=list)
    lesson: Optional[LessonContent] = None
    quiz: list[QuizQuestion] = field(default_factory=list)
    last_result: Optional[QuizResult] = None
    created_at: datetime = field(default_factory=_now_utc)
    last_activity: datetime = field(default_factory=_now_utc)
    # runtime
    on_unlock: Optional[Notifier] = field(default=None, repr=False)
    _pending: list[Achievement] = field(default_factory=list, repr=False)

    def _apply(self, action: Action) -> Step:
        self.step = next_step(self.step, action)
        self.last_activity = _now_utc()
        return self.step

    # Selections ---------------------------------------------------------
    def set_profile(self, profile: LearnerProfile) -> Step:
        next_step(self.step, Action.SET_PROFILE)
        self.profile = profile
        return self._apply(Action.SET_PROFILE)

    def set_subject(self, subject: Subject) -> Step:
        next_step(self.step, Action.SET_SUBJECT)
        if self.profile is None:
            raise MissingSelection("Complete onboarding before choosing a subject")
        if self.subject is None or self.subject.id != subject.id:
            self.topic = None
        self.subject = subject
        return self._apply(Action.SET_SUBJECT)

    def set_topic(self, topic: Topic) -> Step:
        next_step(self.step, Action.SET_TOPIC)
        if self.subject is None:
            raise MissingSelection("Select a subject first")
        if topic.subject_id != self.subject.id:
            raise MissingSelection(
                f"Topic '{topic.id}' does not belong to subject '{self.subject.id}'"
            )
        if self.topic != topic:
            self.lesson = None
            self.quiz = []
            self.last_result = None
        self.topic = topic
        return self._apply(Action.SET_TOPIC)

    # Credentials --------------------------------------------------------
    def add_credential(self, provider: ProviderName, api_key: str) -> None:
        key = (api_key or "").strip()
        if not key:
            raise MissingCredential("API key is required")
        self.credentials[provider] = key
        self.last_activity = _now_utc()

    def remove_credential(self, provider: ProviderName) -> bool:
        removed = self.credentials.pop(provider, None) is not None
        if self.active_provider == provider:
            self.active_provider = None
        return removed

    def set_active_provider(self, provider: ProviderName) -> None:
        if provider not in self.credentials:
            raise MissingCredential(f"No API key stored for {provider.value}")
        self.active_provider = provider

    @property
    def active_credential(self) -> Optional[str]:
        if self.active_provider is None:
            return None
        return self.credentials.get(self.active_provider)

    def connect(self, provider: Optional[ProviderName] = None) -> Step:
        next_step(self.step, Action.CONNECT)
        if provider is not None:
            self.set_active_provider(provider)
        if not self.active_credential:
            raise MissingCredential("API key is required")
        return self._apply(Action.CONNECT)

    # Navigation ---------------------------------------------------------
    def start_quiz(self) -> Step:
        return self._apply(Action.START_QUIZ)

    def return_to_lesson(self) -> Step:
        return self._apply(Action.RETURN_TO_LESSON)

    def change_topic(self) -> Step:
        return self._apply(Action.CHANGE_TOPIC)

    def back(self) -> Step:
        return self._apply(Action.BACK)

    def reset(self) -> Step:
        """Back to onboarding; credentials and achievements survive."""
        self.profile = None
        self.subject = None
        self.topic = None
        self.lesson = None
        self.quiz = []
        self.last_result = None
        return self._apply(Action.RESET)

    def require_content_inputs(self) -> tuple[LearnerProfile, Subject, Topic]:
        if self.profile is None or self.subject is None or self.topic is None:
            raise MissingSelection("Profile, subject and topic are required")
        return self.profile, self.subject, self.topic

    # Achievements -------------------------------------------------------
    def has_achievement(self, achievement_id: str) -> bool:
        return any(a.id == achievement_id for a in self.achievements)

    def add_achievement(self, achievement: Achievement) -> bool:
        """Record a badge once; returns True only when newly unlocked."""
        if self.has_achievement(achievement.id):
            return False
        self.achievements.append(achievement)
        self._pending.append(achievement)
        logger.info(
            "Achievement unlocked: %s", achievement.id, extra={"session_id": self.id}
        )
        if self.on_unlock is not None:
            self.on_unlock(achievement)
        return True

    def drain_notifications(self) -> list[Achievement]:
        out, self._pending = self._pending, []
        return out


class WizardManager:
    def __init__(self) -> None:
        self.sessions: dict[str, WizardState] = {}
        self._cleanup_task: Optional[asyncio.Task] = None
        self._idle_seconds: int = 3600
        self._sweep_interval: int = 60

    # Session lifecycle --------------------------------------------------
    def create_session(self) -> WizardState:
        state = WizardState()
        self.sessions[state.id] = state
        return state

    def get_session(self, session_id: str) -> Optional[WizardState]:
        state = self.sessions.get(session_id)
        if state is not None:
            state.last_activity = _now_utc()
        return state

    def delete_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    # Cleanup loop -------------------------------------------------------
    def start(self, *, idle_seconds: int = 3600, sweep_interval: int = 60) -> None:
        self._idle_seconds = max(60, int(idle_seconds))
        self._sweep_interval = max(5, int(sweep_interval))
        if self._cleanup_task and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop(self) -> None:
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
        self._cleanup_task = None

    def sweep(self, now: Optional[datetime] = None) -> list[str]:
        now = now or _now_utc()
        expired = [
            sid
            for sid, state in self.sessions.items()
            if (now - state.last_activity).total_seconds() > self._idle_seconds
        ]
        for sid in expired:
            self.sessions.pop(sid, None)
        if expired:
            logger.info("Swept %d idle sessions", len(expired))
        return expired

    async def _cleanup_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._sweep_interval)
                self.sweep()
        except asyncio.CancelledError:
            return


# Singleton manager used by the API layer
wizard_manager = WizardManager()
