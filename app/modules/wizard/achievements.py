"""One-time badges unlocked while moving through the wizard."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Achievement(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    icon: str


ACHIEVEMENTS: dict[str, Achievement] = {
    a.id: a
    for a in (
        Achievement(
            id="profile-created",
            title="Profile Created",
            description="You created your student profile!",
            icon="🎓",
        ),
        Achievement(
            id="subject-selected",
            title="Subject Explorer",
            description="You selected your first subject!",
            icon="🧭",
        ),
        Achievement(
            id="topic-selected",
            title="Topic Navigator",
            description="You selected your first topic!",
            icon="📝",
        ),
        Achievement(
            id="api-connected",
            title="AI Connected",
            description="You connected to an AI tutor!",
            icon="🤖",
        ),
        Achievement(
            id="first-lesson",
            title="First Lesson Completed",
            description="You completed your first lesson!",
            icon="📘",
        ),
        Achievement(
            id="quiz-completed",
            title="Quiz Completed",
            description="You completed your first quiz!",
            icon="✅",
        ),
        Achievement(
            id="quiz-master",
            title="Quiz Master",
            description="You scored 80% or higher on a quiz!",
            icon="🏆",
        ),
    )
}
