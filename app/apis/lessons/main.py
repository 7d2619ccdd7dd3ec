from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.apis.deps import (
    ClientDep,
    SessionDep,
    discard_if_moved,
    raise_for_generation_error,
    raise_for_wizard_error,
    require_step,
)
from app.apis.wizard.schemas import snapshot
from app.core.config import settings
from app.core.logging import get_logger
from app.modules.lessons.generator import generate_lesson
from app.modules.wizard.achievements import ACHIEVEMENTS
from app.modules.wizard.models import Step
from app.modules.wizard.state import WizardError
from .schemas import LessonResponse

logger = get_logger(__name__)

router = APIRouter()

_PREFIX = f"/{settings.app.version}/sessions"


@router.post(
    f"{_PREFIX}/{{session_id}}/lesson", response_model=LessonResponse, tags=["lessons"]
)
async def create_lesson(state: SessionDep, client: ClientDep) -> LessonResponse:
    """Generate the lesson for the selected topic; calling again replaces it."""
    require_step(state, Step.LESSON)
    try:
        profile, subject, topic = state.require_content_inputs()
    except WizardError as e:
        raise_for_wizard_error(e)
    result = await generate_lesson(
        state.active_credential or "",
        profile,
        subject,
        topic,
        provider=state.active_provider,
        client=client,
    )
    discard_if_moved(state, topic, Step.LESSON)
    raise_for_generation_error(result)
    state.lesson = result.content  # type: ignore[assignment]
    state.add_achievement(ACHIEVEMENTS["first-lesson"])
    logger.info("Lesson ready for %s", topic.id, extra={"session_id": state.id})
    return LessonResponse(
        lesson=state.lesson,
        state=snapshot(state),
        notifications=state.drain_notifications(),
    )


@router.get(
    f"{_PREFIX}/{{session_id}}/lesson", response_model=LessonResponse, tags=["lessons"]
)
async def get_lesson(state: SessionDep) -> LessonResponse:
    if state.lesson is None:
        raise HTTPException(status_code=404, detail="No lesson generated yet")
    return LessonResponse(
        lesson=state.lesson,
        state=snapshot(state),
        notifications=state.drain_notifications(),
    )
