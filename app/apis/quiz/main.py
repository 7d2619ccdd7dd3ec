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
from app.apis.wizard.schemas import StateResponse, snapshot, state_response
from app.core.config import settings
from app.core.logging import get_logger
from app.modules.lessons.generator import generate_quiz
from app.modules.quiz.scoring import score_achievement, score_quiz
from app.modules.wizard.models import Step
from app.modules.wizard.state import WizardError
from app.apis.quiz.schemas import (
    QuizRequest,
    QuizResponse,
    SubmitRequest,
    SubmitResponse,
)

logger = get_logger(__name__)

router = APIRouter()

_PREFIX = f"/{settings.app.version}/sessions"


@router.post(
    f"{_PREFIX}/{{session_id}}/quiz",
    response_model=QuizResponse,
    tags=["quiz"],
)
async def create_quiz(
    req: QuizRequest, state: SessionDep, client: ClientDep
) -> QuizResponse:
    """Generate quiz questions; moves the session from lesson to quiz."""
    require_step(state, Step.LESSON, Step.QUIZ)
    try:
        profile, subject, topic = state.require_content_inputs()
    except WizardError as e:
        raise_for_wizard_error(e)
    started_at = state.step
    result = await generate_quiz(
        state.active_credential or "",
        profile,
        subject,
        topic,
        req.num_questions,
        provider=state.active_provider,
        client=client,
    )
    discard_if_moved(state, topic, started_at)
    raise_for_generation_error(result)
    state.quiz = list(result.content or [])  # type: ignore[arg-type]
    state.last_result = None
    if state.step == Step.LESSON:
        state.start_quiz()
    logger.info(
        "Quiz ready for %s (%d questions)",
        topic.id,
        len(state.quiz),
        extra={"session_id": state.id},
    )
    return QuizResponse(
        questions=state.quiz,
        state=snapshot(state),
        notifications=state.drain_notifications(),
    )


@router.get(
    f"{_PREFIX}/{{session_id}}/quiz",
    response_model=QuizResponse,
    tags=["quiz"],
)
async def get_quiz(state: SessionDep) -> QuizResponse:
    if not state.quiz:
        raise HTTPException(status_code=404, detail="No quiz generated yet")
    return QuizResponse(
        questions=state.quiz,
        state=snapshot(state),
        notifications=state.drain_notifications(),
    )


@router.post(
    f"{_PREFIX}/{{session_id}}/quiz/submit",
    response_model=SubmitResponse,
    tags=["quiz"],
)
async def submit_quiz(req: SubmitRequest, state: SessionDep) -> SubmitResponse:
    require_step(state, Step.QUIZ)
    if not state.quiz:
        raise HTTPException(status_code=400, detail="No quiz to submit")
    result = score_quiz(state.quiz, req.answers)
    state.last_result = result
    logger.info(
        "Quiz scored %d/%d (%s)",
        result.correct_answers,
        result.total_questions,
        result.tier.value,
        extra={"session_id": state.id},
    )
    badge = score_achievement(result.score)
    if badge is not None:
        state.add_achievement(badge)
    return SubmitResponse(
        result=result,
        display_score=round(result.score),
        state=snapshot(state),
        notifications=state.drain_notifications(),
    )


@router.post(
    f"{_PREFIX}/{{session_id}}/quiz/return",
    response_model=StateResponse,
    tags=["quiz"],
)
async def return_to_lesson(state: SessionDep) -> StateResponse:
    try:
        state.return_to_lesson()
    except WizardError as e:
        raise_for_wizard_error(e)
    return state_response(state)
