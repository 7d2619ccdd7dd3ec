from __future__ import annotations

from typing import Annotated, AsyncIterator, Optional

import httpx
from fastapi import Depends, HTTPException, status

from app.core.logging import get_logger
from app.modules.catalog.models import Topic
from app.modules.lessons.generator import API_KEY_REQUIRED
from app.modules.lessons.models import GenerationResult
from app.modules.wizard.models import Step
from app.modules.wizard.state import (
    InvalidTransition,
    WizardError,
    WizardState,
    wizard_manager,
)

logger = get_logger(__name__)


async def get_session_state(session_id: str) -> WizardState:
    """Resolve the wizard session named in the path or fail with 404."""
    state = wizard_manager.get_session(session_id)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return state


async def get_http_client() -> AsyncIterator[Optional[httpx.AsyncClient]]:
    """HTTP client handed to providers.

    None lets each provider open a short-lived client with its configured
    timeout; tests override this dependency with a mock transport.
    """
    yield None


def require_step(state: WizardState, *steps: Step) -> None:
    if state.step not in steps:
        allowed = ", ".join(s.value for s in steps)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Session is at step '{state.step.value}', expected {allowed}",
        )


def discard_if_moved(state: WizardState, topic: Topic, *steps: Step) -> None:
    """409 when the learner navigated away while a provider call was pending."""
    if state.topic == topic and state.step in steps:
        return
    logger.info(
        "Discarding result for %s; session moved to '%s'",
        topic.id,
        state.step.value,
        extra={"session_id": state.id},
    )
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Session changed while content was being generated",
    )


def raise_for_wizard_error(e: WizardError) -> None:
    code = (
        status.HTTP_409_CONFLICT
        if isinstance(e, InvalidTransition)
        else status.HTTP_400_BAD_REQUEST
    )
    raise HTTPException(status_code=code, detail=str(e)) from e


def raise_for_generation_error(result: GenerationResult) -> None:
    """Missing key is the caller's fault (400); provider failures are 502."""
    if result.error is None:
        return
    if result.error == API_KEY_REQUIRED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)


SessionDep = Annotated[WizardState, Depends(get_session_state)]
ClientDep = Annotated[Optional[httpx.AsyncClient], Depends(get_http_client)]
