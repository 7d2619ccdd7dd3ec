from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.apis.deps import ClientDep, SessionDep, raise_for_wizard_error
from app.core.config import settings
from app.core.logging import get_logger
from app.modules.catalog import (
    UnknownSubject,
    UnknownTopic,
    custom_topic,
    get_subject,
    get_topic,
)
from app.modules.lessons.generator import validate_api_key
from app.modules.wizard.achievements import ACHIEVEMENTS
from app.modules.wizard.models import LearnerProfile, ProviderName
from app.modules.wizard.state import WizardError, wizard_manager
from .schemas import (
    ConnectRequest,
    CredentialRequest,
    CredentialResponse,
    StateResponse,
    SubjectRequest,
    TopicRequest,
    snapshot,
    state_response,
)

logger = get_logger(__name__)

router = APIRouter()

_PREFIX = f"/{settings.app.version}/sessions"


@router.post(
    _PREFIX,
    response_model=StateResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["wizard"],
)
async def create_session() -> StateResponse:
    state = wizard_manager.create_session()
    logger.info("Session created", extra={"session_id": state.id})
    return state_response(state)


@router.get(f"{_PREFIX}/{{session_id}}", response_model=StateResponse, tags=["wizard"])
async def get_session(state: SessionDep) -> StateResponse:
    return state_response(state)


@router.delete(
    f"{_PREFIX}/{{session_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["wizard"],
)
async def delete_session(state: SessionDep) -> None:
    wizard_manager.delete_session(state.id)


@router.post(
    f"{_PREFIX}/{{session_id}}/profile", response_model=StateResponse, tags=["wizard"]
)
async def set_profile(profile: LearnerProfile, state: SessionDep) -> StateResponse:
    try:
        state.set_profile(profile)
    except WizardError as e:
        raise_for_wizard_error(e)
    state.add_achievement(ACHIEVEMENTS["profile-created"])
    return state_response(state)


@router.post(
    f"{_PREFIX}/{{session_id}}/subject", response_model=StateResponse, tags=["wizard"]
)
async def set_subject(req: SubjectRequest, state: SessionDep) -> StateResponse:
    try:
        subject = get_subject(req.subject_id)
    except UnknownSubject:
        raise HTTPException(status_code=404, detail="Subject not found")
    try:
        state.set_subject(subject)
    except WizardError as e:
        raise_for_wizard_error(e)
    state.add_achievement(ACHIEVEMENTS["subject-selected"])
    return state_response(state)


@router.post(
    f"{_PREFIX}/{{session_id}}/topic", response_model=StateResponse, tags=["wizard"]
)
async def set_topic(req: TopicRequest, state: SessionDep) -> StateResponse:
    if state.subject is None:
        raise HTTPException(status_code=400, detail="Select a subject first")
    try:
        if req.topic_id:
            topic = get_topic(state.subject.id, req.topic_id)
        elif req.name and req.name.strip():
            topic = custom_topic(
                state.subject.id, req.name, req.description, req.difficulty
            )
        else:
            raise HTTPException(
                status_code=422, detail="Provide topic_id or a custom topic name"
            )
    except UnknownTopic:
        raise HTTPException(status_code=404, detail="Topic not found")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    try:
        state.set_topic(topic)
    except WizardError as e:
        raise_for_wizard_error(e)
    state.add_achievement(ACHIEVEMENTS["topic-selected"])
    return state_response(state)


@router.put(
    f"{_PREFIX}/{{session_id}}/credentials/{{provider}}",
    response_model=CredentialResponse,
    tags=["wizard"],
)
async def put_credential(
    provider: ProviderName,
    req: CredentialRequest,
    state: SessionDep,
    client: ClientDep,
) -> CredentialResponse:
    if not req.api_key.strip():
        raise HTTPException(status_code=400, detail="API key is required")
    if req.validate_key:
        valid = await validate_api_key(req.api_key, provider, client=client)
        if not valid:
            raise HTTPException(
                status_code=400,
                detail="Invalid API key. Please check and try again.",
            )
    state.add_credential(provider, req.api_key)
    if state.active_provider is None:
        state.set_active_provider(provider)
    return CredentialResponse(
        state=snapshot(state), notifications=state.drain_notifications(), valid=True
    )


@router.delete(
    f"{_PREFIX}/{{session_id}}/credentials/{{provider}}",
    response_model=StateResponse,
    tags=["wizard"],
)
async def delete_credential(provider: ProviderName, state: SessionDep) -> StateResponse:
    if not state.remove_credential(provider):
        raise HTTPException(status_code=404, detail="No API key stored for provider")
    return state_response(state)


@router.post(
    f"{_PREFIX}/{{session_id}}/connect", response_model=StateResponse, tags=["wizard"]
)
async def connect(req: ConnectRequest, state: SessionDep) -> StateResponse:
    try:
        state.connect(req.provider)
    except WizardError as e:
        raise_for_wizard_error(e)
    state.add_achievement(ACHIEVEMENTS["api-connected"])
    return state_response(state)


@router.post(
    f"{_PREFIX}/{{session_id}}/back", response_model=StateResponse, tags=["wizard"]
)
async def back(state: SessionDep) -> StateResponse:
    try:
        state.back()
    except WizardError as e:
        raise_for_wizard_error(e)
    return state_response(state)


@router.post(
    f"{_PREFIX}/{{session_id}}/change-topic",
    response_model=StateResponse,
    tags=["wizard"],
)
async def change_topic(state: SessionDep) -> StateResponse:
    try:
        state.change_topic()
    except WizardError as e:
        raise_for_wizard_error(e)
    return state_response(state)


@router.post(
    f"{_PREFIX}/{{session_id}}/reset", response_model=StateResponse, tags=["wizard"]
)
async def reset(state: SessionDep) -> StateResponse:
    state.reset()
    return state_response(state)
