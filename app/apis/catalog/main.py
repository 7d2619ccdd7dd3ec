from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.core.config import settings
from app.modules.catalog import SUBJECTS, Subject, Topic, UnknownSubject, list_topics
from app.modules.wizard.achievements import ACHIEVEMENTS, Achievement


router = APIRouter()


@router.get(
    f"/{settings.app.version}/subjects",
    response_model=list[Subject],
    tags=["catalog"],
)
async def get_subjects() -> list[Subject]:
    return list(SUBJECTS)


@router.get(
    f"/{settings.app.version}/subjects/{{subject_id}}/topics",
    response_model=list[Topic],
    tags=["catalog"],
)
async def get_topics(subject_id: str) -> list[Topic]:
    try:
        return list_topics(subject_id)
    except UnknownSubject:
        raise HTTPException(status_code=404, detail="Subject not found")


@router.get(
    f"/{settings.app.version}/achievements",
    response_model=list[Achievement],
    tags=["catalog"],
)
async def get_achievements() -> list[Achievement]:
    return list(ACHIEVEMENTS.values())
