"""Placeholder artwork for lesson images the model left without a URL."""

from __future__ import annotations

from app.modules.lessons.models import LessonContent

PLACEHOLDER_IMAGES: dict[str, str] = {
    "math": "https://images.unsplash.com/photo-1635070041078-e363dbe005cb?w=800",
    "science": "https://images.unsplash.com/photo-1532094349884-543bc11b234d?w=800",
    "english": "https://images.unsplash.com/photo-1455390582262-044cdead277a?w=800",
    "history": "https://images.unsplash.com/photo-1461360370896-922624d12aa1?w=800",
    "default": "https://images.unsplash.com/photo-1503676260728-1c00da094a0b?w=800",
}


def placeholder_image(subject_id: str) -> str:
    return PLACEHOLDER_IMAGES.get(subject_id, PLACEHOLDER_IMAGES["default"])


def fill_image_urls(lesson: LessonContent, subject_id: str) -> LessonContent:
    if not lesson.images:
        return lesson
    url = placeholder_image(subject_id)
    images = [
        img if (img.url or "").strip() else img.model_copy(update={"url": url})
        for img in lesson.images
    ]
    return lesson.model_copy(update={"images": images})
