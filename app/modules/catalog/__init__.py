"""Catalog module exports."""

from .models import Difficulty, Subject, Topic
from .data import (
    SUBJECTS,
    TOPICS,
    UnknownSubject,
    UnknownTopic,
    custom_topic,
    get_subject,
    get_topic,
    list_topics,
    slugify,
)

__all__ = [
    "Difficulty",
    "Subject",
    "Topic",
    "SUBJECTS",
    "TOPICS",
    "UnknownSubject",
    "UnknownTopic",
    "custom_topic",
    "get_subject",
    "get_topic",
    "list_topics",
    "slugify",
]
