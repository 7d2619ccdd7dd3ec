"""Static subject/topic catalog and custom topic construction."""

from __future__ import annotations

import re
from typing import Optional

from app.modules.catalog.models import Difficulty, Subject, Topic


class UnknownSubject(LookupError):
    pass


class UnknownTopic(LookupError):
    pass


SUBJECTS: list[Subject] = [
    Subject(
        id="math",
        name="Mathematics",
        description="Numbers, patterns, and problem-solving",
        icon="Calculator",
        color="pink",
    ),
    Subject(
        id="science",
        name="Science",
        description="Discover how the world works",
        icon="Microscope",
        color="blue",
    ),
    Subject(
        id="english",
        name="English",
        description="Reading, writing, and communication",
        icon="BookOpen",
        color="purple",
    ),
    Subject(
        id="history",
        name="History",
        description="Explore the past and its impact",
        icon="Globe",
        color="amber",
    ),
    Subject(
        id="art",
        name="Art",
        description="Express yourself through creativity",
        icon="Palette",
        color="green",
    ),
    Subject(
        id="music",
        name="Music",
        description="Explore rhythm, melody, and sound",
        icon="Music",
        color="teal",
    ),
    Subject(
        id="coding",
        name="Coding",
        description="Learn to program and build apps",
        icon="Code",
        color="indigo",
    ),
]


def _topic(
    subject_id: str, id: str, name: str, description: str, difficulty: Difficulty
) -> Topic:
    return Topic(
        id=id,
        subject_id=subject_id,
        name=name,
        description=description,
        difficulty=difficulty,
    )


_B = Difficulty.BEGINNER
_I = Difficulty.INTERMEDIATE

TOPICS: dict[str, list[Topic]] = {
    "math": [
        _topic("math", "fractions", "Fractions", "Understanding parts of a whole", _B),
        _topic(
            "math",
            "algebra",
            "Basic Algebra",
            "Introduction to variables and equations",
            _I,
        ),
    ],
    "science": [
        _topic(
            "science",
            "plants",
            "Plant Life Cycles",
            "How plants grow, reproduce, and survive",
            _B,
        ),
        _topic(
            "science",
            "solarsystem",
            "The Solar System",
            "Exploring the planets and our sun",
            _I,
        ),
    ],
    "english": [
        _topic(
            "english",
            "grammar",
            "Grammar Fundamentals",
            "Building blocks of effective writing",
            _B,
        ),
        _topic(
            "english",
            "poetry",
            "Introduction to Poetry",
            "Understanding rhythm, rhyme, and meaning",
            _I,
        ),
    ],
    "history": [
        _topic(
            "history",
            "ancient",
            "Ancient Civilizations",
            "Exploring early human societies",
            _B,
        ),
        _topic(
            "history",
            "revolutions",
            "Industrial Revolution",
            "How technology changed the world",
            _I,
        ),
    ],
    "art": [
        _topic(
            "art", "colors", "Color Theory", "Understanding how colors work together", _B
        ),
        _topic(
            "art", "drawing", "Basic Drawing Techniques", "Learn to sketch and shade", _I
        ),
    ],
    "music": [
        _topic("music", "rhythm", "Rhythm Basics", "Understanding beats and timing", _B),
        _topic(
            "music",
            "instruments",
            "Musical Instruments",
            "Exploring different types of instruments",
            _I,
        ),
    ],
    "coding": [
        _topic(
            "coding", "algorithms", "Intro to Algorithms", "Step-by-step problem solving", _B
        ),
        _topic(
            "coding", "webdev", "Web Development Basics", "Creating simple websites", _I
        ),
    ],
}


def get_subject(subject_id: str) -> Subject:
    for s in SUBJECTS:
        if s.id == subject_id:
            return s
    raise UnknownSubject(subject_id)


def list_topics(subject_id: str) -> list[Topic]:
    get_subject(subject_id)
    return list(TOPICS.get(subject_id, []))


def get_topic(subject_id: str, topic_id: str) -> Topic:
    for t in list_topics(subject_id):
        if t.id == topic_id:
            return t
    raise UnknownTopic(f"{subject_id}/{topic_id}")


_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_RE.sub("-", name.strip().lower()).strip("-")


def custom_topic(
    subject_id: str,
    name: str,
    description: Optional[str] = None,
    difficulty: Difficulty = Difficulty.BEGINNER,
) -> Topic:
    """Build a learner-authored topic; the id is the slug of its name."""
    get_subject(subject_id)
    clean = name.strip()
    slug = slugify(clean)
    if not slug:
        raise ValueError("Topic name must contain letters or digits")
    return Topic(
        id=slug,
        subject_id=subject_id,
        name=clean,
        description=(description or "").strip() or f"Custom topic: {clean}",
        difficulty=difficulty,
        custom=True,
    )
