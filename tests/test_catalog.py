import pytest

from app.modules.catalog import (
    SUBJECTS,
    Difficulty,
    UnknownSubject,
    UnknownTopic,
    custom_topic,
    get_subject,
    get_topic,
    list_topics,
    slugify,
)


def test_every_subject_has_topics() -> None:
    assert [s.id for s in SUBJECTS] == [
        "math",
        "science",
        "english",
        "history",
        "art",
        "music",
        "coding",
    ]
    for s in SUBJECTS:
        topics = list_topics(s.id)
        assert len(topics) == 2
        assert all(t.subject_id == s.id for t in topics)


def test_lookup_errors() -> None:
    with pytest.raises(UnknownSubject):
        get_subject("alchemy")
    with pytest.raises(UnknownSubject):
        list_topics("alchemy")
    with pytest.raises(UnknownTopic):
        get_topic("math", "colors")


def test_custom_topic_uses_slug_id() -> None:
    t = custom_topic("science", "  Volcanoes & Lava!  ")
    assert t.id == "volcanoes-lava"
    assert t.name == "Volcanoes & Lava!"
    assert t.custom is True
    assert t.difficulty == Difficulty.BEGINNER
    assert t.description == "Custom topic: Volcanoes & Lava!"


def test_custom_topic_rejects_symbol_only_name() -> None:
    assert slugify("?!") == ""
    with pytest.raises(ValueError):
        custom_topic("math", "?!")
    with pytest.raises(UnknownSubject):
        custom_topic("alchemy", "Gold")
