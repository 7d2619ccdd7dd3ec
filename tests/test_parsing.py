import json

from app.modules.lessons.models import LessonContent
from app.modules.lessons.parsing import (
    ParseFailed,
    Parsed,
    find_json_span,
    parse_lesson,
    parse_quiz,
)


MINIMAL_LESSON = {
    "title": "Planets",
    "introduction": "Hi",
    "sections": [{"title": "Orbits", "content": "Round and round"}],
    "summary": "Done",
    "relatedTopics": ["Stars"],
}


def test_span_skips_surrounding_prose() -> None:
    text = 'Sure! Here is your lesson:\n```json\n{"a": {"b": 1}}\n```\nEnjoy {not json'
    assert find_json_span(text, "{") == '{"a": {"b": 1}}'


def test_span_ignores_brackets_inside_strings() -> None:
    text = 'x [{"q": "what is ] or [ ?", "e": "say \\"}\\""}] trailing ]'
    span = find_json_span(text, "[")
    assert json.loads(span) == [{"q": "what is ] or [ ?", "e": 'say "}"'}]


def test_span_missing_or_unbalanced() -> None:
    assert find_json_span("no json here", "{") is None
    assert find_json_span('{"a": 1', "{") is None
    assert find_json_span('{"a": "}', "{") is None


def test_parse_lesson_ok() -> None:
    outcome = parse_lesson("Lesson: " + json.dumps(MINIMAL_LESSON))
    assert isinstance(outcome, Parsed)
    assert isinstance(outcome.content, LessonContent)
    assert outcome.content.related_topics == ["Stars"]


def test_parse_lesson_rejects_partial_object() -> None:
    partial = dict(MINIMAL_LESSON)
    del partial["summary"]
    outcome = parse_lesson(json.dumps(partial))
    assert isinstance(outcome, ParseFailed)
    assert "shape" in outcome.reason


def test_parse_lesson_rejects_bad_json_and_empty_sections() -> None:
    assert isinstance(parse_lesson("{title: 'x'}"), ParseFailed)
    empty = dict(MINIMAL_LESSON, sections=[])
    assert isinstance(parse_lesson(json.dumps(empty)), ParseFailed)


def test_parse_quiz_ok_and_coerces_numeric_ids() -> None:
    payload = [
        {
            "id": 1,
            "type": "multiple-choice",
            "question": "2+2?",
            "options": ["3", "4", "5", "6"],
            "correctAnswer": 1,
            "explanation": "Four.",
        },
        {
            "id": "2",
            "type": "short-answer",
            "question": "Name a planet",
            "correctAnswer": "Mars",
            "explanation": "Any planet works.",
        },
    ]
    outcome = parse_quiz("Here you go " + json.dumps(payload))
    assert isinstance(outcome, Parsed)
    assert [q.id for q in outcome.content] == ["1", "2"]
    assert outcome.content[0].correct_answer == 1
    assert outcome.content[1].correct_answer == "Mars"


def test_parse_quiz_rejects_bad_shapes() -> None:
    out_of_range = [
        {
            "id": "1",
            "type": "multiple-choice",
            "question": "?",
            "options": ["a", "b"],
            "correctAnswer": 5,
            "explanation": "",
        }
    ]
    string_index = [dict(out_of_range[0], correctAnswer="1")]
    assert isinstance(parse_quiz(json.dumps(out_of_range)), ParseFailed)
    assert isinstance(parse_quiz(json.dumps(string_index)), ParseFailed)
    assert isinstance(parse_quiz("[]"), ParseFailed)
    assert isinstance(parse_quiz('{"questions": "none"}'), ParseFailed)
