"""Prompt text for lesson and quiz generation."""

from __future__ import annotations

from app.modules.catalog.models import Subject, Topic
from app.modules.wizard.models import LearnerProfile

SYSTEM_PROMPT = (
    "You are a friendly, expert teacher who writes personalized lessons and "
    "quizzes for school students. Always answer with valid JSON only: no "
    "markdown, no code fences, no commentary before or after the JSON."
)

LESSON_SCHEMA = """{
  "title": string,
  "introduction": string,
  "sections": [
    {
      "title": string,
      "content": string,
      "example": string (optional),
      "activity": {
        "type": "question" | "exercise" | "experiment",
        "description": string,
        "solution": string (optional),
        "hints": [string] (optional)
      } (optional)
    }
  ],
  "summary": string,
  "relatedTopics": [string],
  "worksheets": [
    {
      "title": string,
      "instructions": string (optional),
      "problems": [
        {"question": string, "answer": string (optional), "difficulty": string (optional)}
      ]
    }
  ] (optional),
  "images": [{"description": string, "url": string (optional), "alt": string}] (optional),
  "interactiveExercises": [
    {"title": string, "description": string, "instructions": string (optional)}
  ] (optional),
  "videos": [{"title": string, "url": string (optional), "description": string (optional)}] (optional)
}"""

QUIZ_SCHEMA = """[
  {
    "id": string,
    "type": "multiple-choice" | "true-false" | "short-answer",
    "question": string,
    "options": [string] (multiple-choice and true-false only),
    "correctAnswer": number (0-based option index for multiple-choice) | string (otherwise),
    "explanation": string
  }
]"""


def _learner_block(profile: LearnerProfile, subject: Subject, topic: Topic) -> str:
    lines = [
        f"Student name: {profile.name}",
        f"Age: {profile.age}",
        f"Grade: {profile.grade}",
        f"Interests: {', '.join(profile.interests)}",
        f"Subject: {subject.name}",
        f"Topic: {topic.name}",
    ]
    if topic.description:
        lines.append(f"Topic description: {topic.description}")
    lines.append(f"Difficulty: {topic.difficulty.value}")
    return "\n".join(lines)


def build_lesson_prompt(
    profile: LearnerProfile, subject: Subject, topic: Topic
) -> str:
    return (
        f"Create an educational lesson for a {profile.age} year old student in "
        f"grade {profile.grade} about {topic.name} in {subject.name}. "
        f"The student is interested in {', '.join(profile.interests)}; connect "
        "the explanations and examples to those interests.\n\n"
        f"{_learner_block(profile, subject, topic)}\n\n"
        "Requirements:\n"
        "- Include a title, an introduction, 4-6 sections, a summary and related topics.\n"
        "- Each section has a title, content and, where useful, a worked example "
        "and an activity (with a solution and hints when it is an exercise).\n"
        "- Add at least one worksheet of practice problems with answers.\n"
        "- Suggest images by description and alt text; leave url empty unless "
        "you know a stable public URL.\n"
        "- Keep language appropriate for the student's age and grade.\n\n"
        "Respond with a single JSON object matching this schema:\n"
        f"{LESSON_SCHEMA}"
    )


def build_quiz_prompt(
    profile: LearnerProfile, subject: Subject, topic: Topic, num_questions: int = 5
) -> str:
    n = int(num_questions)
    return (
        f"Create a quiz of exactly {n} questions for a {profile.age} year old "
        f"student in grade {profile.grade} about {topic.name} in {subject.name}. "
        f"Where natural, relate questions to the student's interests: "
        f"{', '.join(profile.interests)}.\n\n"
        f"{_learner_block(profile, subject, topic)}\n\n"
        "Requirements:\n"
        "- Mix multiple-choice, true-false and short-answer questions.\n"
        "- Multiple-choice questions have exactly 4 options; correctAnswer is "
        "the 0-based index of the right option.\n"
        '- True-false questions use the options ["True", "False"] and '
        "correctAnswer is the matching string.\n"
        "- Every question has a short, encouraging explanation.\n\n"
        "Respond with a single JSON array matching this schema:\n"
        f"{QUIZ_SCHEMA}"
    )
