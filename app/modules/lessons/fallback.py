"""Deterministic lesson and quiz content built only from the learner's choices.

Used when the model's text cannot be parsed so the learner always receives
something usable for the chosen topic.
"""

from __future__ import annotations

from app.modules.catalog.models import Subject, Topic
from app.modules.lessons.models import (
    ActivityType,
    LessonActivity,
    LessonContent,
    LessonSection,
    Worksheet,
    WorksheetProblem,
)
from app.modules.quiz.models import QuestionType, QuizQuestion
from app.modules.wizard.models import LearnerProfile


def _grade_label(grade: int) -> str:
    return "Kindergarten" if grade <= 0 else f"Grade {grade}"


def fallback_lesson(
    profile: LearnerProfile, subject: Subject, topic: Topic
) -> LessonContent:
    t = topic.name
    first = profile.interests[0]
    interests = ", ".join(profile.interests)
    return LessonContent(
        title=f"Understanding {t}",
        introduction=(
            f"Welcome {profile.name}! Today we're going to learn about {t} in "
            f"{subject.name}. Since you enjoy {first}, we'll include some "
            "connections to that as we explore this fascinating topic."
        ),
        sections=[
            LessonSection(
                title="The Basics",
                content=(
                    f"Let's start with the fundamental concepts of {t}. This is "
                    f"perfect for your grade {profile.grade} level and will build "
                    "on what you already know."
                ),
                example=(
                    f"For example, think about {first}: you actually use ideas "
                    f"from {t} without even realizing it!"
                ),
                activity=LessonActivity(
                    type=ActivityType.QUESTION,
                    description=(
                        f"Can you identify how {t} might appear in your everyday life?"
                    ),
                ),
            ),
            LessonSection(
                title="Key Principles",
                content=(
                    "Now that we understand the basics, let's explore some key "
                    f"principles of {t} that are right for a {profile.age} year old."
                ),
                example=(
                    f"Imagine you're explaining {t} to a friend who has never "
                    "heard of it before. What would you say?"
                ),
                activity=LessonActivity(
                    type=ActivityType.EXERCISE,
                    description=f"Try drawing a diagram that shows how {t} works.",
                    hints=[
                        "Start with the most important idea in the middle.",
                        "Use arrows to show how the parts connect.",
                    ],
                ),
            ),
            LessonSection(
                title="Real-World Applications",
                content=(
                    f"{t} isn't just a theoretical concept: it has many practical "
                    "applications in the world around us!"
                ),
                example=(
                    f"People who love {first} use {t} to solve real problems "
                    "and create new things."
                ),
                activity=LessonActivity(
                    type=ActivityType.EXPERIMENT,
                    description=(
                        f"Let's do a simple experiment to demonstrate {t} in action!"
                    ),
                    solution=(
                        f"The result should show that {t} works exactly as we've "
                        "discussed."
                    ),
                ),
            ),
            LessonSection(
                title=f"{t} and You",
                content=(
                    f"Every interest you have, like {interests}, can be a doorway "
                    f"into {subject.name}. Keep asking questions!"
                ),
            ),
        ],
        summary=(
            f"Great job exploring {t} today! We've covered the basics, key "
            f"principles, and real-world applications. Remember that {t} "
            f"connects to many of your interests like {interests}."
        ),
        related_topics=["Advanced concepts", "Historical development", "Future trends"],
        worksheets=[
            Worksheet(
                title=f"{t} Practice",
                instructions="Answer each question in your own words.",
                problems=[
                    WorksheetProblem(
                        question=f"What is {t}? Explain it in one sentence.",
                        difficulty="easy",
                    ),
                    WorksheetProblem(
                        question=f"Give one example of {t} connected to {first}.",
                        difficulty="medium",
                    ),
                ],
            )
        ],
    )


def fallback_quiz(
    profile: LearnerProfile,
    subject: Subject,
    topic: Topic,
    num_questions: int = 5,
) -> list[QuizQuestion]:
    """Up to five fixed questions for the topic, trimmed to ``num_questions``."""
    t = topic.name
    first = profile.interests[0]
    g = profile.grade
    questions = [
        QuizQuestion(
            id="1",
            type=QuestionType.MULTIPLE_CHOICE,
            question=f"What is one of the key principles of {t}?",
            options=[
                "It only exists in theory",
                "It has many practical applications",
                "It was discovered recently",
                "It is only used by adults",
            ],
            correct_answer=1,
            explanation=(
                f"{t} has many practical applications in the real world, as we "
                "learned in the lesson."
            ),
        ),
        QuizQuestion(
            id="2",
            type=QuestionType.TRUE_FALSE,
            question=f"True or False: {t} is connected to {first}.",
            options=["True", "False"],
            correct_answer="True",
            explanation=f"Yes, {t} connects to {first} as we saw in our examples.",
        ),
        QuizQuestion(
            id="3",
            type=QuestionType.SHORT_ANSWER,
            question=f"Name one way you might use {t} in your everyday life.",
            correct_answer="Various answers possible",
            explanation=(
                "There are many correct answers here! You might use "
                f"{t} when you're {' or '.join(profile.interests)}."
            ),
        ),
        QuizQuestion(
            id="4",
            type=QuestionType.MULTIPLE_CHOICE,
            question=(
                f"Which of these is NOT a section we covered in our lesson about {t}?"
            ),
            options=[
                "The Basics",
                "Key Principles",
                "Advanced Mathematics",
                "Real-World Applications",
            ],
            correct_answer=2,
            explanation=(
                "We covered The Basics, Key Principles, and Real-World "
                "Applications, but not Advanced Mathematics."
            ),
        ),
        QuizQuestion(
            id="5",
            type=QuestionType.MULTIPLE_CHOICE,
            question="What grade level is this lesson designed for?",
            options=[_grade_label(g + d) for d in (-1, 0, 1, 2)],
            correct_answer=1,
            explanation=(
                "This lesson was specially designed for your grade level, "
                f"Grade {g}."
            ),
        ),
    ]
    return questions[: max(1, int(num_questions))]
