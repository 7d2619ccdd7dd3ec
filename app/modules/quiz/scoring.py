"""Quiz scoring: pure functions from questions and answers to a result."""

from __future__ import annotations

from typing import Optional, Sequence, Union

from app.modules.quiz.models import FeedbackTier, QuizQuestion, QuizResult
from app.modules.wizard.achievements import ACHIEVEMENTS, Achievement

Answer = Union[int, str, None]

FEEDBACK: dict[FeedbackTier, str] = {
    FeedbackTier.OUTSTANDING: (
        "Outstanding! You have an excellent understanding of this topic."
    ),
    FeedbackTier.GREAT: "Great job! You have a good grasp of the material.",
    FeedbackTier.GOOD_EFFORT: (
        "Good effort! Keep practicing to strengthen your understanding."
    ),
    FeedbackTier.KEEP_LEARNING: (
        "Keep learning! Review the lesson and try again to improve your score."
    ),
}


def feedback_tier(score: float) -> FeedbackTier:
    if score >= 90:
        return FeedbackTier.OUTSTANDING
    if score >= 75:
        return FeedbackTier.GREAT
    if score >= 60:
        return FeedbackTier.GOOD_EFFORT
    return FeedbackTier.KEEP_LEARNING


def is_correct(question: QuizQuestion, answer: Answer) -> bool:
    """Strict equality: same type and value (``1 != "1"``, ``True != 1``)."""
    expected = question.correct_answer
    if answer is None or type(answer) is not type(expected):
        return False
    return answer == expected


def score_quiz(
    questions: Sequence[QuizQuestion], answers: Sequence[Answer]
) -> QuizResult:
    """Score submitted answers; missing trailing answers count as incorrect."""
    marks: list[bool] = []
    for i, q in enumerate(questions):
        ans = answers[i] if i < len(answers) else None
        marks.append(is_correct(q, ans))

    total = len(questions)
    correct = sum(1 for m in marks if m)
    score = (correct / total) * 100 if total else 0.0
    tier = feedback_tier(score)
    return QuizResult(
        total_questions=total,
        correct_answers=correct,
        incorrect_answers=total - correct,
        score=score,
        tier=tier,
        feedback=FEEDBACK[tier],
        per_question=marks,
    )


def score_achievement(score: float) -> Optional[Achievement]:
    """Badge earned by a quiz score, if any."""
    if score >= 80:
        return ACHIEVEMENTS["quiz-master"]
    if score >= 50:
        return ACHIEVEMENTS["quiz-completed"]
    return None
