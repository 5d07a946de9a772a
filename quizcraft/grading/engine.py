"""
Grading engine.

Given a quiz snapshot and the answers collected during one session, decide
which questions were answered correctly and aggregate a score:

- BOOLEAN: normalized answer equals the normalized first correct answer
- INPUT: normalized answer is one of the normalized accepted answers
- CHECKBOX: same length and every flag identical, position by position
- anything else is never correct

Everything here is a pure function of its arguments. No error is raised
for malformed questions or answers.
"""
from typing import Any, Optional

from quizcraft.grading.normalizer import (
    answer_text,
    normalize_boolean_answer,
    normalize_checkbox_answer,
    normalize_input_answer,
)
from quizcraft.grading.questions import (
    BaseQuestion,
    BooleanQuestion,
    CheckboxQuestion,
    InputQuestion,
    QuizSnapshot,
)


class ScoreResult:
    """Aggregate score for one quiz-taking session."""

    def __init__(self, correct: int, total: int):
        self.correct = correct
        self.total = total
        self.percentage = calculate_percentage(correct, total)

    def __repr__(self) -> str:
        return f"<ScoreResult {self.correct}/{self.total} ({self.percentage}%)>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScoreResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            'correct': self.correct,
            'total': self.total,
            'percentage': self.percentage,
        }


class QuestionVerdict:
    """Per-question outcome, used for the review listing."""

    def __init__(self, question: BaseQuestion, user_answer: Any, answered: bool, correct: bool):
        self.question = question
        self.user_answer = user_answer
        self.answered = answered
        self.correct = correct

    def __repr__(self) -> str:
        return f"<QuestionVerdict {self.question.id}: {'correct' if self.correct else 'incorrect'}>"

    def to_dict(self) -> dict:
        question_type = self.question.question_type
        return {
            'questionId': self.question.id,
            'type': question_type.value if question_type else None,
            'text': self.question.text,
            'answered': self.answered,
            'userAnswer': self.user_answer,
            'correct': self.correct,
            'expectedAnswer': describe_correct_answer(self.question),
        }


class GradingReport:
    """Score plus verdicts in quiz question order."""

    def __init__(self, score: ScoreResult, verdicts: list):
        self.score = score
        self.verdicts = verdicts

    def __repr__(self) -> str:
        return f"<GradingReport {self.score!r}>"

    @property
    def results(self) -> list:
        """Plain correctness flags, one per question."""
        return [verdict.correct for verdict in self.verdicts]

    def to_dict(self) -> dict:
        return {
            'score': self.score.to_dict(),
            'feedback': score_feedback(self.score.percentage),
            'results': [verdict.to_dict() for verdict in self.verdicts],
        }


def calculate_percentage(correct: int, total: int) -> int:
    """round(100 * correct / total) with halves rounded up, 0 for an empty quiz."""
    if total <= 0:
        return 0
    # Integer arithmetic avoids float artifacts at exact halves (e.g. 1/8)
    return (200 * correct + total) // (2 * total)


def _first_correct_answer(question: BaseQuestion) -> Any:
    if question.correct_answers:
        return question.correct_answers[0]
    return None


def _strict_equals(left: Any, right: Any) -> bool:
    # 1 == True and "true" != True must both be treated as mismatches
    return type(left) is type(right) and left == right


def grade_question(question: BaseQuestion, user_answer: Any = None) -> bool:
    """
    Check a single answer against the question's correct answers.

    Args:
        question: Question variant to grade
        user_answer: Submitted answer, None when nothing was submitted

    Returns:
        True if correct, False otherwise
    """
    if isinstance(question, BooleanQuestion):
        expected = normalize_boolean_answer(_first_correct_answer(question))
        return normalize_boolean_answer(user_answer) == expected

    if isinstance(question, InputQuestion):
        accepted = {normalize_input_answer(answer) for answer in (question.correct_answers or [])}
        return normalize_input_answer(user_answer) in accepted

    if isinstance(question, CheckboxQuestion):
        selected = normalize_checkbox_answer(user_answer, question.option_count)
        expected = question.correct_answers or []
        if len(selected) != len(expected):
            return False
        return all(_strict_equals(flag, correct) for flag, correct in zip(selected, expected))

    return False


def grade_quiz(quiz: QuizSnapshot, user_answers: Optional[dict] = None,
               unanswered_incorrect: bool = False) -> GradingReport:
    """
    Grade every question of a quiz.

    Args:
        quiz: Snapshot of the quiz that was taken
        user_answers: Map of question id to submitted answer (may be partial)
        unanswered_incorrect: Treat questions without an entry as incorrect
            instead of grading the type's empty value

    Returns:
        GradingReport with the score and one verdict per question
    """
    user_answers = user_answers or {}
    verdicts = []

    for question in quiz.questions:
        answered = question.id in user_answers
        user_answer = user_answers.get(question.id)

        if not answered and unanswered_incorrect:
            correct = False
        else:
            correct = grade_question(question, user_answer)

        verdicts.append(QuestionVerdict(question, user_answer, answered, correct))

    correct_count = sum(1 for verdict in verdicts if verdict.correct)
    return GradingReport(ScoreResult(correct_count, len(quiz.questions)), verdicts)


def describe_correct_answer(question: BaseQuestion) -> str:
    """Get the correct answer as a string for display."""
    if isinstance(question, BooleanQuestion):
        return 'True' if normalize_boolean_answer(_first_correct_answer(question)) else 'False'

    if isinstance(question, InputQuestion):
        return ', '.join(answer_text(answer) for answer in (question.correct_answers or []))

    if isinstance(question, CheckboxQuestion):
        flags = question.correct_answers or []
        return ', '.join(
            answer_text(option) for option, flag in zip(question.options, flags) if flag is True
        )

    return ''


def score_feedback(percentage: int) -> dict:
    """Message and colour band shown with a final score."""
    if percentage >= 90:
        message = 'Excellent work!'
    elif percentage >= 80:
        message = 'Great job!'
    elif percentage >= 70:
        message = 'Good effort!'
    elif percentage >= 60:
        message = 'Not bad, keep studying!'
    else:
        message = 'Keep practicing!'

    if percentage >= 80:
        band = 'high'
    elif percentage >= 60:
        band = 'medium'
    else:
        band = 'low'

    return {'message': message, 'band': band}
