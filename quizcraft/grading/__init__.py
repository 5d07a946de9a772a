"""
Quiz grading.

Normalizes submitted answers, grades them against the stored correct
answers per question type, and aggregates a score.
"""
from quizcraft.grading.engine import (
    GradingReport,
    QuestionVerdict,
    ScoreResult,
    grade_question,
    grade_quiz,
    score_feedback,
)
from quizcraft.grading.questions import QuestionType, QuizSnapshot, build_question
from quizcraft.grading.session import (
    QuizSession,
    SessionState,
    SessionStateError,
    UnknownQuestionError,
)

__all__ = [
    'GradingReport',
    'QuestionVerdict',
    'ScoreResult',
    'grade_question',
    'grade_quiz',
    'score_feedback',
    'QuestionType',
    'QuizSnapshot',
    'build_question',
    'QuizSession',
    'SessionState',
    'SessionStateError',
    'UnknownQuestionError',
]
