"""Quiz service for creating, reading, updating, deleting and grading quizzes."""
from typing import Optional

from quizcraft import db
from quizcraft.common.activity_logger import QuizActivityLogger
from quizcraft.common.validators import validate_quiz_payload
from quizcraft.grading.engine import GradingReport, grade_quiz
from quizcraft.quiz.models import Question, Quiz, utcnow, dump_json_list


class QuizNotFoundError(Exception):
    """Raised when no quiz exists with the requested ID."""

    def __init__(self, quiz_id: str):
        super().__init__(f"Quiz with ID {quiz_id} not found")
        self.quiz_id = quiz_id


class QuizValidationError(Exception):
    """Raised when a request body does not describe a valid quiz."""

    def __init__(self, errors: list):
        super().__init__('; '.join(errors))
        self.errors = errors


def build_question_rows(questions: list) -> list:
    """Map validated question payloads onto flat Question rows, keeping their order."""
    return [
        Question(
            question_type=data['type'],
            text=data['text'],
            options=dump_json_list(data.get('options')),
            correct_answers=dump_json_list(data.get('correctAnswers')),
            required=data.get('required', True),
            position=position,
        )
        for position, data in enumerate(questions)
    ]


class QuizService:
    """Service class for managing quizzes."""

    @staticmethod
    def create(data: dict) -> Quiz:
        """
        Create a quiz together with its questions.

        Args:
            data: Request body with `title` and `questions`

        Returns:
            Created Quiz object
        """
        sanitized, errors = validate_quiz_payload(data)
        if errors:
            raise QuizValidationError(errors)

        quiz = Quiz(title=sanitized['title'])
        for question in build_question_rows(sanitized['questions']):
            quiz.questions.append(question)

        db.session.add(quiz)
        db.session.commit()

        QuizActivityLogger.log_quiz_created(quiz.id, quiz.title, len(sanitized['questions']))
        return quiz

    @staticmethod
    def find_all() -> list:
        return Quiz.query.order_by(Quiz.created_at.desc()).all()

    @staticmethod
    def find_one(quiz_id: str) -> Quiz:
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            raise QuizNotFoundError(quiz_id)
        return quiz

    @staticmethod
    def update(quiz_id: str, data: dict) -> Quiz:
        """
        Update a quiz.

        When `questions` is present the whole question list is replaced;
        otherwise the existing questions are left untouched.
        """
        quiz = QuizService.find_one(quiz_id)

        sanitized, errors = validate_quiz_payload(data, partial=True)
        if errors:
            raise QuizValidationError(errors)

        if 'title' in sanitized:
            quiz.title = sanitized['title']

        questions_replaced = 'questions' in sanitized
        if questions_replaced:
            for question in quiz.questions.all():
                db.session.delete(question)
            db.session.flush()
            for question in build_question_rows(sanitized['questions']):
                quiz.questions.append(question)
            # Replacing only child rows does not trigger onupdate on the quiz row
            quiz.updated_at = utcnow()

        db.session.commit()

        QuizActivityLogger.log_quiz_updated(quiz.id, questions_replaced)
        return quiz

    @staticmethod
    def remove(quiz_id: str) -> None:
        quiz = QuizService.find_one(quiz_id)
        db.session.delete(quiz)
        db.session.commit()
        QuizActivityLogger.log_quiz_deleted(quiz_id)

    @staticmethod
    def grade(quiz_id: str, answers: Optional[dict], unanswered_incorrect: bool = False) -> GradingReport:
        """
        Grade a set of answers against a stored quiz.

        Args:
            quiz_id: ID of the quiz that was taken
            answers: Map of question ID to submitted answer
            unanswered_incorrect: Count missing answers as incorrect

        Returns:
            GradingReport with score and per-question verdicts
        """
        if answers is None:
            answers = {}
        if not isinstance(answers, dict):
            raise QuizValidationError(["answers must be an object keyed by question ID"])

        quiz = QuizService.find_one(quiz_id)
        report = grade_quiz(quiz.to_snapshot(), answers, unanswered_incorrect=unanswered_incorrect)

        score = report.score
        QuizActivityLogger.log_quiz_graded(quiz.id, score.correct, score.total, score.percentage)
        return report
