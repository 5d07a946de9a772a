"""
Quiz activity logging.

One log line per change to a quiz and per grading run, so the history of
a quiz can be followed from the application log.
"""
from datetime import datetime, timezone

from flask import current_app, has_request_context, request


def _remote_addr() -> str:
    if has_request_context():
        return request.remote_addr or 'unknown'
    return 'cli'


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class QuizActivityLogger:
    """
    Activity logger for quiz changes and grading.
    """

    @staticmethod
    def log_quiz_created(quiz_id: str, title: str, question_count: int):
        """
        Log a newly created quiz.

        Args:
            quiz_id: Quiz ID
            title: Quiz title
            question_count: Number of questions created with it
        """
        current_app.logger.info(
            f"QUIZ: Created - ID: {quiz_id}, Title: {title}, "
            f"Questions: {question_count}, IP: {_remote_addr()}, Time: {_now()}"
        )

    @staticmethod
    def log_quiz_updated(quiz_id: str, questions_replaced: bool):
        """
        Log a quiz update.

        Args:
            quiz_id: Quiz ID
            questions_replaced: Whether the question list was replaced
        """
        current_app.logger.info(
            f"QUIZ: Updated - ID: {quiz_id}, Questions replaced: {questions_replaced}, "
            f"IP: {_remote_addr()}, Time: {_now()}"
        )

    @staticmethod
    def log_quiz_deleted(quiz_id: str):
        current_app.logger.info(
            f"QUIZ: Deleted - ID: {quiz_id}, IP: {_remote_addr()}, Time: {_now()}"
        )

    @staticmethod
    def log_quiz_graded(quiz_id: str, correct: int, total: int, percentage: int):
        """
        Log a grading run.

        Args:
            quiz_id: Quiz ID
            correct: Number of correct answers
            total: Number of questions
            percentage: Rounded score
        """
        current_app.logger.info(
            f"QUIZ: Graded - ID: {quiz_id}, Score: {correct}/{total} ({percentage}%), "
            f"IP: {_remote_addr()}, Time: {_now()}"
        )

    @staticmethod
    def log_invalid_payload(endpoint: str, errors: list):
        """
        Log a rejected request body.

        Args:
            endpoint: Endpoint that rejected the payload
            errors: Validation messages
        """
        current_app.logger.warning(
            f"QUIZ: Invalid payload - Endpoint: {endpoint}, Errors: {'; '.join(errors)}, "
            f"IP: {_remote_addr()}, Time: {_now()}"
        )
