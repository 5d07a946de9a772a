"""
Quiz-taking session.

Tracks one user going through a quiz:

    preview --start--> taking --submit--> completed
       ^                  |                   |
       +------exit--------+                   |
       +---------------retake-----------------+

Answers live only for the duration of the session. Grading happens once,
on submit, never when the last question is reached.
"""
from enum import Enum
from typing import Any, Optional

from quizcraft.grading.engine import GradingReport, grade_quiz
from quizcraft.grading.questions import QuizSnapshot


class SessionState(str, Enum):
    PREVIEW = 'preview'
    TAKING = 'taking'
    COMPLETED = 'completed'


class SessionStateError(Exception):
    """Raised when an operation is not allowed in the current state."""

    def __init__(self, action: str, state: SessionState):
        super().__init__(f"Cannot {action} while quiz is {state.value}")
        self.action = action
        self.state = state


class UnknownQuestionError(ValueError):
    """Raised when an answer names a question the quiz does not have."""

    def __init__(self, question_id: str):
        super().__init__(f"Question {question_id} is not part of this quiz")
        self.question_id = question_id


class QuizSession:
    """State for a single pass through a quiz."""

    def __init__(self, quiz: QuizSnapshot, unanswered_incorrect: bool = False):
        self.quiz = quiz
        self.unanswered_incorrect = unanswered_incorrect
        self.state = SessionState.PREVIEW
        self.current_index = 0
        self.answers = {}
        self.report: Optional[GradingReport] = None

    def __repr__(self) -> str:
        return f"<QuizSession {self.quiz.id}: {self.state.value}>"

    def _require(self, state: SessionState, action: str):
        if self.state is not state:
            raise SessionStateError(action, self.state)

    def _reset(self):
        self.current_index = 0
        self.answers = {}
        self.report = None

    @property
    def current_question(self):
        if not self.quiz.questions:
            return None
        return self.quiz.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.quiz.questions) - 1

    def start(self):
        """Begin taking the quiz with a clean slate."""
        self._require(SessionState.PREVIEW, 'start')
        self._reset()
        self.state = SessionState.TAKING

    def answer(self, question_id: str, value: Any):
        """Record (or replace) the answer for a question."""
        self._require(SessionState.TAKING, 'answer')
        if self.quiz.get_question(question_id) is None:
            raise UnknownQuestionError(question_id)
        self.answers[question_id] = value

    def next_question(self) -> int:
        self._require(SessionState.TAKING, 'move to the next question')
        if self.current_index < len(self.quiz.questions) - 1:
            self.current_index += 1
        return self.current_index

    def previous_question(self) -> int:
        self._require(SessionState.TAKING, 'move to the previous question')
        if self.current_index > 0:
            self.current_index -= 1
        return self.current_index

    def exit(self):
        """Abandon the attempt and go back to the preview."""
        self._require(SessionState.TAKING, 'exit')
        self._reset()
        self.state = SessionState.PREVIEW

    def submit(self) -> GradingReport:
        """Grade the collected answers and complete the session."""
        self._require(SessionState.TAKING, 'submit')
        self.report = grade_quiz(self.quiz, self.answers, unanswered_incorrect=self.unanswered_incorrect)
        self.state = SessionState.COMPLETED
        return self.report

    def retake(self):
        """Discard the result and return to the preview."""
        self._require(SessionState.COMPLETED, 'retake')
        self._reset()
        self.state = SessionState.PREVIEW
