"""
Question variants used by the grading engine.

Stored questions are flat records where the meaning of `options` and
`correctAnswers` depends on `type`. Grading works on one class per type
instead, so every variant only carries the fields it actually uses:

- BooleanQuestion: correct_answers holds a single bool (or "true"/"false")
- InputQuestion: correct_answers holds every accepted text answer
- CheckboxQuestion: options plus one bool per option in correct_answers
- UnknownQuestion: anything else, never graded as correct
"""
from enum import Enum
from typing import Any, Optional


class QuestionType(str, Enum):
    BOOLEAN = 'BOOLEAN'
    INPUT = 'INPUT'
    CHECKBOX = 'CHECKBOX'

    @classmethod
    def parse(cls, value: Any) -> Optional['QuestionType']:
        """Return the matching type (case-insensitive) or None."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class BaseQuestion:
    """Fields shared by every question variant."""

    question_type: Optional[QuestionType] = None

    def __init__(self, id: str, text: str = '', required: bool = True,
                 correct_answers: Optional[list] = None):
        self.id = id
        self.text = text
        self.required = required
        # None means "no correct answer defined"
        self.correct_answers = correct_answers

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}>"


class BooleanQuestion(BaseQuestion):
    question_type = QuestionType.BOOLEAN


class InputQuestion(BaseQuestion):
    question_type = QuestionType.INPUT


class CheckboxQuestion(BaseQuestion):
    question_type = QuestionType.CHECKBOX

    def __init__(self, id: str, text: str = '', required: bool = True,
                 correct_answers: Optional[list] = None,
                 options: Optional[list] = None):
        super().__init__(id, text, required, correct_answers)
        self.options = list(options) if options else []

    @property
    def option_count(self) -> int:
        return len(self.options)


class UnknownQuestion(BaseQuestion):
    """A question whose stored type is not recognised."""

    def __init__(self, id: str, raw_type: Any = None, **kwargs):
        super().__init__(id, **kwargs)
        self.raw_type = raw_type


_VARIANTS = {
    QuestionType.BOOLEAN: BooleanQuestion,
    QuestionType.INPUT: InputQuestion,
}


def _as_list(value: Any) -> Optional[list]:
    """Lists and tuples become lists, anything else is treated as absent."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


def build_question(data: dict) -> BaseQuestion:
    """
    Build a question variant from its flat dict shape.

    Accepts the API shape (`correctAnswers`) as well as the snake_case
    spelling. Never raises for malformed content: unknown types become
    UnknownQuestion and non-list answer data is treated as absent.
    """
    question_id = data.get('id')
    text = data.get('text') or ''
    required = bool(data.get('required', True))
    correct_answers = _as_list(
        data['correctAnswers'] if 'correctAnswers' in data else data.get('correct_answers')
    )

    question_type = QuestionType.parse(data.get('type'))
    if question_type is QuestionType.CHECKBOX:
        return CheckboxQuestion(
            question_id,
            text=text,
            required=required,
            correct_answers=correct_answers,
            options=_as_list(data.get('options')),
        )
    if question_type in _VARIANTS:
        return _VARIANTS[question_type](
            question_id, text=text, required=required, correct_answers=correct_answers
        )
    return UnknownQuestion(
        question_id,
        raw_type=data.get('type'),
        text=text,
        required=required,
        correct_answers=correct_answers,
    )


class QuizSnapshot:
    """An already loaded quiz: title plus questions in display order."""

    def __init__(self, title: str, questions: list, id: Optional[str] = None):
        self.id = id
        self.title = title
        self.questions = list(questions)

    def __repr__(self) -> str:
        return f"<QuizSnapshot {self.id}: {self.title}>"

    def __len__(self) -> int:
        return len(self.questions)

    def get_question(self, question_id: str) -> Optional[BaseQuestion]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @classmethod
    def from_dict(cls, data: dict) -> 'QuizSnapshot':
        """Build a snapshot from the serialized quiz returned by the API."""
        questions = [build_question(q) for q in (data.get('questions') or [])]
        return cls(title=data.get('title') or '', questions=questions, id=data.get('id'))
