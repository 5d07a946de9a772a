"""
Database models for quiz functionality.

Questions are stored flat: the per-type `options` and `correct_answers`
lists are kept as JSON text and parsed back when read.
- BOOLEAN: correct_answers like [true]
- INPUT: correct_answers like ["var", "let", "const"]
- CHECKBOX: options like ["String", "Number"], correct_answers like [true, false]
"""
import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from quizcraft import db
from quizcraft.grading.questions import QuizSnapshot, build_question


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_id() -> str:
    return str(uuid.uuid4())


def dump_json_list(value: Optional[list]) -> Optional[str]:
    """Serialize a list column; None stays NULL."""
    if value is None:
        return None
    return json.dumps(value)


def load_json_list(raw: Optional[str]) -> Optional[list]:
    """Parse a list column. Unreadable or non-list content reads as None."""
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except (ValueError, TypeError):
        return None
    return value if isinstance(value, list) else None


class Quiz(db.Model):
    """
    Model for quizzes.

    A quiz owns its questions: deleting the quiz deletes them.
    """
    __tablename__ = "quizzes"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    title = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    questions = db.relationship("Question", backref="quiz", lazy="dynamic", cascade="all, delete-orphan", order_by="Question.position")

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_question_count(self) -> int:
        """Get total number of questions."""
        return self.questions.count()

    def to_summary(self) -> dict:
        """Short form used by the quiz list."""
        return {
            'id': self.id,
            'title': self.title,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
            'questionCount': self.get_question_count(),
        }

    def to_dict(self) -> dict:
        data = self.to_summary()
        data['questions'] = [question.to_dict() for question in self.questions.all()]
        return data

    def to_snapshot(self) -> QuizSnapshot:
        """Detached copy of the quiz for grading."""
        return QuizSnapshot(
            title=self.title,
            questions=[question.to_grading() for question in self.questions.all()],
            id=self.id,
        )


class Question(db.Model):
    """
    Model for quiz questions.

    Supports three question types:
    - BOOLEAN: true/false
    - INPUT: free text, any accepted answer matches
    - CHECKBOX: multiple options, several may be correct
    """
    __tablename__ = "quiz_questions"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    quiz_id = db.Column(db.String(36), db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_type = db.Column(db.String(20), nullable=False, index=True)  # BOOLEAN, INPUT, CHECKBOX
    text = db.Column(db.Text, nullable=False)
    options = db.Column(db.Text, nullable=True)  # JSON list of option texts
    correct_answers = db.Column(db.Text, nullable=True)  # JSON list, encoding depends on question_type
    required = db.Column(db.Boolean, default=True, nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index('ix_quiz_questions_quiz_position', 'quiz_id', 'position'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.question_type}>"

    def get_options(self) -> Optional[list]:
        return load_json_list(self.options)

    def get_correct_answers(self) -> Optional[list]:
        return load_json_list(self.correct_answers)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'type': self.question_type,
            'text': self.text,
            'options': self.get_options(),
            'correctAnswers': self.get_correct_answers(),
            'required': self.required,
        }

    def to_grading(self):
        """Question variant used by the grading engine."""
        return build_question(self.to_dict())
