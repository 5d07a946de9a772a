"""
Pytest configuration and fixtures for testing.
Every test gets a fresh application backed by an in-memory SQLite database.
"""
import os

import pytest

from quizcraft import create_app, db
from quizcraft.grading.questions import QuizSnapshot


@pytest.fixture
def app():
    """Create application for testing."""
    # Set test environment variables BEFORE creating app
    os.environ['FLASK_ENV'] = 'testing'
    os.environ['SECRET_KEY'] = 'test-secret-key-not-for-production'
    os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
    os.environ['API_PREFIX'] = '/api'
    os.environ['TREAT_UNANSWERED_AS_INCORRECT'] = 'false'

    app = create_app()
    app.config['TESTING'] = True

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def sample_payload():
    """Quiz body with one question of each type."""
    return {
        'title': 'JavaScript Fundamentals',
        'questions': [
            {
                'type': 'BOOLEAN',
                'text': 'JavaScript is a statically typed language.',
                'correctAnswers': [False],
                'required': True,
            },
            {
                'type': 'INPUT',
                'text': 'What keyword is used to declare a variable in JavaScript?',
                'correctAnswers': ['var', 'let', 'const'],
                'required': True,
            },
            {
                'type': 'CHECKBOX',
                'text': 'Which of the following are JavaScript data types?',
                'options': ['String', 'Number', 'Boolean'],
                'correctAnswers': [True, True, False],
                'required': False,
            },
        ],
    }


@pytest.fixture
def sample_quiz(sample_payload):
    """Snapshot of the sample quiz with stable question IDs."""
    data = dict(sample_payload)
    data['id'] = 'quiz-1'
    data['questions'] = [
        dict(question, id=question_id)
        for question, question_id in zip(sample_payload['questions'], ['q-bool', 'q-input', 'q-check'])
    ]
    return QuizSnapshot.from_dict(data)
