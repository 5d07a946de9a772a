"""
Flask CLI commands.

    flask --app quizcraft seed-db
"""
import click
from flask import current_app
from flask.cli import with_appcontext

from quizcraft.quiz.service import QuizService

SAMPLE_QUIZ = {
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
            'options': ['String', 'Number', 'Boolean', 'Array', 'Object'],
            'correctAnswers': [True, True, True, True, True],
            'required': True,
        },
    ],
}


@click.command('seed-db')
@with_appcontext
def seed_db_command():
    """Insert a sample quiz."""
    current_app.logger.info("Setting up database...")
    quiz = QuizService.create(SAMPLE_QUIZ)
    click.echo(f"Sample quiz created: {quiz.id} ({quiz.title})")
