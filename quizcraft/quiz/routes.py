"""
Quiz routes.

- Create quizzes with their questions
- List, view, update and delete quizzes
- Grade a set of answers for a quiz
"""
from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from quizcraft import db
from quizcraft.common.activity_logger import QuizActivityLogger
from quizcraft.quiz import quiz_bp
from quizcraft.quiz.service import QuizNotFoundError, QuizService, QuizValidationError


def _validation_failed(e: QuizValidationError):
    QuizActivityLogger.log_invalid_payload(request.path, e.errors)
    return jsonify({'success': False, 'error': 'Validation failed', 'errors': e.errors}), 400


def _not_found(e: QuizNotFoundError):
    return jsonify({'success': False, 'error': str(e)}), 404


def _database_error(action: str, e: SQLAlchemyError):
    db.session.rollback()
    current_app.logger.exception(f"Database error while trying to {action}: {str(e)}")
    return jsonify({'success': False, 'error': f'Failed to {action}'}), 500


@quiz_bp.route('/quizzes', methods=['POST'])
def create_quiz():
    """
    Create a new quiz with its questions.

    Request body:
    {
        "title": "JavaScript Fundamentals",
        "questions": [
            {"type": "BOOLEAN", "text": "...", "correctAnswers": [false]},
            {"type": "INPUT", "text": "...", "correctAnswers": ["var", "let", "const"]},
            {"type": "CHECKBOX", "text": "...", "options": ["String", "Number"],
             "correctAnswers": [true, true], "required": false}
        ]
    }
    """
    try:
        quiz = QuizService.create(request.get_json(silent=True))
        return jsonify({
            'success': True,
            'message': 'Quiz created successfully',
            'quiz': quiz.to_dict()
        }), 201

    except QuizValidationError as e:
        return _validation_failed(e)
    except SQLAlchemyError as e:
        return _database_error('create quiz', e)


@quiz_bp.route('/quizzes', methods=['GET'])
def list_quizzes():
    """List all quizzes, newest first, with their question counts."""
    try:
        quizzes = QuizService.find_all()
        return jsonify({
            'success': True,
            'quizzes': [quiz.to_summary() for quiz in quizzes]
        }), 200

    except SQLAlchemyError as e:
        return _database_error('load quizzes', e)


@quiz_bp.route('/quizzes/<quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    """
    Get quiz details including all questions.
    """
    try:
        quiz = QuizService.find_one(quiz_id)
        return jsonify({
            'success': True,
            'quiz': quiz.to_dict()
        }), 200

    except QuizNotFoundError as e:
        return _not_found(e)
    except SQLAlchemyError as e:
        return _database_error('load quiz', e)


@quiz_bp.route('/quizzes/<quiz_id>', methods=['PUT', 'PATCH'])
def update_quiz(quiz_id):
    """
    Update a quiz.

    Only the fields present in the body are changed. A `questions` list
    replaces every existing question of the quiz.
    """
    try:
        quiz = QuizService.update(quiz_id, request.get_json(silent=True) or {})
        return jsonify({
            'success': True,
            'message': 'Quiz updated successfully',
            'quiz': quiz.to_dict()
        }), 200

    except QuizNotFoundError as e:
        return _not_found(e)
    except QuizValidationError as e:
        db.session.rollback()
        return _validation_failed(e)
    except SQLAlchemyError as e:
        return _database_error('update quiz', e)


@quiz_bp.route('/quizzes/<quiz_id>', methods=['DELETE'])
def delete_quiz(quiz_id):
    """
    Delete a quiz and all of its questions.
    """
    try:
        QuizService.remove(quiz_id)
        return '', 204

    except QuizNotFoundError as e:
        return _not_found(e)
    except SQLAlchemyError as e:
        return _database_error('delete quiz', e)


@quiz_bp.route('/quizzes/<quiz_id>/grade', methods=['POST'])
def grade_quiz(quiz_id):
    """
    Grade a finished quiz.

    Request body:
    {
        "answers": {
            "<boolean question id>": false,
            "<input question id>": "let",
            "<checkbox question id>": [true, true, false]
        }
    }

    Questions without an entry are graded as unanswered.
    """
    try:
        data = request.get_json(silent=True) or {}
        report = QuizService.grade(
            quiz_id,
            data.get('answers') if isinstance(data, dict) else data,
            unanswered_incorrect=current_app.config.get('TREAT_UNANSWERED_AS_INCORRECT', False),
        )
        return jsonify({
            'success': True,
            'quizId': quiz_id,
            **report.to_dict()
        }), 200

    except QuizNotFoundError as e:
        return _not_found(e)
    except QuizValidationError as e:
        return _validation_failed(e)
    except SQLAlchemyError as e:
        return _database_error('grade quiz', e)
