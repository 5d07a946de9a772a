"""
Shared helpers: payload validation and activity logging.
"""

from .activity_logger import QuizActivityLogger
from .validators import InputValidator, sanitize_input, validate_quiz_payload

__all__ = [
    'QuizActivityLogger',
    'InputValidator',
    'sanitize_input',
    'validate_quiz_payload',
]
