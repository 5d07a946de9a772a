"""
Input validation and sanitization for quiz payloads.

Mirrors the rules the REST API enforces on incoming quizzes:
- title: non-empty string
- questions: list of question objects (required on create)
- question.type: BOOLEAN, INPUT or CHECKBOX (any case)
- question.text: non-empty string
- question.options: optional list of strings
- question.correctAnswers: optional list of strings/booleans
- question.required: optional boolean, defaults to true
"""
import re
from typing import Any, Optional

from flask import current_app, has_app_context

from quizcraft.grading.questions import QuestionType


class InputValidator:
    """
    Input validator for the primitive shapes used in quiz payloads.
    """

    # Markup that should never show up in quiz text
    XSS_PATTERNS = [
        r'<script[^>]*>.*?</script>',
        r'javascript:',
        r'<iframe[^>]*>',
        r'<object[^>]*>',
        r'<embed[^>]*>',
    ]

    TITLE_MAX_LENGTH = 255

    @classmethod
    def detect_xss(cls, value: str) -> bool:
        """
        Detect potential XSS attempts.

        Args:
            value: Input value to check

        Returns:
            True if suspicious pattern detected, False otherwise
        """
        if not value or not isinstance(value, str):
            return False

        for pattern in cls.XSS_PATTERNS:
            if re.search(pattern, value, re.IGNORECASE):
                return True
        return False

    @classmethod
    def validate_length(cls, value: str, min_length: int = 0,
                        max_length: int = None) -> bool:
        """
        Validate string length.

        Args:
            value: String to validate
            min_length: Minimum length
            max_length: Maximum length (None for no limit)

        Returns:
            True if length is valid, False otherwise
        """
        if not isinstance(value, str):
            return False

        length = len(value)
        if length < min_length:
            return False
        if max_length is not None and length > max_length:
            return False
        return True

    @staticmethod
    def is_string_list(value: Any) -> bool:
        return isinstance(value, list) and all(isinstance(item, str) for item in value)

    @staticmethod
    def is_answer_list(value: Any) -> bool:
        return isinstance(value, list) and all(isinstance(item, (str, bool, int, float)) for item in value)


def sanitize_input(value: Any) -> str:
    """
    Sanitize a free-text value.

    Args:
        value: Input value to sanitize

    Returns:
        Stripped string without null bytes
    """
    if value is None:
        return ''

    if not isinstance(value, str):
        value = str(value)

    value = value.strip().replace('\x00', '')

    if InputValidator.detect_xss(value) and has_app_context():
        current_app.logger.warning(
            f"Potential XSS detected: {value[:100]}"
        )

    return value


def validate_question(data: Any, index: int) -> tuple[Optional[dict], list[str]]:
    """
    Validate and sanitize a single question payload.

    Returns:
        Tuple of (sanitized_question, errors)
    """
    prefix = f"questions[{index}]"
    if not isinstance(data, dict):
        return None, [f"{prefix} must be an object"]

    errors = []

    question_type = QuestionType.parse(data.get('type'))
    if question_type is None:
        errors.append(f"{prefix}.type must be one of: BOOLEAN, INPUT, CHECKBOX")

    text = data.get('text')
    if not isinstance(text, str) or not sanitize_input(text):
        errors.append(f"{prefix}.text is required")

    options = data.get('options')
    if options is not None and not InputValidator.is_string_list(options):
        errors.append(f"{prefix}.options must be a list of strings")

    correct_answers = data.get('correctAnswers')
    if correct_answers is not None and not InputValidator.is_answer_list(correct_answers):
        errors.append(f"{prefix}.correctAnswers must be a list of strings, numbers or booleans")

    required = data.get('required', True)
    if required is None:
        required = True
    if not isinstance(required, bool):
        errors.append(f"{prefix}.required must be a boolean")

    if errors:
        return None, errors

    return {
        'type': question_type.value,
        'text': sanitize_input(text),
        'options': [sanitize_input(option) for option in options] if options is not None else None,
        'correctAnswers': list(correct_answers) if correct_answers is not None else None,
        'required': required,
    }, []


def validate_quiz_payload(data: Any, partial: bool = False) -> tuple[dict, list[str]]:
    """
    Validate and sanitize a quiz create/update payload.

    Args:
        data: Decoded JSON body
        partial: True for updates, where every field is optional

    Returns:
        Tuple of (sanitized_data, errors)
    """
    if not isinstance(data, dict):
        return {}, ["Request body must be a JSON object"]

    sanitized = {}
    errors = []

    if 'title' in data or not partial:
        title = data.get('title')
        if not isinstance(title, str) or not sanitize_input(title):
            errors.append("title is required")
        elif not InputValidator.validate_length(sanitize_input(title), 1, InputValidator.TITLE_MAX_LENGTH):
            errors.append(f"title must be at most {InputValidator.TITLE_MAX_LENGTH} characters")
        else:
            sanitized['title'] = sanitize_input(title)

    if 'questions' in data or not partial:
        questions = data.get('questions')
        if not isinstance(questions, list):
            errors.append("questions must be a list")
        else:
            sanitized_questions = []
            for index, question in enumerate(questions):
                cleaned, question_errors = validate_question(question, index)
                errors.extend(question_errors)
                if cleaned is not None:
                    sanitized_questions.append(cleaned)
            sanitized['questions'] = sanitized_questions

    return sanitized, errors
