"""
Answer normalization.

Turns stored correct answers and submitted answers into values that can be
compared directly. None of these functions raise: malformed input degrades
to a value that simply never matches.
"""
from typing import Any


def normalize_boolean_answer(value: Any) -> bool:
    """Only a real True or the string "true" count as true."""
    return value is True or value == 'true'


def answer_text(value: Any) -> str:
    """Plain text form of an answer value, before case folding."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ','.join(answer_text(item) for item in value)
    return str(value)


def normalize_input_answer(value: Any) -> str:
    """
    Lower-case, whitespace-trimmed text form of a free-text answer.

    Args:
        value: Submitted answer or one accepted answer

    Returns:
        Normalized string, empty for None
    """
    return answer_text(value).lower().strip()


def normalize_checkbox_answer(value: Any, option_count: int) -> list:
    """
    Selection flags for a multi-select answer.

    A submitted list is passed through unchanged (as a list). Anything else
    means nothing was selected, i.e. one False per option.
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    return [False] * max(option_count, 0)
