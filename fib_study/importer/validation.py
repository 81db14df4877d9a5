"""
Validation utilities for questions.

The same four rules run at import time and again on the review table. The
two stages word their messages differently.
"""

from enum import Enum
from typing import Dict, List, Sequence

from fib_study.models import Question, QuestionType


class Wording(Enum):
    """Message style for validation errors."""
    IMPORT = "import"
    REVIEW = "review"


_MESSAGES = {
    Wording.IMPORT: {
        'title': "Missing title",
        'content': "Missing content",
        'text': "Missing text",
        'type': 'Invalid type "{value}" (must be RWFIB or RFIB)',
    },
    Wording.REVIEW: {
        'title': "Title is required",
        'content': "Content is required",
        'text': "Text is required",
        'type': 'Invalid question type "{value}"',
    },
}


def _is_blank(value) -> bool:
    return not value or not str(value).strip()


def validate_question(question: Question, wording: Wording = Wording.IMPORT) -> List[str]:
    """
    Validate one question against the required-field and type rules.

    Every rule is checked, so all violations are reported together.

    Args:
        question: Question to validate
        wording: Message style to use

    Returns:
        Ordered list of error messages; empty if the question is valid

    Examples:
        >>> validate_question(Question(title="", content="c", text="t", type="X"))
        ['Missing title', 'Invalid type "X" (must be RWFIB or RFIB)']
    """
    messages = _MESSAGES[wording]
    errors = []

    if _is_blank(question.title):
        errors.append(messages['title'])
    if _is_blank(question.content):
        errors.append(messages['content'])
    if _is_blank(question.text):
        errors.append(messages['text'])
    if question.type not in QuestionType.values():
        errors.append(messages['type'].format(value=question.type))

    return errors


def validate_questions(
    questions: Sequence[Question],
    wording: Wording = Wording.REVIEW
) -> Dict[int, List[str]]:
    """
    Validate a list of questions.

    Args:
        questions: Questions to validate

    Returns:
        Dictionary mapping question indices (0-based) to lists of error
        messages. Empty dictionary if all questions are valid.
    """
    validation_errors: Dict[int, List[str]] = {}

    for index, question in enumerate(questions):
        errors = validate_question(question, wording)
        if errors:
            validation_errors[index] = errors

    return validation_errors
