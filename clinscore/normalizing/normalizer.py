"""Normalizer for turning raw responses into scorable numbers.

Every question type belongs to one response family. Each family has exactly
one handler, and a handler returns ``None`` when the response is missing,
mis-typed, or otherwise not scorable. ``None`` is skipped by the scoring
methods rather than counted as zero.
"""

import logging
import math
import re
from enum import Enum
from typing import Any, Callable

from clinscore.normalizing.reverse import reflect_index, reflect_value
from clinscore.templates.models import Question, QuestionOption

logger = logging.getLogger(__name__)

Number = int | float

# Leading numeric prefix accepted by a lenient float parse ("3abc" -> 3).
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")

# Whole-string numeric literal for a strict parse.
_FLOAT_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$|^[+-]?Infinity$")


class QuestionFamily(str, Enum):
    """Response shape shared by a group of question types."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    FREE_TEXT = "free_text"


QUESTION_FAMILIES: dict[str, QuestionFamily] = {
    "scale": QuestionFamily.NUMERIC,
    "likert": QuestionFamily.NUMERIC,
    "slider": QuestionFamily.NUMERIC,
    "number": QuestionFamily.NUMERIC,
    "boolean": QuestionFamily.BOOLEAN,
    "single_choice": QuestionFamily.SINGLE_CHOICE,
    "multiple_choice": QuestionFamily.MULTI_CHOICE,
    "multi_choice": QuestionFamily.MULTI_CHOICE,
    "text": QuestionFamily.FREE_TEXT,
    "textarea": QuestionFamily.FREE_TEXT,
    "date": QuestionFamily.FREE_TEXT,
    "time": QuestionFamily.FREE_TEXT,
}


def family_of(question: Question) -> QuestionFamily | None:
    """Get the response family for a question, or None for unknown types."""
    return QUESTION_FAMILIES.get(question.type)


def is_number(value: Any) -> bool:
    """Whether a value is a real number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite_float(value: Any) -> float | None:
    """float(value), or None when it overflows or is not finite."""
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def parse_float(value: Any) -> float | None:
    """Lenient float parse.

    Numbers pass through; anything else is stringified and its leading
    numeric prefix is parsed. Booleans, NaN, infinities, numbers too large
    for a float and non-numeric strings give None.
    """
    if is_number(value):
        return _finite_float(value)
    if value is None or isinstance(value, bool):
        return None
    match = _FLOAT_PREFIX.match(str(value))
    if match is None:
        return None
    return _finite_float(match.group(1))


def to_number(value: Any) -> float | None:
    """Strict numeric conversion of a whole value.

    Surrounding whitespace is ignored, an empty string is 0 and booleans map
    to 0/1. Anything that is not entirely a finite numeric literal gives None.
    """
    if isinstance(value, bool):
        return float(value)
    if is_number(value):
        return _finite_float(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text == "":
        return 0.0
    if not _FLOAT_LITERAL.match(text):
        return None
    return _finite_float(text)


def _strict_equals(left: Any, right: Any) -> bool:
    """Equality that keeps booleans, numbers and strings apart."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def resolve_option_index(
    options: list[str | QuestionOption] | None,
    value: Any,
) -> Number | None:
    """Resolve a raw choice value to its option index.

    Args:
        options: The question's options, in order.
        value: A selected value. Matched against ``value`` for
            ``{label, value}`` options and against the label for bare-string
            options. A number given against bare-string options is taken as
            the index itself.

    Returns:
        The zero-based index, or None if the value does not resolve.
    """
    if options is None:
        return None

    if len(options) > 0 and isinstance(options[0], QuestionOption):
        for index, option in enumerate(options):
            if isinstance(option, QuestionOption) and _strict_equals(option.value, value):
                return index
        return None

    if isinstance(value, str):
        for index, option in enumerate(options):
            if option == value:
                return index
        return None

    if is_number(value):
        return value

    return None


def _normalize_numeric(question: Question, response: Any) -> float | None:
    value = parse_float(response)
    if value is None:
        return None
    upper = question.upper_bound
    if question.reverse_scored and upper is not None:
        value = reflect_value(value, question.lower_bound, upper)
    return value


def _normalize_boolean(question: Question, response: Any) -> float | None:
    if response is True:
        return 1
    if response is False:
        return 0
    return None


def _normalize_single_choice(question: Question, response: Any) -> float | None:
    index = resolve_option_index(question.options, response)
    if index is None:
        return None
    if question.reverse_scored and question.options:
        index = reflect_index(index, len(question.options))
    return index


def _normalize_multi_choice(question: Question, response: Any) -> float | None:
    if not isinstance(response, (list, tuple)):
        return None

    reverse = question.reverse_scored and bool(question.options)
    total: Number = 0
    for selection in response:
        index = resolve_option_index(question.options, selection)
        if index is None:
            continue
        if reverse:
            index = reflect_index(index, len(question.options))
        total += index
    return total


def _normalize_free_text(question: Question, response: Any) -> float | None:
    # Only meaningful when the template weights the item explicitly.
    return parse_float(response)


_HANDLERS: dict[QuestionFamily, Callable[[Question, Any], float | None]] = {
    QuestionFamily.NUMERIC: _normalize_numeric,
    QuestionFamily.BOOLEAN: _normalize_boolean,
    QuestionFamily.SINGLE_CHOICE: _normalize_single_choice,
    QuestionFamily.MULTI_CHOICE: _normalize_multi_choice,
    QuestionFamily.FREE_TEXT: _normalize_free_text,
}

if set(_HANDLERS) != set(QuestionFamily):
    raise RuntimeError("Every QuestionFamily needs a normalization handler")


def normalize(question: Question | None, response: Any) -> float | None:
    """Normalize one raw response to a scorable number.

    Args:
        question: The question definition.
        response: The raw response value from the response map.

    Returns:
        The normalized value, or None if the response is not scorable.
    """
    if question is None or response is None:
        return None

    family = family_of(question)
    if family is None:
        return None

    value = _HANDLERS[family](question, response)
    if value is None:
        logger.debug(
            "Skipping unscorable response for %s (%s): %r",
            question.id,
            question.type,
            response,
        )
    return value
