"""Evaluator for clinical alert conditions.

A condition is a single comparison of the form ``score <op> <number>`` with
``<op>`` one of ``>=``, ``<=``, ``>``, ``<``, ``==``, ``!=``. Whitespace is
ignored. Anything else, including compound expressions, evaluates to False.
Conditions are never passed to eval().
"""

import logging
import operator
import re
from typing import Callable

from clinscore.normalizing.normalizer import to_number

logger = logging.getLogger(__name__)

# Two-character operators come first so ">=" is not split as ">".
OPERATORS: tuple[tuple[str, Callable[[float, float], bool]], ...] = (
    (">=", operator.ge),
    ("<=", operator.le),
    (">", operator.gt),
    ("<", operator.lt),
    ("==", operator.eq),
    ("!=", operator.ne),
)

SUBJECT = "score"

_WHITESPACE = re.compile(r"\s+")


def evaluate_condition(condition: str | None, score: float) -> bool:
    """Evaluate an alert condition against a score.

    Args:
        condition: Condition text such as ``"score >= 10"``.
        score: The score to test.

    Returns:
        True if the condition is well formed and holds, else False.
    """
    if not condition:
        return False

    compact = _WHITESPACE.sub("", condition)
    for symbol, compare in OPERATORS:
        parts = compact.split(symbol)
        if len(parts) != 2:
            continue

        subject, threshold_text = parts
        if subject != SUBJECT or threshold_text == "":
            logger.debug("Ignoring malformed alert condition: %r", condition)
            return False
        threshold = to_number(threshold_text)
        if threshold is None:
            logger.debug("Ignoring malformed alert condition: %r", condition)
            return False
        return compare(score, threshold)

    logger.debug("Ignoring malformed alert condition: %r", condition)
    return False
