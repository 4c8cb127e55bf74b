"""Normalization of raw responses to scorable numbers."""

from clinscore.normalizing.normalizer import (
    QuestionFamily,
    family_of,
    normalize,
    parse_float,
    resolve_option_index,
    to_number,
)
from clinscore.normalizing.reverse import reflect_index, reflect_value

__all__ = [
    "QuestionFamily",
    "family_of",
    "normalize",
    "parse_float",
    "reflect_index",
    "reflect_value",
    "resolve_option_index",
    "to_number",
]
