"""Reverse scoring utilities.

Reflects a value across its response range by computing
(max_value + min_value - value), so the ends of the range swap places.
"""


def reflect_value(
    value: int | float,
    min_value: int | float | None,
    max_value: int | float,
) -> int | float:
    """Reverse-score a value on a bounded scale.

    For a scale of 1-5, 1 becomes 5 and 2 becomes 4; 3 stays 3.
    For a scale of 0-3, 0 becomes 3.

    Args:
        value: The raw value.
        min_value: The minimum value in the response scale (0 when unknown).
        max_value: The maximum value in the response scale.

    Returns:
        The reversed value.
    """
    low = min_value if min_value is not None else 0
    return (max_value - value) + low


def reflect_index(index: int | float, option_count: int) -> int | float:
    """Reverse-score a zero-based option index.

    With four options, index 0 becomes 3 and index 3 becomes 0.

    Args:
        index: The selected option index.
        option_count: Number of options on the question.

    Returns:
        The reversed index.
    """
    return (option_count - 1) - index

