"""
Helpers for CIF numeric values and key/value line layout.
"""

from typing import Optional

import numpy as np


def remove_uncertainty_digits(value: str) -> str:
    """
    Strip a standard uncertainty suffix from a CIF value.

    Everything from the first '(' onward is discarded, e.g. '4.0094(2)' -> '4.0094'.
    """
    index = value.find('(')
    if index == -1:
        return value
    return value[:index]


def precision_of_value(value: str) -> int:
    """Number of characters after the decimal point (0 without one)."""
    if '.' not in value:
        return 0
    return len(value.rsplit('.', 1)[1])


def format_with_precision(value: float, precision: int) -> str:
    """Render `value` with exactly `precision` decimal places."""
    return f"{value:.{precision}f}"


def format_shortest(value: float) -> str:
    """Shortest positional representation, e.g. 2.0 -> '2', 0.5 -> '0.5'."""
    return np.format_float_positional(value, trim='-')


def whitespace_between_two_values(line: str) -> Optional[int]:
    """
    Count the whitespace characters between the first two tokens of a line.

    The value token is searched for after the end of the key token, so the
    result reflects the padding actually used in the file.

    Returns:
        The number of characters, or None if the line has fewer than two tokens
    """
    span = key_value_span(line)
    if span is None:
        return None
    key_end, value_start = span
    return value_start - key_end


def key_value_span(line: str) -> Optional[tuple]:
    """
    Locate the end of the key token and the start of the value token.

    Returns:
        (key_end, value_start) offsets into `line`, or None
    """
    words = line.split()
    if len(words) < 2:
        return None
    key, value = words[0], words[1]

    key_start = line.find(key)
    if key_start == -1:
        return None
    key_end = key_start + len(key)

    value_start = line.find(value, key_end)
    if value_start == -1:
        return None
    return key_end, value_start
