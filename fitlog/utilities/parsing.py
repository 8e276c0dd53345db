"""Lenient numeric parsing for values coming out of generated plans.

Nothing here raises: unparsable input resolves to the caller's default.
"""
import math
import re
from typing import Any

_FIRST_INT = re.compile(r'\d+')
_NON_DIGITS = re.compile(r'\D')


def _number(value: Any, default: int) -> int:
    # JSON bodies may carry NaN or Infinity
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return int(value)


def digits_to_int(value: Any, default: int = 0) -> int:
    '''Parse a number, or a string with every non-digit character removed ("32g" -> 32).'''
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return _number(value, default)
    if not isinstance(value, str):
        return default
    digits = _NON_DIGITS.sub('', value)
    return int(digits) if digits else default


def first_int(value: Any, default: int = 0) -> int:
    '''Parse a number, or the first run of digits in a string ("8-12" -> 8).'''
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return _number(value, default)
    if not isinstance(value, str):
        return default
    match = _FIRST_INT.search(value)
    return int(match.group()) if match else default
