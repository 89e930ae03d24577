"""
utils/validators.py
-------------------
Coercion of caller-supplied values (query strings, form posts) into
the numeric types bound to SQL parameters.
"""

import math
from typing import Optional, Union

from utils.exceptions import InvalidInputError

Number = Union[int, float]


def to_number(value, field: str) -> Number:
    """
    Coerce a value to int when it is integral, float otherwise.

    Raises:
        InvalidInputError: If the value is None, a bool, or not numeric.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(field, value, "expected a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        text = str(value).strip()
        if "_" in text:
            raise InvalidInputError(field, value, "expected a number")
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise InvalidInputError(field, value, "expected a number") from None
    if not math.isfinite(number):
        raise InvalidInputError(field, value, "expected a finite number")
    return int(number) if number.is_integer() else number


def to_int(value, field: str) -> int:
    """Coerce a value to int; fractional numbers are rejected."""
    number = to_number(value, field)
    if isinstance(number, float):
        if not number.is_integer():
            raise InvalidInputError(field, value, "expected a whole number")
        number = int(number)
    return number


def to_cents(value, field: str) -> Number:
    """Convert a major-unit price (e.g. dollars) to minor units (cents)."""
    cents = round(to_number(value, field) * 100, 6)
    return int(cents) if float(cents).is_integer() else cents


def to_limit(value, field: str = "limit", default: int = 10) -> int:
    """A result limit: falsy values fall back to `default`, negatives are rejected."""
    if not value:
        return default
    limit = to_int(value, field)
    if limit < 0:
        raise InvalidInputError(field, value, "must not be negative")
    return limit or default


def optional_str(value) -> Optional[str]:
    """Strip a string value; empty strings become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
