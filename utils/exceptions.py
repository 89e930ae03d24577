"""
utils/exceptions.py
-------------------
Error types raised by the data-access layer.

A lookup that finds nothing is not an error: it returns None.
"""


class LightBnBError(Exception):
    """Base class for every error raised by this package."""


class StoreError(LightBnBError):
    """A statement could not be executed against the store."""


class StoreUnavailableError(StoreError):
    """The store could not be reached, or the pool is closed or exhausted."""


class ConstraintViolationError(StoreError):
    """A write broke a table constraint (e.g. a duplicate email)."""


class InvalidInputError(LightBnBError, ValueError):
    """Caller input is missing or cannot be coerced to the expected type."""

    def __init__(self, field: str, value=None, reason: str = "invalid value"):
        super().__init__(f"{field}: {reason} ({value!r})")
        self.field = field
        self.value = value
