"""Exceptions raised by line-addressed editing operations."""
from typing import Optional


class LineOutOfRangeError(IndexError):
    """The requested line lies beyond the end of the file."""

    def __init__(self, requested: int, available: int, message: Optional[str] = None):
        self.requested = requested
        self.available = available
        if message is None:
            message = (
                f"File contains fewer lines than requested: "
                f"line {requested} requested, {available} available"
            )
        super().__init__(message)


class InvalidOptionError(ValueError):
    """An option value is not one of the accepted choices."""

    def __init__(self, name: str, value: object, choices: tuple[str, ...]):
        self.name = name
        self.value = value
        self.choices = choices
        super().__init__(
            f"Invalid {name} {value!r}. Use one of: {', '.join(choices)}"
        )
