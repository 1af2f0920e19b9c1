"""Typed addressing for lines, columns and edit modes.

Callers may pass plain values (``3``, ``"end"``, ``"last"``, ``"above"``);
every public operation coerces them through the ``coerce``/``parse``
helpers below so the engines only ever see the explicit variants.
"""
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import InvalidOptionError


@dataclass(frozen=True)
class Column:
    """1-based byte column within a line, or the end-of-line sentinel."""

    value: Optional[int] = None

    @classmethod
    def index(cls, n: int) -> "Column":
        if n < 1:
            raise ValueError(f"Column must be >= 1, got {n}")
        return cls(n)

    @property
    def is_end(self) -> bool:
        return self.value is None

    @classmethod
    def coerce(cls, at: Union["Column", int, str]) -> "Column":
        """Turn ``int``/``"end"`` into a Column."""
        if isinstance(at, Column):
            return at
        if isinstance(at, bool):
            raise InvalidOptionError("column", at, ("<int >= 1>", "end"))
        if isinstance(at, int):
            return cls.index(at)
        if isinstance(at, str) and at.lower() == "end":
            return END_OF_LINE
        raise InvalidOptionError("column", at, ("<int >= 1>", "end"))

    def __repr__(self) -> str:
        return "END_OF_LINE" if self.is_end else f"Column.index({self.value})"


END_OF_LINE = Column()


@dataclass(frozen=True)
class LineRef:
    """1-based line number, or the last-line sentinel."""

    value: Optional[int] = None

    @classmethod
    def number(cls, n: int) -> "LineRef":
        if n < 1:
            raise ValueError(f"Line number must be >= 1, got {n}")
        return cls(n)

    @property
    def is_last(self) -> bool:
        return self.value is None

    @classmethod
    def coerce(cls, line: Union["LineRef", int, str]) -> "LineRef":
        if isinstance(line, LineRef):
            return line
        if isinstance(line, bool):
            raise InvalidOptionError("line", line, ("<int >= 1>", "last"))
        if isinstance(line, int):
            return cls.number(line)
        if isinstance(line, str) and line.lower() == "last":
            return LAST
        raise InvalidOptionError("line", line, ("<int >= 1>", "last"))

    def __repr__(self) -> str:
        return "LAST" if self.is_last else f"LineRef.number({self.value})"


LAST = LineRef()


class InsertMode(Enum):
    """Where ``insert_line`` places the new line relative to the target.

    ``REPLACE`` is a deprecated alias: it inserts *below* the target line
    and leaves the target untouched. Use ``replace_line`` for a
    destructive replace.
    """

    ABOVE = "above"
    BELOW = "below"
    REPLACE = "replace"

    @classmethod
    def parse(cls, position: Union["InsertMode", str]) -> "InsertMode":
        """Resolve ``position`` to ABOVE or BELOW."""
        if isinstance(position, str):
            try:
                position = cls(position.lower())
            except ValueError:
                raise InvalidOptionError(
                    "position", position, ("above", "below")
                ) from None
        if not isinstance(position, cls):
            raise InvalidOptionError("position", position, ("above", "below"))
        if position is cls.REPLACE:
            warnings.warn(
                "position='replace' inserts the line below the target and is "
                "deprecated; use position='below', or replace_line() to "
                "overwrite a line",
                DeprecationWarning,
                stacklevel=3,
            )
            return cls.BELOW
        return position


class WriteMethod(Enum):
    """How ``write_text`` places text at the resolved position."""

    APPEND = "append"
    OVERWRITE = "overwrite"

    @classmethod
    def parse(cls, method: Union["WriteMethod", str]) -> "WriteMethod":
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            name = method.lower()
            # "insert" is the historical name for writing over existing bytes
            if name == "insert":
                return cls.OVERWRITE
            try:
                return cls(name)
            except ValueError:
                pass
        raise InvalidOptionError("method", method, ("append", "overwrite"))
