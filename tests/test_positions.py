"""Tests for line, column and mode coercion."""
import warnings

import pytest
from textfile_tools.core.errors import InvalidOptionError
from textfile_tools.core.positions import (
    END_OF_LINE,
    LAST,
    Column,
    InsertMode,
    LineRef,
    WriteMethod,
)


class TestColumn:
    def test_coerce_int(self) -> None:
        assert Column.coerce(3) == Column.index(3)
        assert not Column.coerce(3).is_end

    def test_coerce_end(self) -> None:
        assert Column.coerce("end") is END_OF_LINE
        assert Column.coerce("END") is END_OF_LINE
        assert Column.coerce(END_OF_LINE).is_end

    def test_rejects_invalid(self) -> None:
        with pytest.raises(ValueError):
            Column.index(0)
        with pytest.raises(InvalidOptionError, match="column"):
            Column.coerce("middle")
        with pytest.raises(InvalidOptionError):
            Column.coerce(True)
        with pytest.raises(InvalidOptionError):
            Column.coerce(1.5)

    def test_repr(self) -> None:
        assert repr(END_OF_LINE) == "END_OF_LINE"
        assert repr(Column.index(2)) == "Column.index(2)"


class TestLineRef:
    def test_coerce(self) -> None:
        assert LineRef.coerce(4).value == 4
        assert LineRef.coerce("last") is LAST
        assert LAST.is_last

    def test_rejects_invalid(self) -> None:
        with pytest.raises(ValueError):
            LineRef.coerce(0)
        with pytest.raises(InvalidOptionError, match="line"):
            LineRef.coerce("first")


class TestInsertMode:
    def test_parse(self) -> None:
        assert InsertMode.parse("above") is InsertMode.ABOVE
        assert InsertMode.parse("Below") is InsertMode.BELOW
        assert InsertMode.parse(InsertMode.ABOVE) is InsertMode.ABOVE

    def test_replace_is_deprecated_below(self) -> None:
        with pytest.warns(DeprecationWarning, match="deprecated"):
            assert InsertMode.parse("replace") is InsertMode.BELOW
        with pytest.warns(DeprecationWarning):
            assert InsertMode.parse(InsertMode.REPLACE) is InsertMode.BELOW

    def test_no_warning_for_above_below(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            InsertMode.parse("above")
            InsertMode.parse("below")

    def test_invalid(self) -> None:
        with pytest.raises(InvalidOptionError, match="Invalid position 'sideways'"):
            InsertMode.parse("sideways")
        with pytest.raises(InvalidOptionError):
            InsertMode.parse(1)


class TestWriteMethod:
    def test_parse(self) -> None:
        assert WriteMethod.parse("append") is WriteMethod.APPEND
        assert WriteMethod.parse("overwrite") is WriteMethod.OVERWRITE
        assert WriteMethod.parse("insert") is WriteMethod.OVERWRITE
        assert WriteMethod.parse(WriteMethod.APPEND) is WriteMethod.APPEND

    def test_invalid(self) -> None:
        with pytest.raises(InvalidOptionError, match="append, overwrite"):
            WriteMethod.parse("prepend")
        with pytest.raises(ValueError):
            WriteMethod.parse(None)
