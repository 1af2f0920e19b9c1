"""Line-oriented edits applied in place.

Every operation resolves to a location in the file followed by a splice
or delete on a single open handle; see ``SeekEditor`` for the cost and
crash-safety characteristics this implies.

Example::

    write_text("notes.txt", " (draft)", 1)          # end of line 1
    insert_line("notes.txt", "!insert this", 2)     # above line 2
    delete_text("notes.txt", 4, 3, at=2)            # 4 bytes of line 3
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from ..core import locator, seek_editor
from ..core.locator import DEFAULT_CHUNK_SIZE, DEFAULT_LINE_LIMIT, LineCount
from ..core.positions import (
    END_OF_LINE,
    LAST,
    Column,
    InsertMode,
    LineRef,
    WriteMethod,
)
from ..core.safety import SafeEdit, performance_monitor
from ..core.seek_editor import SeekEditor

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
LineArg = Union[LineRef, int, str]
ColumnArg = Union[Column, int, str]

FIRST_COLUMN = Column.index(1)


class LineEditor:
    """Insert, replace and delete text addressed by line and column.

    Line numbers and columns are 1-based; columns count bytes of the
    encoded file. Appending at ``"last"`` (``write_text`` at end of line,
    ``insert_line`` below) needs no scan. Every other use of ``"last"`` is
    resolved with a bounded line count, so on files longer than
    ``line_limit`` lines it addresses line ``line_limit`` and a warning is
    logged.
    """

    def __init__(
        self,
        line_limit: int = DEFAULT_LINE_LIMIT,
        encoding: str = "utf-8",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        lock: bool = False,
        lock_timeout: float = 30,
        create_backup: bool = False,
    ):
        """Initialize line editor.

        Args:
            line_limit: Cap on lines scanned when counting or resolving "last"
            encoding: Encoding used for text arguments and ``read_line``
            chunk_size: Read size used while scanning for newlines
            lock: Hold a file lock on ``<path>.lock`` during each edit
            lock_timeout: Seconds to wait for the lock
            create_backup: Back up the file before each edit and restore it
                if the edit fails (implies ``lock``)
        """
        if line_limit < 1:
            raise ValueError(f"line_limit must be >= 1, got {line_limit}")
        self.line_limit = line_limit
        self.encoding = encoding
        self.chunk_size = chunk_size
        self.lock = lock or create_backup
        self.lock_timeout = lock_timeout
        self.create_backup = create_backup

    @contextmanager
    def _edit_context(self, file_path: PathLike, operation: str):
        with performance_monitor.measure_operation(operation):
            if self.lock:
                with SafeEdit(file_path, self.lock_timeout, self.create_backup):
                    yield
            else:
                yield

    def _open(self, file_path: PathLike) -> SeekEditor:
        return SeekEditor(file_path, "r+b", self.chunk_size)

    def _encode(self, text: str) -> bytes:
        return text.encode(self.encoding)

    def _resolve_line(self, file_path: PathLike, line: LineRef) -> int:
        if not line.is_last:
            return line.value
        # Line 1 exists even in an empty file
        return max(self.count_lines(file_path), 1)

    def _append(self, file_path: PathLike, data: bytes):
        with open(file_path, "ab") as f:
            f.write(data)
        logger.debug(f"Appended {len(data)} bytes to {file_path}")

    def _append_line(self, file_path: PathLike, data: bytes):
        """Append ``data`` as a line after the true last line, without a scan."""
        with open(file_path, "a+b") as f:
            size = f.seek(0, 2)
            terminated = False
            if size:
                f.seek(-1, 2)
                terminated = f.read(1) == b"\n"
            # Writes in append mode always land at end of data
            f.write(data + b"\n" if terminated else b"\n" + data)
        logger.debug(f"Appended line of {len(data)} bytes to {file_path}")

    def scan_line_count(
        self, file_path: PathLike, limit: Optional[int] = None
    ) -> LineCount:
        """Count lines up to ``limit``, reporting whether the count is exact."""
        limit = self.line_limit if limit is None else limit
        return locator.scan_line_count(file_path, limit, self.chunk_size)

    def count_lines(self, file_path: PathLike, limit: Optional[int] = None) -> int:
        """Count lines up to ``limit`` (default ``line_limit``)."""
        limit = self.line_limit if limit is None else limit
        with performance_monitor.measure_operation("count_lines"):
            return locator.count_lines(file_path, limit, self.chunk_size)

    def write_text(
        self,
        file_path: PathLike,
        text: str,
        line: LineArg = LAST,
        at: ColumnArg = END_OF_LINE,
        method: Union[WriteMethod, str] = WriteMethod.APPEND,
    ):
        """Write ``text`` at column ``at`` of ``line``.

        With the default ``method="append"`` the text is spliced in and
        everything after it shifts right. ``method="overwrite"`` writes
        over the existing bytes instead.

        Writing at the end of ``"last"`` appends to the file without
        scanning it. If the file ends with a newline the text therefore
        lands after that newline.

        Raises:
            LineOutOfRangeError: If the file has fewer lines than ``line``
            InvalidOptionError: If ``line``, ``at`` or ``method`` is not valid
        """
        line = LineRef.coerce(line)
        at = Column.coerce(at)
        method = WriteMethod.parse(method)
        data = self._encode(text)

        with self._edit_context(file_path, "write_text"):
            if line.is_last and at.is_end and method is WriteMethod.APPEND:
                self._append(file_path, data)
                return

            line_number = self._resolve_line(file_path, line)
            if method is WriteMethod.APPEND:
                seek_editor.splice(file_path, data, line_number, at, self.chunk_size)
            else:
                seek_editor.overwrite(file_path, data, line_number, at, self.chunk_size)

    def insert_line(
        self,
        file_path: PathLike,
        text: str,
        line: LineArg = LAST,
        position: Union[InsertMode, str, None] = None,
    ):
        """Insert ``text`` as a new line above or below ``line``.

        ``position`` defaults to ``"above"`` for a numbered line and to
        ``"below"`` for ``"last"``. ``"replace"`` is a deprecated alias for
        ``"below"``: it does not remove the target line. Use
        ``replace_line`` for that.

        Below ``"last"`` the line is appended without a line count, so it
        lands after the true last line however long the file is. A missing
        trailing newline is supplied before the new line; an existing one
        is kept after it.

        Raises:
            LineOutOfRangeError: If the file has fewer lines than ``line``
            InvalidOptionError: If ``position`` is not above/below
        """
        line = LineRef.coerce(line)
        if position is None:
            position = InsertMode.BELOW if line.is_last else InsertMode.ABOVE
        mode = InsertMode.parse(position)
        data = self._encode(text)

        with self._edit_context(file_path, "insert_line"):
            if line.is_last and mode is InsertMode.BELOW:
                self._append_line(file_path, data)
                return

            line_number = self._resolve_line(file_path, line)
            if mode is InsertMode.BELOW:
                seek_editor.splice(
                    file_path, b"\n" + data, line_number, END_OF_LINE, self.chunk_size
                )
                return

            with self._open(file_path) as editor:
                if line_number == 1:
                    editor.locate(1, FIRST_COLUMN)
                    editor.splice_at_cursor(data + b"\n")
                else:
                    # Validate the target line before splicing after its predecessor
                    editor.locate(line_number, FIRST_COLUMN)
                    editor.locate(line_number - 1, END_OF_LINE)
                    editor.splice_at_cursor(b"\n" + data)

    def append_text(self, file_path: PathLike, text: str):
        """Append ``text`` to the end of the file as-is."""
        with self._edit_context(file_path, "append_text"):
            self._append(file_path, self._encode(text))

    def delete_text(
        self,
        file_path: PathLike,
        count: int,
        line: LineArg,
        at: ColumnArg = FIRST_COLUMN,
    ) -> int:
        """Delete ``count`` bytes starting at column ``at`` of ``line``.

        Deleting past end of data truncates the file at that point.

        Returns:
            Number of bytes removed

        Raises:
            LineOutOfRangeError: If the file has fewer lines than ``line``
        """
        if count < 0:
            raise ValueError(f"Delete count must be >= 0, got {count}")
        line = LineRef.coerce(line)
        at = Column.coerce(at)

        with self._edit_context(file_path, "delete_text"):
            line_number = self._resolve_line(file_path, line)
            return seek_editor.delete(
                file_path, count, line_number, at, self.chunk_size
            )

    def replace_line(self, file_path: PathLike, line: LineArg, text: str):
        """Replace the content of ``line`` with ``text``, keeping its newline."""
        line = LineRef.coerce(line)
        data = self._encode(text)

        with self._edit_context(file_path, "replace_line"):
            line_number = self._resolve_line(file_path, line)
            with self._open(file_path) as editor:
                start = editor.locate(line_number, FIRST_COLUMN)
                end = editor.locate(line_number, END_OF_LINE)
                editor.replace_range(start, end, data)

    def delete_line(self, file_path: PathLike, line: LineArg):
        """Remove ``line`` together with its line terminator."""
        line = LineRef.coerce(line)

        with self._edit_context(file_path, "delete_line"):
            line_number = self._resolve_line(file_path, line)
            with self._open(file_path) as editor:
                start = editor.locate(line_number, FIRST_COLUMN)
                end = editor.locate(line_number, END_OF_LINE)
                if end < editor.size():
                    end += 1
                elif start > 0:
                    # Final line without a terminator: drop the preceding newline
                    start -= 1
                editor.replace_range(start, end, b"")

    def read_line(self, file_path: PathLike, line: LineArg) -> str:
        """Return the text of ``line`` without its terminator."""
        line = LineRef.coerce(line)
        line_number = self._resolve_line(file_path, line)
        with SeekEditor(file_path, "rb", self.chunk_size) as reader:
            reader.locate(line_number, FIRST_COLUMN)
            raw = reader.file.readline()
        return raw.rstrip(b"\n").decode(self.encoding)


default_editor = LineEditor()


def write_text(
    file_path: PathLike,
    text: str,
    line: LineArg = LAST,
    at: ColumnArg = END_OF_LINE,
    method: Union[WriteMethod, str] = WriteMethod.APPEND,
):
    """Write ``text`` at column ``at`` of ``line``. See ``LineEditor.write_text``."""
    default_editor.write_text(file_path, text, line, at, method)


def insert_line(
    file_path: PathLike,
    text: str,
    line: LineArg = LAST,
    position: Union[InsertMode, str, None] = None,
):
    """Insert ``text`` as a new line. See ``LineEditor.insert_line``."""
    default_editor.insert_line(file_path, text, line, position)


def delete_text(
    file_path: PathLike, count: int, line: LineArg, at: ColumnArg = FIRST_COLUMN
) -> int:
    """Delete ``count`` bytes at column ``at`` of ``line``.

    Args:
        file_path: Path to the file to edit
        count: Number of bytes to remove
        line: 1-based line number or "last"
        at: 1-based byte column

    Returns:
        Number of bytes removed
    """
    return default_editor.delete_text(file_path, count, line, at)


def append_text(file_path: PathLike, text: str):
    """Append ``text`` to the end of a file as-is.

    Args:
        file_path: Path to the file, created if missing
        text: Text to append
    """
    default_editor.append_text(file_path, text)


def replace_line(file_path: PathLike, line: LineArg, text: str):
    """Replace the content of ``line`` with ``text``.

    Args:
        file_path: Path to the file to edit
        line: 1-based line number or "last"
        text: New line content, without a terminator
    """
    default_editor.replace_line(file_path, line, text)


def delete_line(file_path: PathLike, line: LineArg):
    """Remove ``line`` and its terminator.

    Args:
        file_path: Path to the file to edit
        line: 1-based line number or "last"
    """
    default_editor.delete_line(file_path, line)


def read_line(file_path: PathLike, line: LineArg) -> str:
    """Read one line without its terminator.

    Args:
        file_path: Path to the file to read
        line: 1-based line number or "last"

    Returns:
        Decoded line content
    """
    return default_editor.read_line(file_path, line)


def count_lines(file_path: PathLike, limit: int = DEFAULT_LINE_LIMIT) -> int:
    """Count lines in a file, capped at ``limit``."""
    return default_editor.count_lines(file_path, limit)
