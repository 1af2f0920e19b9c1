"""Newline-driven navigation over seekable byte streams.

Nothing here mutates a file: ``locate`` only moves the stream cursor and
``scan_line_count`` opens its file read-only.
"""
import logging
from pathlib import Path
from typing import BinaryIO, NamedTuple, Union

from .errors import LineOutOfRangeError
from .positions import END_OF_LINE, Column

logger = logging.getLogger(__name__)

DEFAULT_LINE_LIMIT = 10_000
DEFAULT_CHUNK_SIZE = 8192


class ColumnOutOfRangeError(LineOutOfRangeError):
    """The requested column lies past the end of its line."""

    def __init__(self, line_number: int, column: int, line_length: int):
        self.line_number = line_number
        super().__init__(
            column,
            line_length + 1,
            f"Line {line_number} has {line_length} bytes; "
            f"column {column} is past its end",
        )


class LineCount(NamedTuple):
    """Result of a bounded line scan.

    ``exact`` is False when the scan stopped at the limit with data left
    unread, in which case ``count`` is a lower bound.
    """

    count: int
    exact: bool


def _skip_newlines(stream: BinaryIO, n: int, chunk_size: int) -> tuple[int, int]:
    """Consume up to ``n`` newlines from the current position.

    Leaves the cursor just after the last newline consumed, or at end of
    data when fewer than ``n`` were found.

    Returns:
        Tuple of (newlines consumed, offset just after the last one)
    """
    seen = 0
    line_start = stream.tell()
    while seen < n:
        chunk_start = stream.tell()
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        pos = 0
        while seen < n:
            idx = chunk.find(b"\n", pos)
            if idx == -1:
                break
            seen += 1
            pos = idx + 1
            line_start = chunk_start + pos
        if seen == n:
            stream.seek(line_start)
    return seen, line_start


def locate(
    stream: BinaryIO,
    line_number: int,
    column: Column = END_OF_LINE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Move ``stream`` to ``(line_number, column)`` and return the offset.

    Scanning starts at the stream's current position, which is taken to
    be the start of line 1. ``END_OF_LINE`` lands just before the line's
    newline, or at end of data for a final line without one.

    Args:
        stream: Seekable binary stream
        line_number: 1-based line number
        column: 1-based byte column or END_OF_LINE
        chunk_size: Read size used while scanning

    Returns:
        Absolute byte offset the stream now points at

    Raises:
        LineOutOfRangeError: If the stream has fewer than ``line_number`` lines
    """
    if line_number < 1:
        raise ValueError(f"Line number must be >= 1, got {line_number}")

    seen, last_start = _skip_newlines(stream, line_number - 1, chunk_size)
    if seen < line_number - 1:
        trailing = 1 if stream.tell() > last_start else 0
        raise LineOutOfRangeError(line_number, max(seen + trailing, 1))

    line_start = stream.tell()
    if line_number > 1:
        # A newline at end of data terminates the last line, it does not open one
        if not stream.read(1):
            raise LineOutOfRangeError(line_number, line_number - 1)
        stream.seek(line_start)

    if column.is_end:
        found, _ = _skip_newlines(stream, 1, chunk_size)
        if found:
            stream.seek(-1, 1)
    else:
        wanted = column.value - 1
        data = stream.read(wanted)
        newline = data.find(b"\n")
        if newline != -1 or len(data) < wanted:
            line_length = newline if newline != -1 else len(data)
            raise ColumnOutOfRangeError(line_number, column.value, line_length)

    offset = stream.tell()
    logger.debug(f"Located line {line_number} {column!r} at offset {offset}")
    return offset


def scan_line_count(
    file_path: Union[str, Path],
    limit: int = DEFAULT_LINE_LIMIT,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> LineCount:
    """Count lines in a file, stopping once ``limit`` lines are seen.

    A final line without a trailing newline counts as a line; an empty
    file has zero lines.
    """
    if limit < 1:
        raise ValueError(f"Line limit must be >= 1, got {limit}")

    newlines = 0
    last_byte = b""
    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            found = chunk.count(b"\n")
            if newlines + found >= limit:
                pos = -1
                for _ in range(limit - newlines):
                    pos = chunk.find(b"\n", pos + 1)
                more = pos + 1 < len(chunk) or bool(f.read(1))
                return LineCount(limit, not more)
            newlines += found
            last_byte = chunk[-1:]

    trailing = 1 if last_byte and last_byte != b"\n" else 0
    return LineCount(newlines + trailing, True)


def count_lines(
    file_path: Union[str, Path],
    limit: int = DEFAULT_LINE_LIMIT,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Count lines in a file, capped at ``limit``.

    Logs a warning when the cap cut the scan short; use
    ``scan_line_count`` to test for that programmatically.
    """
    result = scan_line_count(file_path, limit, chunk_size)
    if not result.exact:
        logger.warning(
            f"Line count for {file_path} stopped at limit {limit}; "
            f"file has more lines"
        )
    return result.count
