"""Seek-based in-place splicing and deletion."""
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .locator import DEFAULT_CHUNK_SIZE, locate
from .positions import END_OF_LINE, Column

logger = logging.getLogger(__name__)


class SeekEditor:
    """In-place editor that works at the cursor of a single open handle.

    Edits are made by buffering the tail of the file (everything after
    the cursor), writing the new bytes, then writing the tail back. No
    temporary file is involved, so:

    - memory use is proportional to the size of the tail, which makes
      splicing near the start of a very large file expensive;
    - a crash between writing the new bytes and writing the tail back
      leaves the file partially spliced;
    - two editors working on the same path at once can lose updates.
      Serialize edits externally (see ``SafeEdit``).
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        mode: str = "r+b",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """Initialize seek-based editor.

        Args:
            file_path: Path to the file to edit
            mode: File open mode used on ``__enter__``
            chunk_size: Read size used while scanning for newlines
        """
        self.file_path = Path(file_path)
        self.mode = mode
        self.chunk_size = chunk_size
        self._file: Optional[BinaryIO] = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self):
        """Open the underlying file."""
        if self._file is not None:
            raise RuntimeError("File is already open")
        self._file = open(self.file_path, self.mode)

    def close(self):
        """Close the underlying file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def file(self) -> BinaryIO:
        if self._file is None:
            raise RuntimeError("File not open")
        return self._file

    def _require_writable(self):
        if "+" not in self.mode and "w" not in self.mode and "a" not in self.mode:
            raise RuntimeError("File not open for writing")

    def tell(self) -> int:
        """Get current cursor position."""
        return self.file.tell()

    def seek(self, offset: int, whence: int = 0) -> int:
        """Move the cursor.

        Args:
            offset: Byte offset
            whence: Reference point (0=start, 1=current, 2=end)

        Returns:
            New absolute position
        """
        return self.file.seek(offset, whence)

    def size(self) -> int:
        """Get file size without moving the cursor."""
        current = self.tell()
        end = self.seek(0, 2)
        self.seek(current)
        return end

    def locate(self, line_number: int, column: Column = END_OF_LINE) -> int:
        """Move the cursor to ``(line_number, column)`` from the file start.

        Raises:
            LineOutOfRangeError: If the file has fewer lines than requested
        """
        self.seek(0)
        return locate(self.file, line_number, column, self.chunk_size)

    def splice_at_cursor(self, data: bytes) -> int:
        """Insert ``data`` at the cursor, shifting the tail right.

        Returns:
            Offset just past the inserted bytes
        """
        self._require_writable()
        mark = self.tell()
        tail = self.file.read()

        self.seek(mark)
        self.file.write(data)
        end = self.tell()
        self.file.write(tail)
        logger.debug(
            f"Spliced {len(data)} bytes at offset {mark} of {self.file_path} "
            f"({len(tail)} tail bytes rewritten)"
        )
        return end

    def overwrite_at_cursor(self, data: bytes) -> int:
        """Write ``data`` over the bytes at the cursor.

        The file only grows if ``data`` runs past end of data.
        """
        self._require_writable()
        mark = self.tell()
        self.file.write(data)
        logger.debug(f"Overwrote {len(data)} bytes at offset {mark} of {self.file_path}")
        return self.tell()

    def delete_at_cursor(self, count: int) -> int:
        """Remove ``count`` bytes at the cursor, shifting the tail left.

        Deleting past end of data truncates the file at the cursor.

        Returns:
            Number of bytes actually removed
        """
        if count < 0:
            raise ValueError(f"Delete count must be >= 0, got {count}")
        self._require_writable()
        mark = self.tell()
        end = self.seek(0, 2)
        removed = min(count, end - mark)

        self.seek(mark + removed)
        tail = self.file.read()
        self.seek(mark)
        self.file.write(tail)
        self.file.truncate()
        if removed < count:
            logger.debug(
                f"Delete of {count} bytes at offset {mark} of {self.file_path} "
                f"ran past end of data; truncated {removed} bytes"
            )
        else:
            logger.debug(f"Deleted {removed} bytes at offset {mark} of {self.file_path}")
        return removed

    def replace_range(self, start: int, end: int, data: bytes):
        """Replace bytes ``[start, end)`` with ``data`` in a single rewrite."""
        if not 0 <= start <= end:
            raise ValueError(f"Invalid range [{start}, {end})")
        self._require_writable()
        self.seek(end)
        tail = self.file.read()
        self.seek(start)
        self.file.write(data)
        self.file.write(tail)
        self.file.truncate()
        logger.debug(
            f"Replaced bytes [{start}, {end}) of {self.file_path} "
            f"with {len(data)} bytes"
        )


def splice(
    file_path: Union[str, Path],
    data: bytes,
    line_number: int,
    column: Column = END_OF_LINE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Insert ``data`` at ``(line_number, column)`` of a file in place.

    Args:
        file_path: Path to the file to edit
        data: Bytes to insert
        line_number: 1-based line number
        column: 1-based byte column or END_OF_LINE
        chunk_size: Read size used while scanning for newlines

    Returns:
        Offset at which ``data`` was inserted
    """
    with SeekEditor(file_path, "r+b", chunk_size) as editor:
        offset = editor.locate(line_number, column)
        editor.splice_at_cursor(data)
    return offset


def overwrite(
    file_path: Union[str, Path],
    data: bytes,
    line_number: int,
    column: Column = END_OF_LINE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Write ``data`` over existing bytes at ``(line_number, column)``."""
    with SeekEditor(file_path, "r+b", chunk_size) as editor:
        offset = editor.locate(line_number, column)
        editor.overwrite_at_cursor(data)
    return offset


def delete(
    file_path: Union[str, Path],
    count: int,
    line_number: int,
    column: Column = Column.index(1),
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Remove ``count`` bytes starting at ``(line_number, column)``.

    Args:
        file_path: Path to the file to edit
        count: Number of bytes to remove; past end of data truncates
        line_number: 1-based line number
        column: 1-based byte column or END_OF_LINE
        chunk_size: Read size used while scanning for newlines

    Returns:
        Number of bytes actually removed
    """
    if count < 0:
        raise ValueError(f"Delete count must be >= 0, got {count}")
    with SeekEditor(file_path, "r+b", chunk_size) as editor:
        editor.locate(line_number, column)
        return editor.delete_at_cursor(count)
