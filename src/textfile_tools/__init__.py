"""In-place, line-addressed editing of text files without loading them whole."""

from .core import (
    END_OF_LINE,
    LAST,
    Column,
    ColumnOutOfRangeError,
    InsertMode,
    InvalidOptionError,
    LineCount,
    LineOutOfRangeError,
    LineRef,
    PerformanceMonitor,
    SafeEdit,
    SeekEditor,
    WriteMethod,
    locate,
    performance_monitor,
    scan_line_count,
)
from .editing import (
    LineEditor,
    append_text,
    count_lines,
    delete_line,
    delete_text,
    insert_line,
    read_line,
    replace_line,
    write_text,
)

__version__ = "0.1.0"

__all__ = [
    # Line operations
    "LineEditor",
    "write_text",
    "insert_line",
    "delete_text",
    "append_text",
    "replace_line",
    "delete_line",
    "read_line",
    "count_lines",
    "scan_line_count",
    "LineCount",
    # Addressing
    "Column",
    "END_OF_LINE",
    "LineRef",
    "LAST",
    "InsertMode",
    "WriteMethod",
    # Errors
    "LineOutOfRangeError",
    "ColumnOutOfRangeError",
    "InvalidOptionError",
    # Primitives
    "SeekEditor",
    "locate",
    "SafeEdit",
    "PerformanceMonitor",
    "performance_monitor",
]
