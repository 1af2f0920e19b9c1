"""Line location and in-place splicing primitives."""

from .errors import InvalidOptionError, LineOutOfRangeError
from .locator import (
    DEFAULT_LINE_LIMIT,
    ColumnOutOfRangeError,
    LineCount,
    count_lines,
    locate,
    scan_line_count,
)
from .positions import END_OF_LINE, LAST, Column, InsertMode, LineRef, WriteMethod
from .safety import PerformanceMonitor, SafeEdit, performance_monitor
from .seek_editor import SeekEditor, delete, overwrite, splice

__all__ = [
    # Errors
    "LineOutOfRangeError",
    "ColumnOutOfRangeError",
    "InvalidOptionError",
    # Addressing
    "Column",
    "END_OF_LINE",
    "LineRef",
    "LAST",
    "InsertMode",
    "WriteMethod",
    # Navigation
    "locate",
    "count_lines",
    "scan_line_count",
    "LineCount",
    "DEFAULT_LINE_LIMIT",
    # Mutation
    "SeekEditor",
    "splice",
    "overwrite",
    "delete",
    # Safety
    "SafeEdit",
    "PerformanceMonitor",
    "performance_monitor",
]
