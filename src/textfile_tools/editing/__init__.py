"""Line-addressed, in-place editing of text files."""

from .line_edit import (
    LineEditor,
    append_text,
    count_lines,
    default_editor,
    delete_line,
    delete_text,
    insert_line,
    read_line,
    replace_line,
    write_text,
)

__all__ = [
    "LineEditor",
    "default_editor",
    "write_text",
    "insert_line",
    "delete_text",
    "append_text",
    "replace_line",
    "delete_line",
    "read_line",
    "count_lines",
]
