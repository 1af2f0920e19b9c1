#!/usr/bin/env python3
"""Basic usage examples for the textfile-tools library."""

import logging
import tempfile
from pathlib import Path

from textfile_tools import (
    LAST,
    LineEditor,
    LineOutOfRangeError,
    count_lines,
    delete_text,
    insert_line,
    performance_monitor,
    read_line,
    scan_line_count,
    write_text,
)


def line_insert_example(workdir: Path):
    """Demonstrate inserting lines above and below."""
    print("=== Line Insert Example ===")

    notes = workdir / "notes.txt"
    notes.write_text("Text file example\nCurrent text is here\n")

    insert_line(notes, "!insert this", 2, "above")
    insert_line(notes, "appended below the last line", LAST)
    print(notes.read_text())


def write_and_delete_example(workdir: Path):
    """Demonstrate in-line writes and byte deletion."""
    print("=== Write/Delete Example ===")

    todo = workdir / "todo.txt"
    todo.write_text("buy milk\nfix bike\n")

    write_text(todo, " (done)", 1)
    write_text(todo, "[ ] ", 2, at=1)
    print(todo.read_text())

    delete_text(todo, 4, 2)
    print(f"Line 2 is now: {read_line(todo, 2)!r}")

    try:
        write_text(todo, "nope", 10)
    except LineOutOfRangeError as e:
        print(f"Refused: {e}")


def bounded_count_example(workdir: Path):
    """Demonstrate the capped line count."""
    print("=== Bounded Count Example ===")

    log_file = workdir / "big.log"
    log_file.write_text("".join(f"entry {i}\n" for i in range(25_000)))

    print(f"count_lines: {count_lines(log_file)}")
    result = scan_line_count(log_file, limit=50_000)
    print(f"scan_line_count(limit=50_000): {result.count} (exact={result.exact})")


def locked_editor_example(workdir: Path):
    """Demonstrate an editor that locks and backs up each edit."""
    print("=== Locked Editor Example ===")

    config = workdir / "settings.ini"
    config.write_text("[main]\nname = demo\n")

    editor = LineEditor(lock=True, create_backup=True, lock_timeout=5)
    editor.insert_line(config, "debug = true", LAST)
    editor.replace_line(config, 2, "name = example")
    print(config.read_text())

    for operation, stats in performance_monitor.get_all_stats().items():
        print(f"{operation}: {stats['count']} call(s), avg {stats['average_time']:.6f}s")


def main():
    logging.basicConfig(level=logging.INFO)
    with tempfile.TemporaryDirectory() as temp_dir:
        workdir = Path(temp_dir)
        line_insert_example(workdir)
        write_and_delete_example(workdir)
        bounded_count_example(workdir)
        locked_editor_example(workdir)


if __name__ == "__main__":
    main()
