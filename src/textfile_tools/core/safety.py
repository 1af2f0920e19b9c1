"""Opt-in locking, backup and timing around in-place edits."""
import logging
import os
import shutil
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock

logger = logging.getLogger(__name__)


class SafeEdit:
    """Serialize edits to one path and optionally roll back on failure.

    In-place splicing is neither atomic nor safe under concurrent edits.
    ``SafeEdit`` holds a ``FileLock`` on ``<path>.lock`` for the duration
    of the block. With ``create_backup`` the file is copied first and
    restored if the block raises; the exception is re-raised either way.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        timeout: float = 30,
        create_backup: bool = False,
    ):
        self.file_path = Path(file_path)
        self.timeout = timeout
        self.create_backup = create_backup
        self.lock_path = Path(f"{self.file_path}.lock")
        self.backup_path = Path(f"{self.file_path}.backup")
        self.lock: Optional[FileLock] = None
        self._backed_up = False

    def __enter__(self):
        self.lock = FileLock(self.lock_path, timeout=self.timeout)
        self.lock.acquire()
        logger.info(f"Acquired lock for {self.file_path}")

        try:
            if self.create_backup and self.file_path.exists():
                shutil.copy2(self.file_path, self.backup_path)
                self._backed_up = True
                logger.info(f"Created backup: {self.backup_path}")
        except Exception:
            self.lock.release()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._backed_up:
                self._backed_up = False
                if exc_type is not None:
                    logger.error(
                        f"Edit of {self.file_path} failed ({exc_val}); restoring backup"
                    )
                    os.replace(self.backup_path, self.file_path)
                else:
                    os.remove(self.backup_path)
                    logger.info(f"Edit succeeded, removed backup {self.backup_path}")
        finally:
            self.lock.release()
            logger.info(f"Released lock for {self.file_path}")


@dataclass
class OperationStats:
    count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0

    @property
    def average_time(self) -> float:
        return self.total_time / self.count if self.count else 0.0


class PerformanceMonitor:
    """Per-operation call counts and durations."""

    def __init__(self):
        self.metrics: dict[str, OperationStats] = {}

    @contextmanager
    def measure_operation(self, operation_name: str):
        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start_time
            stats = self.metrics.setdefault(operation_name, OperationStats())
            stats.count += 1
            stats.total_time += duration
            stats.min_time = min(stats.min_time, duration)
            stats.max_time = max(stats.max_time, duration)

    def get_stats(self, operation: str) -> dict:
        """Get statistics for an operation, or ``{}`` if never measured."""
        stats = self.metrics.get(operation)
        if stats is None:
            return {}
        return {
            "count": stats.count,
            "total_time": stats.total_time,
            "average_time": stats.average_time,
            "min_time": stats.min_time,
            "max_time": stats.max_time,
        }

    def get_all_stats(self) -> dict:
        return {op: self.get_stats(op) for op in self.metrics}

    def reset(self):
        self.metrics.clear()


performance_monitor = PerformanceMonitor()
