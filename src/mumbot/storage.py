"""Storage module for the task file.

The task file holds one JSON object per line, in list order. Writes are
atomic and guarded by a best-effort lock file.
"""

import json
import logging
import os
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from mumbot.errors import StorageError
from mumbot.task import Task
from mumbot.tasklist import TaskList

logger = logging.getLogger(__name__)

# Platform-specific file locking
if sys.platform == "win32":
    import msvcrt

    def _lock_file(f) -> None:
        """Lock a file on Windows."""
        msvcrt.locking(f.fileno(), msvcrt.LK_NBLCK, 1)

    def _unlock_file(f) -> None:
        """Unlock a file on Windows."""
        try:
            f.seek(0)
            msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
        except OSError:
            pass
else:
    import fcntl

    def _lock_file(f) -> None:
        """Lock a file on Unix systems."""
        fcntl.flock(f.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)

    def _unlock_file(f) -> None:
        """Unlock a file on Unix systems."""
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


@contextmanager
def file_lock(path: Path) -> Generator[None, None, None]:
    """Hold a lock file next to `path` while the block runs.

    Best-effort: the block still runs if the lock is taken elsewhere.
    """
    lock_path = path.with_suffix(path.suffix + ".lock")
    lock_file = None

    try:
        lock_file = open(lock_path, "w", encoding="utf-8")
        try:
            _lock_file(lock_file)
        except OSError:
            logger.warning("Could not lock %s, continuing without lock", path)

        yield

    finally:
        if lock_file:
            try:
                _unlock_file(lock_file)
            except (OSError, ValueError):
                pass
            lock_file.close()
            try:
                lock_path.unlink()
            except OSError:
                pass


class TaskFile:
    """Loads and saves a TaskList as a JSON-lines file.

    Attributes:
        path: Path to the task file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> TaskList:
        """Read all tasks from the file.

        A missing file is an empty list.

        Returns:
            The stored tasks in order.

        Raises:
            StorageError: If the file cannot be read or a line is not a
                valid task record.
        """
        if not self.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return TaskList()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"{self.path}: cannot read task file ({e})") from e

        tasks = TaskList()
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise StorageError(
                    f"{self.path}:{number}: not valid JSON ({e.msg})"
                ) from e
            try:
                tasks.append(Task.from_dict(record))
            except StorageError as e:
                raise StorageError(f"{self.path}:{number}: {e}") from e

        logger.debug("Loaded %d task(s) from %s", tasks.size(), self.path)
        return tasks

    def write_lines(self, lines: list[str]) -> None:
        """Atomically write lines to the file.

        Uses a temporary file and rename for atomicity.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=".mumbot_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, self.path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def save(self, tasks: TaskList) -> None:
        """Replace the file contents with the given tasks.

        Args:
            tasks: Tasks to store, in display order.
        """
        lines = [json.dumps(task.to_dict(), ensure_ascii=False) for task in tasks]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with file_lock(self.path):
            self.write_lines(lines)
        logger.debug("Saved %d task(s) to %s", len(lines), self.path)
