"""Ordered task collection addressed by 1-based display indices."""

from collections.abc import Iterable, Iterator

from mumbot.errors import TaskIndexError
from mumbot.task import Task


class TaskList:
    """An ordered, mutable list of tasks.

    Insertion order is creation order. Display index `i` (1..size) maps to
    storage position `i - 1`; deleting a task shifts later tasks down.

    Args:
        tasks: Optional initial tasks, copied in order.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)

    def size(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def enumerated(self) -> Iterator[tuple[int, Task]]:
        """Yield (display index, task) pairs in list order."""
        return enumerate(self._tasks, start=1)

    def check_index(self, index: int) -> None:
        """Check that a display index refers to a task.

        Raises:
            TaskIndexError: If the index is below 1 or above size().
        """
        if index < 1 or index > len(self._tasks):
            if not self._tasks:
                raise TaskIndexError(
                    f"There isn't a task with index {index}, the list is empty!"
                )
            raise TaskIndexError(
                f"There isn't a task with index {index}! "
                f"Pick one between 1 and {len(self._tasks)}."
            )

    def get(self, index: int) -> Task:
        """Return the task at a display index.

        Raises:
            TaskIndexError: If the index is out of range.
        """
        self.check_index(index)
        return self._tasks[index - 1]

    def append(self, task: Task) -> None:
        self._tasks.append(task)

    def remove_at(self, index: int) -> Task:
        """Remove and return the task at a display index.

        Raises:
            TaskIndexError: If the index is out of range.
        """
        self.check_index(index)
        return self._tasks.pop(index - 1)

    def find_containing(self, substring: str) -> list[tuple[int, Task]]:
        """Find tasks whose description contains a substring.

        Matching is case-sensitive.

        Args:
            substring: Text to look for.

        Returns:
            (display index, task) pairs in list order; may be empty.
        """
        return [
            (index, task)
            for index, task in self.enumerated()
            if substring in task.description
        ]
