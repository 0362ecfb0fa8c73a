"""Task entity module.

A task is one of three kinds:
- Todo: a plain description, rendered as `[T][ ] description`
- Deadline: a description due by some free text, `[D][ ] description (by: when)`
- Event: a description happening at some free text, `[E][ ] description (at: when)`

Completed tasks render `[X]` in the second box. A priority, when set, is
appended as `{priority: HIGH}`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

from mumbot.errors import FormatError, StorageError


class TaskKind(Enum):
    """Kind of a task, valued by its one-letter display code."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


class Priority(Enum):
    """Optional priority of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a priority name, ignoring case.

        Args:
            text: One of `low`, `medium` or `high`.

        Returns:
            The matching Priority.

        Raises:
            FormatError: If the text names no priority.
        """
        try:
            return cls(text.lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise FormatError(
                f"{text!r} is not a valid priority! Use one of: {names}"
            ) from None


# Label shown before the `when` text of each dated kind
WHEN_LABELS = {
    TaskKind.DEADLINE: "by",
    TaskKind.EVENT: "at",
}


@dataclass
class Task:
    """A single trackable item.

    Attributes:
        description: What has to be done. Never empty.
        kind: Todo, Deadline or Event.
        when: Due text for a Deadline, location/time text for an Event,
            None for a Todo.
        done: Whether the task is completed.
        priority: Optional priority, unset by default.
    """

    description: str
    kind: TaskKind = TaskKind.TODO
    when: str | None = None
    done: bool = False
    priority: Priority | None = None

    def __post_init__(self) -> None:
        if not self.description:
            raise ValueError("Task description must not be empty")
        if self.kind is TaskKind.TODO:
            if self.when is not None:
                raise ValueError("A todo task has no date")
        elif not self.when:
            raise ValueError(f"A {self.kind.name.lower()} task needs a date")

    @classmethod
    def todo(cls, description: str) -> Self:
        """Create a plain todo task."""
        return cls(description=description)

    @classmethod
    def deadline(cls, description: str, by: str) -> Self:
        """Create a task that is due by the given text."""
        return cls(description=description, kind=TaskKind.DEADLINE, when=by)

    @classmethod
    def event(cls, description: str, at: str) -> Self:
        """Create a task that happens at the given text."""
        return cls(description=description, kind=TaskKind.EVENT, when=at)

    def mark_done(self) -> None:
        self.done = True

    def mark_undone(self) -> None:
        self.done = False

    def set_priority(self, priority: Priority) -> None:
        self.priority = priority

    def render(self) -> str:
        """Render the task the way it is shown to the user.

        Returns:
            e.g. `[D][X] return book (by: Sunday) {priority: HIGH}`
        """
        status = "X" if self.done else " "
        line = f"[{self.kind.value}][{status}] {self.description}"
        if self.when is not None:
            line += f" ({WHEN_LABELS[self.kind]}: {self.when})"
        if self.priority is not None:
            line += f" {{priority: {self.priority.name}}}"
        return line

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        """Convert the Task to a dictionary for JSON serialization.

        Returns:
            A dictionary representation of the task.
        """
        return {
            "kind": self.kind.value,
            "description": self.description,
            "when": self.when,
            "done": self.done,
            "priority": self.priority.value if self.priority else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Rebuild a Task from its dictionary representation.

        Args:
            data: A dictionary produced by `to_dict`.

        Returns:
            The reconstructed Task.

        Raises:
            StorageError: If the record is malformed.
        """
        if not isinstance(data, dict):
            raise StorageError(f"Invalid task record {data!r}: not an object")

        description = data.get("description")
        when = data.get("when")
        done = data.get("done", False)
        if not isinstance(description, str):
            raise StorageError(f"Invalid task record {data!r}: bad description")
        if when is not None and not isinstance(when, str):
            raise StorageError(f"Invalid task record {data!r}: bad date")
        if not isinstance(done, bool):
            raise StorageError(f"Invalid task record {data!r}: bad done flag")

        try:
            priority = data.get("priority")
            return cls(
                description=description,
                kind=TaskKind(data.get("kind", TaskKind.TODO.value)),
                when=when,
                done=done,
                priority=Priority(priority) if priority is not None else None,
            )
        except (TypeError, ValueError) as e:
            raise StorageError(f"Invalid task record {data!r}: {e}") from e
