"""Command variants and their execution.

Each command is a frozen dataclass holding already-validated arguments.
Commands never keep a reference to the task list: `execute` borrows it for
the duration of one command and returns a Reply.
"""

import logging
from dataclasses import dataclass

from mumbot.task import Priority, Task, TaskKind
from mumbot.tasklist import TaskList

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reply:
    """Outcome of one input line.

    Attributes:
        response: Text to show the user.
        keep_running: False when the session should stop asking for input.
        error: True when the line was rejected.
    """

    response: str
    keep_running: bool = True
    error: bool = False


@dataclass(frozen=True)
class ByeCommand:
    pass


@dataclass(frozen=True)
class ListCommand:
    pass


@dataclass(frozen=True)
class MarkCommand:
    index: int
    done: bool


@dataclass(frozen=True)
class AddTaskCommand:
    kind: TaskKind
    description: str
    when: str | None = None


@dataclass(frozen=True)
class FindCommand:
    term: str


@dataclass(frozen=True)
class DeleteCommand:
    index: int


@dataclass(frozen=True)
class PriorityCommand:
    index: int
    priority: Priority


Command = (
    ByeCommand
    | ListCommand
    | MarkCommand
    | AddTaskCommand
    | FindCommand
    | DeleteCommand
    | PriorityCommand
)


def _count(tasks: TaskList) -> str:
    noun = "task" if tasks.size() == 1 else "tasks"
    return f"Now you have {tasks.size()} {noun} in the list."


def _numbered(pairs: list[tuple[int, Task]]) -> str:
    return "\n".join(f"{index}. {task}" for index, task in pairs)


def execute(command: Command, tasks: TaskList) -> Reply:
    """Run a command against the task list.

    Index preconditions are checked again here, so a command built against
    a longer list fails with TaskIndexError without touching anything.

    Args:
        command: A validated command.
        tasks: The task list, borrowed for this call only.

    Returns:
        The reply for the user.

    Raises:
        TaskIndexError: If the command refers to a task that does not exist.
    """
    logger.debug("Executing %r", command)

    match command:
        case ByeCommand():
            return Reply(
                "Bye! Don't forget to finish your chores!", keep_running=False
            )

        case ListCommand():
            if not tasks.size():
                return Reply("Your list is empty. Enjoy the free time!")
            return Reply(
                "Here are the tasks in your list:\n"
                + _numbered(list(tasks.enumerated()))
            )

        case MarkCommand(index=index, done=done):
            task = tasks.get(index)
            if done:
                task.mark_done()
                return Reply(f"Good job! I've marked this task as done:\n  {task}")
            task.mark_undone()
            return Reply(f"OK, I've marked this task as not done yet:\n  {task}")

        case AddTaskCommand(kind=kind, description=description, when=when):
            task = Task(description=description, kind=kind, when=when)
            tasks.append(task)
            return Reply(f"Got it. I've added this task:\n  {task}\n{_count(tasks)}")

        case FindCommand(term=term):
            matches = tasks.find_containing(term)
            if not matches:
                return Reply(f"No tasks match {term!r}.")
            return Reply(
                "Here are the matching tasks in your list:\n" + _numbered(matches)
            )

        case DeleteCommand(index=index):
            removed = tasks.remove_at(index)
            return Reply(f"I've removed this task:\n  {removed}\n{_count(tasks)}")

        case PriorityCommand(index=index, priority=priority):
            task = tasks.get(index)
            task.set_priority(priority)
            return Reply(
                f"I've set the priority of this task to {priority.name}:\n  {task}"
            )

    raise TypeError(f"Unsupported command: {command!r}")
