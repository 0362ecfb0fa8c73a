"""Command-line parsing and dispatch.

Grammar (tokens are separated by single spaces, keywords are case-sensitive):
- `Bye`
- `list`
- `mark <index>` / `unmark <index>` / `delete <index>`
- `find <term>`
- `todo <description>`
- `deadline <description> /by <date>`
- `event <description> /at <place or time>`
- `priority <index> <low|medium|high>`

All validation happens here, before a command is built, so a rejected line
never changes the task list. A description that itself contains the
delimiter of its keyword is rejected as badly formatted.
"""

import logging
import re
import threading

from mumbot.commands import (
    AddTaskCommand,
    ByeCommand,
    Command,
    DeleteCommand,
    FindCommand,
    ListCommand,
    MarkCommand,
    PriorityCommand,
    Reply,
    execute,
)
from mumbot.errors import (
    FormatError,
    MumbotError,
    TaskIndexError,
    UnknownCommandError,
)
from mumbot.task import Priority, TaskKind
from mumbot.tasklist import TaskList

logger = logging.getLogger(__name__)

KEYWORDS = (
    "todo",
    "deadline",
    "event",
    "mark",
    "unmark",
    "list",
    "priority",
    "find",
    "delete",
    "Bye",
)

# Delimiter between description and date for each dated keyword
DELIMITERS = {
    "deadline": " /by ",
    "event": " /at ",
}

TASK_KINDS = {
    "todo": TaskKind.TODO,
    "deadline": TaskKind.DEADLINE,
    "event": TaskKind.EVENT,
}

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

HELP_TEXT = (
    "Your input is not recognised :(. It has to start with a command "
    f"({', '.join(KEYWORDS)})"
)


def _index_usage(keyword: str) -> FormatError:
    return FormatError(
        f"Your formatting for the {keyword} command is wrong!\n"
        f"In future, please do: {keyword} <index of task>"
    )


def _parse_index(keyword: str, token: str, tasks: TaskList) -> int:
    """Parse a display index token and check it against the list.

    Raises:
        TaskIndexError: If the token is not an integer or out of range.
    """
    if not INTEGER_PATTERN.match(token):
        raise TaskIndexError(
            f"Index was not properly specified (has to be an integer) "
            f"for your {keyword} command!"
        )
    index = int(token)
    tasks.check_index(index)
    return index


def _parse_task(keyword: str, tokens: list[str]) -> AddTaskCommand:
    details = " ".join(tokens[1:])
    kind = TASK_KINDS[keyword]

    if kind is TaskKind.TODO:
        description = details.strip()
        if not description:
            raise FormatError("Your todo command has no description!")
        return AddTaskCommand(kind, description)

    delimiter = DELIMITERS[keyword]
    parts = [part.strip() for part in details.split(delimiter)]
    if len(parts) != 2 or not all(parts):
        raise FormatError(
            f"Your {keyword} command does not follow proper formatting!\n"
            f"A {keyword} command should follow this convention:\n"
            f"{keyword} <task description>{delimiter}<date description>"
        )
    description, when = parts
    return AddTaskCommand(kind, description, when)


def parse(line: str, tasks: TaskList) -> Command:
    """Translate one input line into a validated command.

    Args:
        line: Raw user input.
        tasks: The task list the command will run against, used for
            index range checks only.

    Returns:
        The command to execute.

    Raises:
        FormatError: If the arguments do not fit the keyword.
        TaskIndexError: If an index is not an integer or out of range.
        UnknownCommandError: If the keyword is not recognised.
    """
    tokens = line.split(" ")
    keyword = tokens[0]
    logger.debug("Parsing %r command with %d argument(s)", keyword, len(tokens) - 1)

    if keyword == "Bye":
        return ByeCommand()

    if keyword == "list":
        if len(tokens) != 1:
            raise FormatError(
                "Your formatting for the list command is wrong - "
                "please just type list!"
            )
        return ListCommand()

    if keyword in ("mark", "unmark", "delete"):
        if len(tokens) != 2:
            raise _index_usage(keyword)
        index = _parse_index(keyword, tokens[1], tasks)
        if keyword == "delete":
            return DeleteCommand(index)
        return MarkCommand(index, done=keyword == "mark")

    if keyword in TASK_KINDS:
        return _parse_task(keyword, tokens)

    if keyword == "find":
        if len(tokens) != 2 or not tokens[1]:
            raise FormatError(
                "Your formatting for the find command is wrong!\n"
                "In future, please do: find <search string>"
            )
        return FindCommand(tokens[1])

    if keyword == "priority":
        if len(tokens) != 3:
            raise FormatError(
                "Your formatting for the priority command is wrong!\n"
                "In future, please do: priority <index of task> <low|medium|high>"
            )
        index = _parse_index(keyword, tokens[1], tasks)
        return PriorityCommand(index, Priority.parse(tokens[2]))

    raise UnknownCommandError(keyword)


def handle(line: str, tasks: TaskList) -> Reply:
    """Parse and execute one input line.

    Errors caused by the input are returned as replies, never raised.

    Args:
        line: Raw user input.
        tasks: The task list to read and mutate.

    Returns:
        The reply for the user.
    """
    try:
        command = parse(line, tasks)
        return execute(command, tasks)
    except UnknownCommandError as e:
        logger.debug("Unknown keyword %r", e.keyword)
        return Reply(HELP_TEXT, error=True)
    except MumbotError as e:
        logger.debug("Rejected %r: %s", line, e)
        return Reply(str(e), error=True)


class Session:
    """Owns a task list and runs input lines against it one at a time.

    Attributes:
        tasks: The task list this session mutates.
    """

    def __init__(self, tasks: TaskList | None = None) -> None:
        self.tasks = tasks if tasks is not None else TaskList()
        self._lock = threading.Lock()

    def handle(self, line: str) -> Reply:
        """Parse and execute one input line under the session lock."""
        with self._lock:
            return handle(line, self.tasks)
