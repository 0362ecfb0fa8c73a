"""Exception types raised while parsing and executing commands.

Every error carries a user-facing message; the dispatcher turns them into
replies instead of letting them end the session.
"""


class MumbotError(Exception):
    """Base class for all mumbot errors."""


class FormatError(MumbotError, ValueError):
    """A command line does not follow the convention for its keyword."""


class TaskIndexError(MumbotError, IndexError):
    """A display index is not an integer or does not refer to a task."""


class UnknownCommandError(MumbotError):
    """The keyword is not part of the command vocabulary.

    Attributes:
        keyword: The unrecognised first token of the input line.
    """

    def __init__(self, keyword: str) -> None:
        super().__init__(f"Unknown command: {keyword!r}")
        self.keyword = keyword


class StorageError(MumbotError):
    """The task file contains a record that cannot be loaded."""
