"""Task list tests."""

import pytest

from mumbot.errors import TaskIndexError
from mumbot.task import Task
from mumbot.tasklist import TaskList


class TestTaskList:
    """Tests for TaskList indexing and search."""

    @pytest.fixture
    def tasks(self) -> TaskList:
        return TaskList(
            [Task.todo("read book"), Task.todo("buy milk"), Task.todo("Book club")]
        )

    def test_size_and_append(self) -> None:
        tasks = TaskList()
        assert tasks.size() == 0
        tasks.append(Task.todo("a"))
        tasks.append(Task.todo("b"))
        assert tasks.size() == 2
        assert len(tasks) == 2
        assert [t.description for t in tasks] == ["a", "b"]

    def test_get_is_one_based(self, tasks: TaskList) -> None:
        assert tasks.get(1).description == "read book"
        assert tasks.get(3).description == "Book club"

    @pytest.mark.parametrize("index", [0, -1, 4])
    def test_get_out_of_range(self, tasks: TaskList, index: int) -> None:
        with pytest.raises(TaskIndexError):
            tasks.get(index)

    def test_index_error_is_builtin_index_error(self, tasks: TaskList) -> None:
        with pytest.raises(IndexError):
            tasks.get(10)

    def test_empty_list_message(self) -> None:
        with pytest.raises(TaskIndexError, match="empty"):
            TaskList().get(1)

    def test_remove_at_shifts(self, tasks: TaskList) -> None:
        removed = tasks.remove_at(1)

        assert removed.description == "read book"
        assert tasks.size() == 2
        assert tasks.get(1).description == "buy milk"
        assert tasks.get(2).description == "Book club"

    def test_remove_at_out_of_range_keeps_tasks(self, tasks: TaskList) -> None:
        with pytest.raises(TaskIndexError):
            tasks.remove_at(0)
        assert tasks.size() == 3

    def test_find_is_case_sensitive_and_ordered(self, tasks: TaskList) -> None:
        matches = tasks.find_containing("book")

        assert [(i, t.description) for i, t in matches] == [(1, "read book")]
        assert [i for i, _ in tasks.find_containing("o")] == [1, 3]

    def test_find_no_match(self, tasks: TaskList) -> None:
        assert tasks.find_containing("tea") == []

    def test_enumerated(self, tasks: TaskList) -> None:
        assert [i for i, _ in tasks.enumerated()] == [1, 2, 3]
