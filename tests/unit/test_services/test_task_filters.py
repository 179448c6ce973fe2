"""Tests for task filtering and column projection."""

import pytest
from datetime import date
from taskboard.models.task import TaskStatus
from taskboard.services.task_filters import (
    ALL,
    count_by_category,
    due_label,
    filter_tasks,
    is_overdue,
    partition_by_status,
    status_counts,
)
from tests.fixtures.tasks import buy_eggs_completed, buy_milk_todo, kanban_tasks
from tests.utils.factories import build_task


TODAY = date(2026, 10, 18)


@pytest.mark.unit
def test_filter_by_query_and_status():
    """Test that query and status criteria combine with AND."""
    milk = buy_milk_todo()
    eggs = buy_eggs_completed()
    
    result = filter_tasks([milk, eggs], query="buy", status="todo")
    
    assert result == [milk]


@pytest.mark.unit
def test_query_is_case_insensitive_and_checks_description():
    tasks = kanban_tasks()
    
    result = filter_tasks(tasks, query="milk")
    
    assert [t.title for t in result] == ["Buy milk", "Fix login bug"]


@pytest.mark.unit
def test_empty_query_and_wildcards_match_everything():
    tasks = kanban_tasks()
    
    assert filter_tasks(tasks) == tasks
    assert filter_tasks(tasks, query=None, category=None, status=None) == tasks
    assert filter_tasks(tasks, query="", category=ALL, status=ALL) == tasks


@pytest.mark.unit
def test_filter_by_category_exact_match():
    tasks = kanban_tasks()
    
    assert [t.title for t in filter_tasks(tasks, category="Work")] == ["Write tests", "Fix login bug"]
    assert filter_tasks(tasks, category="work") == []


@pytest.mark.unit
def test_filter_handles_missing_description():
    task = build_task(title="No notes")
    task.description = None
    
    assert filter_tasks([task], query="notes") == [task]
    assert filter_tasks([task], query="missing") == []


@pytest.mark.unit
def test_filter_rejects_unknown_status():
    with pytest.raises(ValueError):
        filter_tasks(kanban_tasks(), status="blocked")


@pytest.mark.unit
def test_filter_does_not_mutate_input():
    tasks = kanban_tasks()
    snapshot = list(tasks)
    
    filter_tasks(tasks, query="buy", category="Shopping", status="todo")
    
    assert tasks == snapshot


@pytest.mark.unit
def test_partition_preserves_order():
    """Test that each column keeps the input's relative order."""
    tasks = kanban_tasks()
    
    columns = partition_by_status(tasks)
    
    assert [t.title for t in columns.todo] == ["Buy milk", "Renew passport"]
    assert [t.title for t in columns.in_progress] == ["Write tests", "Fix login bug"]
    assert [t.title for t in columns.completed] == ["Buy eggs"]
    assert columns.column("in-progress") == columns.in_progress


@pytest.mark.unit
def test_partition_of_empty_sequence():
    columns = partition_by_status([])
    
    assert columns.todo == [] and columns.in_progress == [] and columns.completed == []


@pytest.mark.unit
def test_partition_serializes_camel_case_columns():
    data = partition_by_status(kanban_tasks()).to_json_dict()
    
    assert set(data) == {"todo", "inProgress", "completed"}


@pytest.mark.unit
def test_status_counts():
    counts = status_counts(kanban_tasks())
    
    assert counts.total == 5
    assert counts.todo == 2
    assert counts.in_progress == 2
    assert counts.completed == 1


@pytest.mark.unit
def test_count_by_category():
    assert count_by_category(kanban_tasks()) == {"Work": 2, "Shopping": 2, "Personal": 1}


@pytest.mark.unit
def test_is_overdue():
    late = build_task(due_date=date(2026, 10, 17))
    due_today = build_task(due_date=TODAY)
    late_but_done = build_task(due_date=date(2026, 10, 1), status=TaskStatus.COMPLETED)
    
    assert is_overdue(late, today=TODAY) is True
    assert is_overdue(due_today, today=TODAY) is False
    assert is_overdue(late_but_done, today=TODAY) is False


@pytest.mark.unit
@pytest.mark.parametrize("due_date,expected", [
    (date(2026, 10, 18), "Today"),
    (date(2026, 10, 19), "Tomorrow"),
    (date(2026, 10, 2), "Overdue"),
    (date(2026, 11, 5), "Nov 5"),
    (None, ""),
])
def test_due_label(due_date, expected):
    assert due_label(due_date, today=TODAY) == expected
