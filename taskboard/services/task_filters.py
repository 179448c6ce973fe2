"""Pure projections over task collections: search/category/status filtering and column partitioning.

Nothing here touches the entity store; every function takes the tasks it works on
and returns new lists, so callers can re-run them on every keystroke.
"""

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Union

from pydantic import Field

from taskboard.models.base import CamelModel
from taskboard.models.task import Task, TaskStatus

# Wildcard accepted for the category and status criteria
ALL = "all"


class BoardColumns(CamelModel):
    """Tasks split into the three kanban columns, relative order preserved."""
    todo: list[Task] = Field(default_factory=list)
    in_progress: list[Task] = Field(default_factory=list)
    completed: list[Task] = Field(default_factory=list)

    def column(self, status: Union[TaskStatus, str]) -> list[Task]:
        return {
            TaskStatus.TODO: self.todo,
            TaskStatus.IN_PROGRESS: self.in_progress,
            TaskStatus.COMPLETED: self.completed,
        }[TaskStatus(status)]


class StatusCounts(CamelModel):
    """Column totals shown next to the status filters."""
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    completed: int = 0


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def matches_query(task: Task, query: Optional[str]) -> bool:
    """Case-insensitive substring match against title or description. Empty query matches."""
    needle = (query or "").lower()
    if not needle:
        return True
    return needle in (task.title or "").lower() or needle in (task.description or "").lower()


def matches_category(task: Task, category: Optional[str]) -> bool:
    if category is None or category == ALL:
        return True
    return task.category == category


def matches_status(task: Task, status: Union[TaskStatus, str, None]) -> bool:
    if status is None or status == ALL:
        return True
    return task.status == TaskStatus(status)


def filter_tasks(
    tasks: Iterable[Task],
    query: Optional[str] = "",
    category: Optional[str] = ALL,
    status: Union[TaskStatus, str, None] = ALL,
) -> list[Task]:
    """Return the tasks satisfying all three criteria, in input order.

    Raises ValueError for a status that is neither a known status nor ``all``.
    """
    if status is not None and status != ALL:
        status = TaskStatus(status)
    return [
        task for task in tasks
        if matches_query(task, query)
        and matches_category(task, category)
        and matches_status(task, status)
    ]


def partition_by_status(tasks: Iterable[Task]) -> BoardColumns:
    columns = BoardColumns()
    for task in tasks:
        columns.column(task.status).append(task)
    return columns


def status_counts(tasks: Iterable[Task]) -> StatusCounts:
    counts = Counter(task.status for task in tasks)
    return StatusCounts(
        total=sum(counts.values()),
        todo=counts[TaskStatus.TODO],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
    )


def count_by_category(tasks: Iterable[Task]) -> dict[str, int]:
    """Task totals keyed by category name, including names no category record carries."""
    return dict(Counter(task.category for task in tasks))


def is_overdue(task: Task, today: Optional[date] = None) -> bool:
    """A task is overdue when its due date has passed and it is not completed."""
    if task.status == TaskStatus.COMPLETED:
        return False
    return task.due_date < (today or _utc_today())


def due_label(due_date: Optional[date], today: Optional[date] = None) -> str:
    """Short due-date label: Today, Tomorrow, Overdue, or e.g. ``Oct 18``."""
    if due_date is None:
        return ""
    today = today or _utc_today()
    if due_date == today:
        return "Today"
    if due_date == today + timedelta(days=1):
        return "Tomorrow"
    if due_date < today:
        return "Overdue"
    return f"{due_date:%b} {due_date.day}"
