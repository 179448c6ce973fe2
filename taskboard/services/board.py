"""Board loading - fetch tasks and categories together and derive the column view."""

import asyncio
from typing import Optional, Union

from pydantic import Field

from taskboard.models.base import CamelModel
from taskboard.models.category import Category
from taskboard.models.task import Task, TaskStatus
from taskboard.services.category_service import CategoryService
from taskboard.services.task_filters import (
    ALL,
    BoardColumns,
    StatusCounts,
    filter_tasks,
    partition_by_status,
    status_counts,
)
from taskboard.services.task_service import TaskService
from taskboard.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


class BoardSnapshot(CamelModel):
    """Full collections as fetched at startup. No cross-validation between them."""
    tasks: list[Task] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)


class BoardView(CamelModel):
    """What the board renders for one set of filter criteria."""
    columns: BoardColumns
    counts: StatusCounts
    categories: list[Category] = Field(default_factory=list)


async def load_board(task_service: TaskService, category_service: CategoryService) -> BoardSnapshot:
    """Fetch the task and category collections concurrently."""
    with log_timing("load_board", logger=logger):
        tasks, categories = await asyncio.gather(
            task_service.get_all(),
            category_service.get_all(),
        )

    logger.info("Board loaded", tasks=len(tasks), categories=len(categories))
    return BoardSnapshot(tasks=tasks, categories=categories)


def build_board_view(
    snapshot: BoardSnapshot,
    query: Optional[str] = "",
    category: Optional[str] = ALL,
    status: Union[TaskStatus, str, None] = ALL,
) -> BoardView:
    """Filter the snapshot and split it into columns.

    Column counts follow the filtered columns; ``total`` is the whole collection.
    """
    visible = filter_tasks(snapshot.tasks, query=query, category=category, status=status)
    counts = status_counts(visible)
    counts.total = len(snapshot.tasks)
    return BoardView(
        columns=partition_by_status(visible),
        counts=counts,
        categories=snapshot.categories,
    )
