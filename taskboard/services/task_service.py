"""Task service - CRUD and derived queries over the entity store's tasks."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from taskboard.config import TaskboardConfig
from taskboard.models.base import coerce_model
from taskboard.models.task import Task, TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from taskboard.services.entity_store import EntityStore, generate_record_id, get_entity_store
from taskboard.utils.errors import TaskNotFoundError
from taskboard.utils.logging import get_structured_logger, sanitize_text, timed

logger = get_structured_logger(__name__)

TaskInput = Union[BaseModel, Mapping[str, Any], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_completed_at(
    status: Optional[TaskStatus],
    previous_status: Optional[TaskStatus],
    previous_completed_at: Optional[datetime],
    now: datetime,
) -> Optional[datetime]:
    """Completion timestamp for a task landing in ``status``.

    Entering ``completed`` stamps ``now``; staying ``completed`` keeps the
    existing stamp; any other status clears it.
    """
    if status != TaskStatus.COMPLETED:
        return None
    if previous_status == TaskStatus.COMPLETED and previous_completed_at is not None:
        return previous_completed_at
    return now


class TaskService:
    """Task operations. Every returned record is an independent copy."""

    def __init__(self, store: EntityStore, latency_ms: int = TaskboardConfig.TASK_LATENCY_MS):
        self.store = store
        self.latency_ms = latency_ms

    async def _simulate_latency(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def get_all(self) -> list[Task]:
        """Get all tasks in insertion order."""
        await self._simulate_latency()
        return self.store.tasks.snapshot()

    async def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID. Returns None when absent."""
        await self._simulate_latency()
        return self.store.tasks.find(task_id)

    @timed("task_service.create")
    async def create(self, task_data: TaskInput = None) -> Task:
        """
        Create a new task.

        Assigns a fresh ID and fills every omitted field with its default.
        Caller-supplied ``id``/``createdAt`` are ignored.
        """
        await self._simulate_latency()
        data = coerce_model(task_data, TaskCreate)
        now = utc_now()
        status = data.status or TaskStatus.TODO

        task = Task(
            id=generate_record_id(),
            title=data.title or "",
            description=data.description or "",
            category=data.category or TaskboardConfig.DEFAULT_CATEGORY,
            priority=data.priority or TaskPriority.MEDIUM,
            status=status,
            due_date=data.due_date or now.date(),
            created_at=now,
            completed_at=resolve_completed_at(status, None, None, now),
            archived=data.archived,
        )

        self.store.tasks.append(task)
        logger.info(
            "Task created",
            task_id=task.id,
            title=sanitize_text(task.title, max_length=100),
            status=task.status.value,
            category=task.category,
            total_tasks=len(self.store.tasks)
        )
        return task.model_copy(deep=True)

    @timed("task_service.update")
    async def update(self, task_id: str, update_data: TaskInput) -> Task:
        """
        Update an existing task.

        Supplied fields override stored ones; ``id`` and ``createdAt`` never change
        and ``completedAt`` is derived from the resulting status.
        Raises TaskNotFoundError if the task does not exist.
        """
        await self._simulate_latency()
        changes = coerce_model(update_data, TaskUpdate).model_dump(exclude_unset=True)

        index = self.store.tasks.index_of(task_id)
        if index == -1:
            logger.warning("Task update failed: not found", task_id=task_id)
            raise TaskNotFoundError(task_id)

        return self._apply_update(index, changes)

    def _apply_update(self, index: int, changes: dict[str, Any]) -> Task:
        """Merge ``changes`` over the task at ``index`` and write it back."""
        current = self.store.tasks.at(index)
        merged = {**current.model_dump(), **changes}
        merged["id"] = current.id
        merged["created_at"] = current.created_at
        merged["completed_at"] = resolve_completed_at(
            merged.get("status"), current.status, current.completed_at, utc_now()
        )

        # Validation happens before the store is touched
        updated = Task.model_validate(merged)
        self.store.tasks.replace(index, updated)

        logger.info(
            "Task updated",
            task_id=current.id,
            fields=sorted(changes),
            status=updated.status.value,
            previous_status=current.status.value
        )
        return updated.model_copy(deep=True)

    async def delete(self, task_id: str) -> Task:
        """Delete a task and return the removed record."""
        await self._simulate_latency()

        index = self.store.tasks.index_of(task_id)
        if index == -1:
            logger.warning("Task delete failed: not found", task_id=task_id)
            raise TaskNotFoundError(task_id)

        deleted = self.store.tasks.pop(index)
        logger.info("Task deleted", task_id=task_id, total_tasks=len(self.store.tasks))
        return deleted.model_copy(deep=True)

    async def list_by_category(self, category: str) -> list[Task]:
        """Tasks whose category name matches exactly (archived included)."""
        await self._simulate_latency()
        return [task for task in self.store.tasks.snapshot() if task.category == category]

    async def list_by_status(self, status: Union[TaskStatus, str]) -> list[Task]:
        """Tasks in the given status (archived included)."""
        await self._simulate_latency()
        status = TaskStatus(status)
        return [task for task in self.store.tasks.snapshot() if task.status == status]

    async def archive(self, task_id: str) -> Task:
        return await self.update(task_id, {"archived": True})

    async def unarchive(self, task_id: str) -> Task:
        return await self.update(task_id, {"archived": False})

    async def move(self, task_id: str, status: Union[TaskStatus, str]) -> Task:
        """
        Move a task to another column.

        Moving onto the column the task is already in writes nothing. The
        lookup, comparison and write run without yielding to the event loop.
        """
        status = TaskStatus(status)
        await self._simulate_latency()

        index = self.store.tasks.index_of(task_id)
        if index == -1:
            logger.warning("Task move failed: not found", task_id=task_id, status=status.value)
            raise TaskNotFoundError(task_id)

        current = self.store.tasks.at(index)
        if current.status == status:
            return current

        return self._apply_update(index, {"status": status})


def get_task_service() -> TaskService:
    """Task service bound to the process-wide entity store."""
    return TaskService(get_entity_store())
