"""Task models."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from taskboard.config import TaskboardConfig
from taskboard.models.base import CamelModel


class TaskStatus(str, Enum):
    """Kanban column a task sits in. Every transition between them is allowed."""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(CamelModel):
    """Task record as held by the entity store."""
    id: str = Field(..., description="Opaque unique identifier (ULID), immutable")
    title: str = Field(default="", description="Display title")
    description: Optional[str] = Field(default="", description="Free text description")
    category: str = Field(
        default=TaskboardConfig.DEFAULT_CATEGORY,
        description="Category name (soft reference, not validated)"
    )
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Priority: low, medium, high")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Status: todo, in-progress, completed")
    due_date: date = Field(..., description="Due date (no time component)")
    created_at: datetime = Field(..., description="Creation timestamp, never overwritten")
    completed_at: Optional[datetime] = Field(None, description="Set iff status is completed")
    archived: bool = Field(default=False, description="Soft-delete flag")

    @model_validator(mode="after")
    def check_completed_at(self) -> "Task":
        if (self.completed_at is not None) != (self.status == TaskStatus.COMPLETED):
            raise ValueError("completedAt must be set exactly when status is completed")
        return self


class TaskCreate(CamelModel):
    """Fields a caller may supply when creating a task. Omitted fields get defaults."""
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    archived: bool = False


class TaskUpdate(CamelModel):
    """Partial task update; only explicitly supplied fields are merged.

    ``id``, ``createdAt`` and ``completedAt`` are not accepted here: identity and
    creation time are fixed, and the completion timestamp follows ``status``.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    archived: Optional[bool] = None
