"""Category models."""

from typing import Optional

from pydantic import Field

from taskboard.config import TaskboardConfig
from taskboard.models.base import CamelModel


class Category(CamelModel):
    """Category record. ``name`` is what tasks reference."""
    id: str = Field(..., description="Opaque unique identifier (ULID), immutable")
    name: str = Field(default="", description="Display label, referenced by Task.category")
    color: str = Field(default=TaskboardConfig.DEFAULT_CATEGORY_COLOR, description="Display color token")
    task_count: int = Field(default=0, ge=0, description="Denormalized task counter")


class CategoryCreate(CamelModel):
    """Fields a caller may supply when creating a category."""
    name: Optional[str] = None
    color: Optional[str] = None
    task_count: Optional[int] = Field(None, ge=0)


class CategoryUpdate(CamelModel):
    """Partial category update."""
    name: Optional[str] = None
    color: Optional[str] = None
    task_count: Optional[int] = Field(None, ge=0)
