"""Category service - CRUD over the entity store's categories."""

import asyncio
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from taskboard.config import TaskboardConfig
from taskboard.models.base import coerce_model
from taskboard.models.category import Category, CategoryCreate, CategoryUpdate
from taskboard.services.entity_store import EntityStore, generate_record_id, get_entity_store
from taskboard.services.task_filters import count_by_category
from taskboard.utils.errors import CategoryNotFoundError
from taskboard.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

CategoryInput = Union[BaseModel, Mapping[str, Any], None]


class CategoryService:
    """Category operations.

    ``taskCount`` is stored metadata: task writes never touch it. Call
    ``sync_task_counts`` to recompute it from the current tasks.
    Deleting a category leaves tasks that reference its name untouched.
    """

    def __init__(self, store: EntityStore, latency_ms: int = TaskboardConfig.CATEGORY_LATENCY_MS):
        self.store = store
        self.latency_ms = latency_ms

    async def _simulate_latency(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def get_all(self) -> list[Category]:
        await self._simulate_latency()
        return self.store.categories.snapshot()

    async def get(self, category_id: str) -> Optional[Category]:
        await self._simulate_latency()
        return self.store.categories.find(category_id)

    async def create(self, category_data: CategoryInput = None) -> Category:
        """Create a new category with a fresh ID and default color/count."""
        await self._simulate_latency()
        data = coerce_model(category_data, CategoryCreate)

        category = Category(
            id=generate_record_id(),
            name=data.name or "",
            color=data.color or TaskboardConfig.DEFAULT_CATEGORY_COLOR,
            task_count=data.task_count or 0,
        )

        self.store.categories.append(category)
        logger.info(
            "Category created",
            category_id=category.id,
            category_name=category.name,
            total_categories=len(self.store.categories)
        )
        return category.model_copy(deep=True)

    async def update(self, category_id: str, update_data: CategoryInput) -> Category:
        """Merge supplied fields over the stored category. ID never changes."""
        await self._simulate_latency()
        changes = coerce_model(update_data, CategoryUpdate).model_dump(exclude_unset=True)

        index = self.store.categories.index_of(category_id)
        if index == -1:
            logger.warning("Category update failed: not found", category_id=category_id)
            raise CategoryNotFoundError(category_id)

        current = self.store.categories.find(category_id)
        merged = {**current.model_dump(), **changes, "id": current.id}
        updated = Category.model_validate(merged)
        self.store.categories.replace(index, updated)

        logger.info("Category updated", category_id=category_id, fields=sorted(changes))
        return updated.model_copy(deep=True)

    async def delete(self, category_id: str) -> Category:
        """Delete a category and return the removed record. Tasks are not cascaded."""
        await self._simulate_latency()

        index = self.store.categories.index_of(category_id)
        if index == -1:
            logger.warning("Category delete failed: not found", category_id=category_id)
            raise CategoryNotFoundError(category_id)

        deleted = self.store.categories.pop(index)
        logger.info(
            "Category deleted",
            category_id=category_id,
            category_name=deleted.name,
            total_categories=len(self.store.categories)
        )
        return deleted.model_copy(deep=True)

    async def sync_task_counts(self) -> list[Category]:
        """Recompute every category's ``taskCount`` from the tasks referencing its name."""
        await self._simulate_latency()
        counts = count_by_category(self.store.tasks.snapshot())

        for index, category in enumerate(self.store.categories.snapshot()):
            refreshed = category.model_copy(update={"task_count": counts.get(category.name, 0)})
            self.store.categories.replace(index, refreshed)

        orphaned = sorted(set(counts) - {c.name for c in self.store.categories.snapshot()})
        if orphaned:
            logger.info("Tasks reference unknown categories", categories=orphaned)

        logger.info("Category task counts synced", categories=len(self.store.categories))
        return self.store.categories.snapshot()


def get_category_service() -> CategoryService:
    """Category service bound to the process-wide entity store."""
    return CategoryService(get_entity_store())
