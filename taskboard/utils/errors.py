"""Error handling utilities."""

from typing import Optional


class TaskboardError(Exception):
    """Base exception for the taskboard backend."""
    pass


class NotFoundError(TaskboardError):
    """Requested record does not exist in the entity store."""

    entity = "record"

    def __init__(self, entity_id: str, message: Optional[str] = None):
        self.entity_id = entity_id
        super().__init__(message or f"{self.entity.capitalize()} not found: {entity_id}")


class TaskNotFoundError(NotFoundError):
    """Task lookup by id failed."""
    entity = "task"


class CategoryNotFoundError(NotFoundError):
    """Category lookup by id failed."""
    entity = "category"


class SeedDataError(TaskboardError):
    """Seed data file missing or malformed."""
    pass


class InvalidRequestError(TaskboardError):
    """Request body or parameters could not be understood."""
    pass
