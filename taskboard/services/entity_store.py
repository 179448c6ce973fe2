"""In-memory entity store holding the task and category collections."""

import json
import logging
from pathlib import Path
from typing import Generic, Iterable, Optional, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError
from ulid import ULID

from taskboard.config import TaskboardConfig
from taskboard.models.category import Category
from taskboard.models.task import Task
from taskboard.utils.errors import SeedDataError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

TASKS_SEED_FILE = "tasks.json"
CATEGORIES_SEED_FILE = "categories.json"


def generate_record_id() -> str:
    """Generate a text-based record ID (ULID format)."""
    return str(ULID())


class RecordCollection(Generic[RecordT]):
    """Ordered collection of records keyed by ``id``.

    Records are copied on the way in and on the way out, so nothing a caller
    holds aliases store state.
    """

    def __init__(self, records: Optional[Iterable[RecordT]] = None):
        self._records: list[RecordT] = [r.model_copy(deep=True) for r in records or []]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return self.index_of(record_id) != -1

    def snapshot(self) -> list[RecordT]:
        return [r.model_copy(deep=True) for r in self._records]

    def index_of(self, record_id: object) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return -1

    def find(self, record_id: object) -> Optional[RecordT]:
        index = self.index_of(record_id)
        if index == -1:
            return None
        return self.at(index)

    def at(self, index: int) -> RecordT:
        return self._records[index].model_copy(deep=True)

    def append(self, record: RecordT) -> None:
        self._records.append(record.model_copy(deep=True))

    def replace(self, index: int, record: RecordT) -> None:
        self._records[index] = record.model_copy(deep=True)

    def pop(self, index: int) -> RecordT:
        return self._records.pop(index)

    def clear(self) -> None:
        self._records.clear()


class EntityStore:
    """Authoritative task and category collections.

    Constructed once and injected into the services; tests build their own.
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        categories: Optional[Iterable[Category]] = None,
    ):
        self.tasks: RecordCollection[Task] = RecordCollection(tasks)
        self.categories: RecordCollection[Category] = RecordCollection(categories)

    @classmethod
    def from_seed_dir(cls, seed_dir: Union[str, Path]) -> "EntityStore":
        """Build a store from ``tasks.json`` and ``categories.json`` in ``seed_dir``."""
        seed_dir = Path(seed_dir)
        tasks = _load_seed_file(seed_dir / TASKS_SEED_FILE, Task)
        categories = _load_seed_file(seed_dir / CATEGORIES_SEED_FILE, Category)
        logger.info(
            "Entity store seeded",
            extra={"seed_dir": str(seed_dir), "tasks": len(tasks), "categories": len(categories)}
        )
        return cls(tasks=tasks, categories=categories)

    def clear(self) -> None:
        self.tasks.clear()
        self.categories.clear()


def _load_seed_file(path: Path, model_cls: type[RecordT]) -> list[RecordT]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SeedDataError(f"Seed file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SeedDataError(f"Seed file is not valid JSON: {path}: {e}") from e

    try:
        return TypeAdapter(list[model_cls]).validate_python(raw)
    except ValidationError as e:
        raise SeedDataError(f"Seed file has invalid records: {path}: {e}") from e


# Global store instance (singleton pattern)
_store: Optional[EntityStore] = None


def get_entity_store() -> EntityStore:
    """Get or create the process-wide entity store."""
    global _store

    if _store is None:
        if TaskboardConfig.LOAD_SEED_DATA:
            _store = EntityStore.from_seed_dir(TaskboardConfig.SEED_DATA_DIR)
        else:
            _store = EntityStore()
            logger.info("Entity store initialized empty")

    return _store


def reset_entity_store(store: Optional[EntityStore] = None) -> None:
    """Replace (or drop) the process-wide store. The next access rebuilds it if dropped."""
    global _store
    _store = store
