"""Shared pytest fixtures and configuration."""

import os

# Set test environment variables before taskboard config is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TASKBOARD_TASK_LATENCY_MS", "0")
os.environ.setdefault("TASKBOARD_CATEGORY_LATENCY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from freezegun import freeze_time

from taskboard.config import BUNDLED_SEED_DATA_DIR
from taskboard.services.category_service import CategoryService
from taskboard.services.entity_store import EntityStore, reset_entity_store
from taskboard.services.task_service import TaskService

FROZEN_NOW = "2026-10-18 12:00:00"


@pytest.fixture
def store():
    """Empty entity store, private to the test."""
    return EntityStore()


@pytest.fixture
def seeded_store():
    """Entity store loaded from the bundled seed data."""
    return EntityStore.from_seed_dir(BUNDLED_SEED_DATA_DIR)


@pytest.fixture
def task_service(store):
    return TaskService(store, latency_ms=0)


@pytest.fixture
def category_service(store):
    return CategoryService(store, latency_ms=0)


@pytest.fixture
def seeded_task_service(seeded_store):
    return TaskService(seeded_store, latency_ms=0)


@pytest.fixture
def seeded_category_service(seeded_store):
    return CategoryService(seeded_store, latency_ms=0)


@pytest.fixture(autouse=True)
def global_store(seeded_store):
    """Process-wide store used by the API handlers, rebuilt for every test."""
    reset_entity_store(seeded_store)
    yield seeded_store
    reset_entity_store(None)


@pytest.fixture
def sample_task_data():
    """Sample task creation payload (camelCase, as a client sends it)."""
    return {
        "title": "Ship report",
        "description": "Send the Q3 report to the leadership team",
        "category": "Work",
        "priority": "high",
        "dueDate": "2026-10-25",
    }


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time(FROZEN_NOW) as frozen_time:
        yield frozen_time
