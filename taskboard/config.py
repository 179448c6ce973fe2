"""Service configuration with environment variable support."""

import os
from pathlib import Path


BUNDLED_SEED_DATA_DIR = Path(__file__).parent / "data"


class TaskboardConfig:
    """Centralized service configuration."""

    # Simulated backend latency (the store is in-memory, callers still await)
    TASK_LATENCY_MS = int(os.environ.get("TASKBOARD_TASK_LATENCY_MS", "0"))
    CATEGORY_LATENCY_MS = int(os.environ.get("TASKBOARD_CATEGORY_LATENCY_MS", "0"))

    # Seed data
    SEED_DATA_DIR = Path(os.environ.get("TASKBOARD_SEED_DATA_DIR", str(BUNDLED_SEED_DATA_DIR)))
    LOAD_SEED_DATA = os.environ.get("TASKBOARD_LOAD_SEED_DATA", "true").lower() == "true"

    # Record defaults
    DEFAULT_CATEGORY = "General"
    DEFAULT_CATEGORY_COLOR = "#3B82F6"
