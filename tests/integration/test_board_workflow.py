"""End-to-end task lifecycle through the services and the HTTP handlers."""

import pytest
from datetime import date, datetime, timezone
from freezegun import freeze_time
from api.board import handler as board_handler
from api.tasks import handler as tasks_handler
from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.services.board import build_board_view, load_board
from taskboard.utils.errors import TaskNotFoundError
from tests.utils.assertions import assert_valid_response, assert_valid_task
from tests.utils.helpers import create_request, response_json


@pytest.mark.integration
@pytest.mark.asyncio
async def test_ship_report_lifecycle(task_service):
    """Create, complete and delete a task, checking the canonical record at each step."""
    with freeze_time("2026-10-18 09:00:00"):
        created = await task_service.create({"title": "Ship report"})
    
    assert created.priority == TaskPriority.MEDIUM
    assert created.status == TaskStatus.TODO
    assert created.due_date == date(2026, 10, 18)
    assert created.category == "General"
    
    with freeze_time("2026-10-18 17:30:00"):
        completed = await task_service.update(created.id, {"status": "completed"})
    
    assert completed.status == TaskStatus.COMPLETED
    assert completed.completed_at == datetime(2026, 10, 18, 17, 30, tzinfo=timezone.utc)
    assert_valid_task(completed)
    
    deleted = await task_service.delete(created.id)
    
    assert deleted == completed
    assert await task_service.get(created.id) is None
    with pytest.raises(TaskNotFoundError):
        await task_service.delete(created.id)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_status_round_trip_keeps_invariant(task_service):
    """Walk a task through every column in both directions."""
    task = await task_service.create({"title": "Round trip"})
    
    for status in ["in-progress", "completed", "in-progress", "todo", "completed", "todo"]:
        task = await task_service.move(task.id, status)
        assert task.status == TaskStatus(status)
        assert_valid_task(task)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_board_reflects_writes(seeded_task_service, seeded_category_service):
    task = await seeded_task_service.create({"title": "Buy milk", "category": "Shopping"})
    await seeded_task_service.move(task.id, "in-progress")
    
    snapshot = await load_board(seeded_task_service, seeded_category_service)
    view = build_board_view(snapshot, query="buy")
    
    assert [t.title for t in view.columns.todo] == ["Buy groceries"]
    assert [t.title for t in view.columns.in_progress] == ["Buy milk"]
    assert view.counts.total == 8


@pytest.mark.integration
def test_handlers_share_the_store():
    """Writes through the task endpoint show up on the board endpoint."""
    created = tasks_handler(create_request("POST", "/api/tasks", body={"title": "Water plants", "category": "Home"}))
    assert_valid_response(created, 201)
    task_id = response_json(created)["id"]
    
    moved = tasks_handler(create_request("POST", f"/api/tasks/{task_id}/move", body={"status": "completed"}))
    assert_valid_response(moved, 200)
    
    board = response_json(board_handler(create_request("GET", "/api/board", query={"category": "Home"})))
    assert [t["id"] for t in board["columns"]["completed"]] == [task_id]
    assert board["counts"]["total"] == 8
