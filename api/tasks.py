"""Task endpoints: /api/tasks[/{id}[/archive|unarchive|move]]."""

from taskboard.services.task_filters import ALL, filter_tasks
from taskboard.services.task_service import get_task_service
from taskboard.utils.errors import InvalidRequestError, TaskNotFoundError
from taskboard.utils.http import (
    error_response,
    handle_request,
    json_response,
    method_not_allowed,
    parse_json_body,
)

PREFIX = "/api/tasks"
TASK_ACTIONS = ("archive", "unarchive", "move")


async def _dispatch(method: str, segments: list[str], request: dict) -> dict:
    service = get_task_service()

    if not segments:
        if method == "GET":
            query = request.get("query") or {}
            tasks = filter_tasks(
                await service.get_all(),
                query=query.get("q", ""),
                category=query.get("category", ALL),
                status=query.get("status", ALL),
            )
            return json_response(200, {"tasks": [task.to_json_dict() for task in tasks]})
        if method == "POST":
            task = await service.create(parse_json_body(request))
            return json_response(201, task.to_json_dict())
        return method_not_allowed(method, ["GET", "POST"])

    task_id = segments[0]

    if len(segments) == 1:
        if method == "GET":
            task = await service.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            return json_response(200, task.to_json_dict())
        if method in ("PUT", "PATCH"):
            task = await service.update(task_id, parse_json_body(request))
            return json_response(200, task.to_json_dict())
        if method == "DELETE":
            task = await service.delete(task_id)
            return json_response(200, task.to_json_dict())
        return method_not_allowed(method, ["GET", "PUT", "PATCH", "DELETE"])

    if len(segments) == 2 and segments[1] in TASK_ACTIONS:
        if method != "POST":
            return method_not_allowed(method, ["POST"])
        action = segments[1]
        if action == "archive":
            task = await service.archive(task_id)
        elif action == "unarchive":
            task = await service.unarchive(task_id)
        else:
            status = parse_json_body(request).get("status")
            if not status:
                raise InvalidRequestError("move requires a status")
            task = await service.move(task_id, status)
        return json_response(200, task.to_json_dict())

    return error_response(404, "route not found", path=request.get("path"))


def handler(request):
    """Handle a task API request (Vercel-style request dict in, response dict out)."""
    return handle_request(request, PREFIX, _dispatch)
