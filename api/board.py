"""Board endpoint: GET /api/board - filtered kanban columns plus counts and categories."""

from taskboard.services.board import build_board_view, load_board
from taskboard.services.category_service import get_category_service
from taskboard.services.task_filters import ALL
from taskboard.services.task_service import get_task_service
from taskboard.utils.http import error_response, handle_request, json_response, method_not_allowed

PREFIX = "/api/board"


async def _dispatch(method: str, segments: list[str], request: dict) -> dict:
    if segments:
        return error_response(404, "route not found", path=request.get("path"))
    if method != "GET":
        return method_not_allowed(method, ["GET"])

    snapshot = await load_board(get_task_service(), get_category_service())
    query = request.get("query") or {}
    view = build_board_view(
        snapshot,
        query=query.get("q", ""),
        category=query.get("category", ALL),
        status=query.get("status", ALL),
    )
    return json_response(200, view.to_json_dict())


def handler(request):
    """Handle a board API request."""
    return handle_request(request, PREFIX, _dispatch)
