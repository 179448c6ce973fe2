"""Category endpoints: /api/categories[/{id}] and /api/categories/sync-counts."""

from taskboard.services.category_service import get_category_service
from taskboard.utils.errors import CategoryNotFoundError
from taskboard.utils.http import (
    error_response,
    handle_request,
    json_response,
    method_not_allowed,
    parse_json_body,
)

PREFIX = "/api/categories"
SYNC_COUNTS = "sync-counts"


async def _dispatch(method: str, segments: list[str], request: dict) -> dict:
    service = get_category_service()

    if not segments:
        if method == "GET":
            categories = await service.get_all()
            return json_response(200, {"categories": [c.to_json_dict() for c in categories]})
        if method == "POST":
            category = await service.create(parse_json_body(request))
            return json_response(201, category.to_json_dict())
        return method_not_allowed(method, ["GET", "POST"])

    if segments == [SYNC_COUNTS]:
        if method != "POST":
            return method_not_allowed(method, ["POST"])
        categories = await service.sync_task_counts()
        return json_response(200, {"categories": [c.to_json_dict() for c in categories]})

    if len(segments) == 1:
        category_id = segments[0]
        if method == "GET":
            category = await service.get(category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)
            return json_response(200, category.to_json_dict())
        if method in ("PUT", "PATCH"):
            category = await service.update(category_id, parse_json_body(request))
            return json_response(200, category.to_json_dict())
        if method == "DELETE":
            category = await service.delete(category_id)
            return json_response(200, category.to_json_dict())
        return method_not_allowed(method, ["GET", "PUT", "PATCH", "DELETE"])

    return error_response(404, "route not found", path=request.get("path"))


def handler(request):
    """Handle a category API request."""
    return handle_request(request, PREFIX, _dispatch)
