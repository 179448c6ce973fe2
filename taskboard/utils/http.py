"""Request/response plumbing shared by the serverless handlers in ``api/``."""

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional

from taskboard.utils.errors import InvalidRequestError, NotFoundError
from taskboard.utils.logging import correlation_context, get_structured_logger
from taskboard.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

Dispatcher = Callable[[str, list[str], dict], Awaitable[dict]]


def json_response(status_code: int, payload: Any) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(payload),
    }


def error_response(status_code: int, message: str, **fields: Any) -> dict:
    return json_response(status_code, {"error": message, **fields})


def get_header(request: dict, name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    headers = request.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def parse_json_body(request: dict) -> dict:
    """Decode the request body into a dict. Empty bodies decode to ``{}``."""
    body = request.get("body")
    if body is None or body == "":
        return {}
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise InvalidRequestError(f"Request body is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


def path_segments(path: Optional[str], prefix: str) -> Optional[list[str]]:
    """Segments after ``prefix`` (query string stripped), or None if the path is outside it."""
    path = (path or "").split("?", 1)[0].rstrip("/")
    prefix = prefix.rstrip("/")
    if path != prefix and not path.startswith(prefix + "/"):
        return None
    return [segment for segment in path[len(prefix):].split("/") if segment]


def handle_request(request: dict, prefix: str, dispatch: Dispatcher) -> dict:
    """
    Run ``dispatch`` for a request under ``prefix`` and map errors to responses.

    NotFoundError -> 404, malformed input -> 400, anything else -> 500.
    """
    method = (request.get("method") or "GET").upper()
    segments = path_segments(request.get("path"), prefix)
    if segments is None:
        return error_response(404, "route not found", path=request.get("path"))

    with correlation_context(get_header(request, LoggingConfig.LOG_CORRELATION_ID_HEADER)) as correlation_id:
        try:
            response = asyncio.run(dispatch(method, segments, request))
        except NotFoundError as e:
            response = error_response(404, str(e), id=e.entity_id)
        except (InvalidRequestError, ValueError) as e:
            # pydantic.ValidationError is a ValueError
            logger.warning("Rejected request", method=method, path=request.get("path"), error=str(e))
            response = error_response(400, "invalid request", detail=str(e))
        except Exception as e:
            logger.exception("Error handling request", method=method, path=request.get("path"), error=str(e))
            response = error_response(500, "internal server error")

        response["headers"][LoggingConfig.LOG_CORRELATION_ID_HEADER] = correlation_id
        logger.info(
            "Request handled",
            method=method,
            path=request.get("path"),
            status_code=response["statusCode"]
        )
        return response


def method_not_allowed(method: str, allowed: list[str]) -> dict:
    response = error_response(405, f"method {method} not allowed", allowed=allowed)
    response["headers"]["Allow"] = ", ".join(allowed)
    return response
