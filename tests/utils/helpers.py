"""Test helper functions."""

import json
from typing import Any, Dict, Optional


def create_request(
    method: str = "GET",
    path: str = "/api/tasks",
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    query: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Create a serverless request object for testing."""
    if headers is None:
        headers = {
            "content-type": "application/json"
        }
    
    return {
        "method": method,
        "path": path,
        "headers": headers,
        "body": json.dumps(body) if isinstance(body, (dict, list)) else body,
        "query": query or {}
    }


def response_json(response: Dict[str, Any]) -> Any:
    """Decode a handler response body."""
    return json.loads(response["body"])
