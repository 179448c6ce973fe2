"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json

from taskboard.services.entity_store import get_entity_store
from taskboard.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Handle GET request."""
        store = get_entity_store()
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        response = json.dumps({
            "status": "ok",
            "service": "taskboard",
            "tasks": len(store.tasks),
            "categories": len(store.categories),
        })
        self.wfile.write(response.encode('utf-8'))

    def do_POST(self):
        """Handle POST request (same as GET for health check)."""
        self.do_GET()
