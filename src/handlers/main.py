"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

Path parameters are extracted here from the route pattern, so handlers work
the same whether API Gateway already filled ``pathParameters`` or not.
"""

import re
from typing import Callable, Dict, Pattern, Tuple

from handlers.http import json_response

from . import articles, attachments, health_check, text_modules, ticket_update

_ID = r"(?P<id>[^/]+)"


def _route_table() -> Tuple[Tuple[str, Pattern, Callable], ...]:
    # Resolved at call time so tests can monkeypatch handler functions.
    return (
        ("GET", re.compile(r"^/health$"), health_check.lambda_handler),
        ("GET", re.compile(rf"^/tickets/{_ID}/articles$"), articles.list_handler),
        ("POST", re.compile(rf"^/tickets/{_ID}/articles$"), articles.create_handler),
        ("PATCH", re.compile(rf"^/tickets/{_ID}$"), ticket_update.lambda_handler),
        ("DELETE", re.compile(rf"^/articles/{_ID}$"), articles.delete_handler),
        ("GET", re.compile(r"^/text-modules$"), text_modules.suggest_handler),
        (
            "POST",
            re.compile(rf"^/tickets/{_ID}/text-modules/expand$"),
            text_modules.expand_handler,
        ),
        ("POST", re.compile(r"^/attachments$"), attachments.lambda_handler),
    )


def lambda_handler(event, context):
    """Entry point invoked by API Gateway HTTP API."""
    method = event.get("requestContext", {}).get("http", {}).get("method", "").upper()
    path = event.get("requestContext", {}).get("http", {}).get("path", "").rstrip("/") or "/"

    for route_method, pattern, handler in _route_table():
        match = pattern.match(path)
        if route_method == method and match:
            params: Dict = dict(event.get("pathParameters") or {})
            params.update(match.groupdict())
            return handler({**event, "pathParameters": params or None}, context)

    return json_response(404, {"message": "Route not found", "route": f"{method} {path}"})
