"""Shared request/response helpers for the API Gateway handlers."""

import json
from typing import Any, Dict, Optional

from models.article import Actor, Role
from utils.error_handling import AppError, UnauthorizedError, to_response
from utils.logging_config import get_logger

logger = get_logger(__name__)


def json_response(status: int, body: Any) -> Dict:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": body if isinstance(body, str) else json.dumps(body),
    }


def json_body(event: Dict) -> Dict:
    return json.loads(event.get("body") or "{}")


def path_param(event: Dict, name: str = "id") -> Optional[str]:
    return (event.get("pathParameters") or {}).get(name)


def query_param(event: Dict, name: str, default: Optional[str] = None) -> Optional[str]:
    return (event.get("queryStringParameters") or {}).get(name, default)


def actor_from_event(event: Dict) -> Actor:
    """Read the caller from the Lambda authorizer context."""
    claims = (
        event.get("requestContext", {}).get("authorizer", {}).get("lambda") or {}
    )
    user_id = claims.get("user_id")
    role = claims.get("role")
    if not user_id or role not in {r.value for r in Role}:
        raise UnauthorizedError()
    return Actor(
        id=str(user_id),
        role=Role(role),
        firstname=claims.get("firstname", ""),
        lastname=claims.get("lastname", ""),
        email=claims.get("email"),
    )


def error_response(exc: Exception, correlation_id: str, action: str) -> Dict:
    """Map an exception raised by a handler to an HTTP response.

    Malformed JSON, payload validation failures and missing path values
    all surface as ValueError and become a 400.
    """
    if isinstance(exc, AppError):
        logger.info(
            f"{action} rejected",
            extra={"correlation_id": correlation_id, "code": exc.code},
        )
        return to_response(exc, correlation_id)
    if isinstance(exc, ValueError):
        logger.info(f"{action} payload invalid", extra={"correlation_id": correlation_id})
        return json_response(
            400,
            {
                "message": "Invalid request",
                "error": str(exc),
                "status": "error",
                "correlation_id": correlation_id,
            },
        )
    logger.exception(f"{action} failed", extra={"correlation_id": correlation_id})
    return json_response(
        500,
        {"message": f"{action} failed", "status": "error", "correlation_id": correlation_id},
    )
