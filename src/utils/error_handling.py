"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for application errors."""

    code = "error"

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    code = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails."""

    code = "invalid_input"

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=422)


class EmptyBodyError(ValidationError):
    """Article body is empty after trimming."""

    code = "empty_body"

    def __init__(self, message: str = "Article body must not be empty"):
        super().__init__(message)


class MissingAddressError(ValidationError):
    """A channel that needs a recipient was submitted without one."""

    code = "missing_address"

    def __init__(self, field: str = "to"):
        super().__init__(f"'{field}' is required for this article type")
        self.field = field


class InvalidAddressError(ValidationError):
    """A recipient address could not be parsed."""

    code = "invalid_address"

    def __init__(self, field: str, value: str):
        super().__init__(f"'{field}' contains an invalid address: {value}")
        self.field = field


class AttachmentNotAllowedError(ValidationError):
    """Attachments were supplied for a channel that cannot carry them."""

    code = "attachment_not_allowed"

    def __init__(self, channel: str):
        super().__init__(f"Attachments are not allowed for '{channel}' articles")
        self.channel = channel


class ForbiddenChannelError(AppError):
    """The actor may not create articles on the requested channel."""

    code = "forbidden_channel"

    def __init__(self, role: str, channel: str):
        super().__init__(f"A {role} cannot create '{channel}' articles", status_code=403)
        self.role = role
        self.channel = channel


class UnauthorizedError(AppError):
    """The request carries no usable caller identity."""

    code = "unauthorized"

    def __init__(self, message: str = "Caller identity missing"):
        super().__init__(message, status_code=401)


class ForbiddenActionError(AppError):
    """The actor's role does not permit the requested change."""

    code = "forbidden_action"

    def __init__(self, message: str = "Action not permitted"):
        super().__init__(message, status_code=403)


def to_response(error: AppError, correlation_id: Optional[str] = None) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    body: Dict[str, Any] = {"message": str(error), "code": error.code, "status": "error"}
    if correlation_id:
        body["correlation_id"] = correlation_id
    return {
        "statusCode": error.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }
