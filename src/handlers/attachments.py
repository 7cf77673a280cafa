"""Handler for POST /attachments: store a blob and hand back its reference."""

from __future__ import annotations

import base64
import binascii
import uuid
from typing import Dict

from handlers.http import actor_from_event, error_response, json_body, json_response
from services import registry
from utils.logging_config import get_logger
from utils.validators import ensure_present

logger = get_logger(__name__)

MAX_ATTACHMENT_BYTES = 10 * 1024 * 1024


def lambda_handler(event, context) -> Dict:
    """Accept ``{"filename", "content_type", "data": <base64>}``."""
    correlation_id = str(uuid.uuid4())
    try:
        actor_from_event(event)
        payload = json_body(event)
        filename = (payload.get("filename") or "").strip()
        ensure_present(filename, "filename")
        ensure_present(payload.get("data"), "data")
        try:
            data = base64.b64decode(payload["data"], validate=True)
        except binascii.Error as exc:
            raise ValueError("data must be base64 encoded") from exc
        if len(data) > MAX_ATTACHMENT_BYTES:
            raise ValueError("attachment exceeds the 10 MB limit")

        ref = registry.get_attachment_store().put(
            filename, payload.get("content_type") or "application/octet-stream", data
        )
        logger.info(
            "Attachment stored",
            extra={"correlation_id": correlation_id, "attachment_id": ref.id, "size": ref.size},
        )
        return json_response(201, ref.model_dump_json())
    except Exception as exc:
        return error_response(exc, correlation_id, "Attachment upload")
