"""Handler for PATCH /tickets/{id}: ticket changes plus an optional article."""

from __future__ import annotations

import json
import uuid
from typing import Dict

from handlers.http import actor_from_event, error_response, json_body, json_response, path_param
from models.ticket import TicketUpdate
from services import registry
from utils.logging_config import get_logger
from utils.validators import ensure_present

logger = get_logger(__name__)


def lambda_handler(event, context) -> Dict:
    """Apply the update and return the ticket and any created article."""
    correlation_id = str(uuid.uuid4())
    try:
        actor = actor_from_event(event)
        ticket_id = path_param(event)
        ensure_present(ticket_id, "ticket id")
        update = TicketUpdate.model_validate(json_body(event))

        result = registry.get_ticket_service().update(actor, ticket_id, update)

        logger.info(
            "Ticket update handled",
            extra={
                "correlation_id": correlation_id,
                "ticket_id": ticket_id,
                "article_id": result.article.id if result.article else None,
            },
        )
        return json_response(
            200,
            {
                "ticket": json.loads(result.ticket.model_dump_json()),
                "article": json.loads(result.article.model_dump_json()) if result.article else None,
                "correlation_id": correlation_id,
            },
        )
    except Exception as exc:
        return error_response(exc, correlation_id, "Ticket update")
