"""
Text module handlers.

GET  /text-modules?query=...                suggestions for the ``::`` popup
POST /tickets/{id}/text-modules/expand      swap the trigger for a module
"""

from __future__ import annotations

import uuid
from typing import Dict

from handlers.http import (
    actor_from_event,
    error_response,
    json_body,
    json_response,
    path_param,
    query_param,
)
from models.response import ExpansionResponse
from models.text_module import ExpansionRequest
from services import registry
from utils.error_handling import NotFoundError
from utils.validators import ensure_present


def suggest_handler(event, context) -> Dict:
    correlation_id = str(uuid.uuid4())
    try:
        actor_from_event(event)
        suggestions = registry.get_text_module_service().suggest(query_param(event, "query", ""))
        response = ExpansionResponse(body="", suggestions=suggestions)
        return json_response(200, response.model_dump_json())
    except Exception as exc:
        return error_response(exc, correlation_id, "Text module suggestion")


def expand_handler(event, context) -> Dict:
    """Expand the chosen module (or the module named by the trigger) into the body."""
    correlation_id = str(uuid.uuid4())
    try:
        actor = actor_from_event(event)
        ticket_id = path_param(event)
        ensure_present(ticket_id, "ticket id")
        request = ExpansionRequest.model_validate(json_body(event))

        service = registry.get_text_module_service()
        ticket = registry.get_article_service().get_ticket(ticket_id)

        module = None
        if request.module_id:
            module = service.directory.get_text_module(request.module_id)
        else:
            key = request.module_name
            if not key:
                trigger = service.find_trigger(request.body)
                key = trigger.group(1) if trigger else None
            module = service.lookup(key) if key else None

        if module is None or not module.active:
            suggestions = []
            trigger = service.find_trigger(request.body)
            if trigger is not None:
                suggestions = service.suggest(trigger.group(1))
            if not suggestions:
                raise NotFoundError("Text module not found")
            response = ExpansionResponse(body=request.body, suggestions=suggestions)
            return json_response(200, response.model_dump_json())

        body = service.expand(request.body, module, ticket, actor)
        return json_response(200, ExpansionResponse(body=body, module=module).model_dump_json())
    except Exception as exc:
        return error_response(exc, correlation_id, "Text module expansion")
