"""
Article handlers.

POST   /tickets/{id}/articles  create an article
GET    /tickets/{id}/articles  list articles in insertion order
DELETE /articles/{id}          soft-delete an article
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
from models.article import ArticleInput
from models.response import ArticleListResponse, ArticleResponse
from services import registry
from utils.logging_config import get_logger
from utils.validators import ensure_present

logger = get_logger(__name__)


def create_handler(event, context) -> Dict:
    """Create one article on a ticket."""
    correlation_id = str(uuid.uuid4())
    try:
        actor = actor_from_event(event)
        ticket_id = path_param(event)
        ensure_present(ticket_id, "ticket id")
        article_input = ArticleInput.model_validate(json_body(event))

        article = registry.get_article_service().create(actor, ticket_id, article_input)

        logger.info(
            "Article request handled",
            extra={"correlation_id": correlation_id, "article_id": article.id},
        )
        response = ArticleResponse(article=article, correlation_id=correlation_id)
        return json_response(201, response.model_dump_json())
    except Exception as exc:
        return error_response(exc, correlation_id, "Article creation")


def list_handler(event, context) -> Dict:
    """Return the ticket's articles; deleted ones only on request."""
    correlation_id = str(uuid.uuid4())
    try:
        actor_from_event(event)
        ticket_id = path_param(event)
        ensure_present(ticket_id, "ticket id")
        include_deleted = (query_param(event, "include_deleted", "false") or "").lower() == "true"

        articles = registry.get_article_service().list_articles(
            ticket_id, include_deleted=include_deleted
        )
        response = ArticleListResponse(
            ticket_id=ticket_id, articles=articles, correlation_id=correlation_id
        )
        return json_response(200, response.model_dump_json())
    except Exception as exc:
        return error_response(exc, correlation_id, "Article listing")


def delete_handler(event, context) -> Dict:
    """Soft-delete an article."""
    correlation_id = str(uuid.uuid4())
    try:
        actor = actor_from_event(event)
        article_id = path_param(event)
        ensure_present(article_id, "article id")

        registry.get_article_service().delete(actor, article_id)
        return json_response(
            200, {"status": "deleted", "article_id": article_id, "correlation_id": correlation_id}
        )
    except Exception as exc:
        return error_response(exc, correlation_id, "Article deletion")
