"""Ticket update service: attribute changes submitted together with an article."""

from dataclasses import dataclass
from typing import Optional

from models.article import Actor, Article, TicketEvent
from models.ticket import Ticket, TicketUpdate
from services.article_service import ArticleService
from utils.error_handling import ForbiddenActionError
from utils.logging_config import get_logger

logger = get_logger(__name__)

TICKET_UPDATED = "TicketUpdated"


@dataclass
class TicketUpdateResult:
    """Simple DTO describing the outcome of a ticket update."""

    ticket: Ticket
    article: Optional[Article] = None


class TicketService:
    """Applies ticket changes and the accompanying article as one unit."""

    def __init__(self, article_service: ArticleService):
        self.articles = article_service
        self.directory = article_service.directory
        self.publisher = article_service.publisher

    def update(self, actor: Actor, ticket_id: str, update: TicketUpdate) -> TicketUpdateResult:
        """
        Validate everything first, then write.

        The article is prepared before the ticket is touched so a rejected
        article leaves the title unchanged as well. If the append itself
        fails the previous ticket is saved back. Events go out only once
        both writes have succeeded.
        """
        with self.articles.locks.for_ticket(ticket_id):
            ticket = self.articles.get_ticket(ticket_id)

            changes = {}
            if update.title is not None and update.title != ticket.title:
                if not actor.is_agent:
                    raise ForbiddenActionError("Customers cannot change ticket attributes")
                changes["title"] = update.title

            updated = ticket.model_copy(update=changes) if changes else ticket
            prepared = None
            if update.article is not None:
                prepared = self.articles.prepare(actor, updated, update.article)

            if changes:
                self.directory.save_ticket(updated)

            stored = None
            if prepared is not None:
                try:
                    stored = self.articles.store(updated, prepared)
                except Exception:
                    if changes:
                        logger.warning(
                            "Article append failed, restoring ticket",
                            extra={"ticket_id": ticket_id, "fields": sorted(changes)},
                        )
                        self.directory.save_ticket(ticket)
                    raise

            if changes:
                logger.info(
                    "Ticket updated",
                    extra={"ticket_id": ticket_id, "fields": sorted(changes)},
                )
                self.publisher.publish(
                    ticket_id, TicketEvent(type=TICKET_UPDATED, ticket_id=ticket_id)
                )
            if stored is not None:
                self.articles.announce(stored)
            return TicketUpdateResult(ticket=updated, article=stored)
