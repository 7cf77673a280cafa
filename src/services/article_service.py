"""
Article intake service.

Turns a submitted article into a persisted one: resolves the channel for
the actor's role, applies the channel policy defaults, validates the body
and addressing fields, composes signatures, and appends the result to the
ticket's article log. Mutations on one ticket are serialized.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from models.article import (
    Actor,
    Article,
    ArticleInput,
    Channel,
    ChannelKind,
    ContentType,
    TicketEvent,
    Visibility,
)
from models.ticket import Ticket
from services.article_policy import (
    DEFAULT_CHANNEL,
    ChannelSpec,
    channel_spec,
    defaults_for,
    resolve_visibility,
)
from services.signature_service import SignatureService, strip_signature
from utils.error_handling import (
    AttachmentNotAllowedError,
    EmptyBodyError,
    ForbiddenActionError,
    ForbiddenChannelError,
    MissingAddressError,
    NotFoundError,
)
from utils.html_body import html_to_text, is_blank, looks_like_html, sanitize_html, text_to_html
from utils.locks import TicketLocks
from utils.logging_config import get_logger
from utils.validators import parse_addresses

logger = get_logger(__name__)

ARTICLE_CREATED = "ArticleCreated"
ARTICLE_DELETED = "ArticleDeleted"


class ArticleService:
    """Create, delete and list ticket articles."""

    def __init__(
        self,
        articles,
        directory,
        publisher,
        signatures: Optional[SignatureService] = None,
        locks: Optional[TicketLocks] = None,
    ):
        self.articles = articles
        self.directory = directory
        self.publisher = publisher
        self.signatures = signatures or SignatureService(directory)
        self.locks = locks or TicketLocks()

    # ------------------------------------------------------------------
    # Validation and defaulting
    # ------------------------------------------------------------------

    def prepare(self, actor: Actor, ticket: Ticket, article_input: ArticleInput) -> Article:
        """Build the article that would be stored, or raise a validation error.

        Nothing is written; the returned article has no id or position yet.
        """
        channel = self._resolve_channel(actor, article_input.channel)
        spec = channel_spec(channel)
        defaults = defaults_for(actor.role, channel)
        visibility = resolve_visibility(defaults, article_input.visibility)

        body = self._normalize_body(article_input.body, spec)
        to, cc = self._resolve_addresses(spec, ticket, article_input)

        if article_input.attachments and not spec.attachments_allowed:
            raise AttachmentNotAllowedError(channel.value)

        if actor.is_agent:
            body = self._decorate_body(body, spec, actor, ticket)

        return Article(
            ticket_id=ticket.id,
            channel=channel,
            internal=visibility == Visibility.INTERNAL,
            sender=defaults.sender,
            content_type=spec.content_type,
            body=body,
            from_address=actor.display_name or actor.email,
            to=to,
            cc=cc,
            in_reply_to=article_input.in_reply_to,
            attachments=list(article_input.attachments),
            created_by_id=actor.id,
        )

    def _resolve_channel(self, actor: Actor, requested: Optional[Channel]) -> Channel:
        channel = requested or DEFAULT_CHANNEL[actor.role]
        if defaults_for(actor.role, channel) is None:
            raise ForbiddenChannelError(actor.role.value, channel.value)
        return channel

    def _normalize_body(self, raw: str, spec: ChannelSpec) -> str:
        text = (raw or "").strip()
        if spec.content_type == ContentType.HTML:
            body = sanitize_html(text) if looks_like_html(text) else text_to_html(text)
            # A body holding only the pre-filled signature is still empty.
            content = strip_signature(body) if spec.kind == ChannelKind.EMAIL else body
            if is_blank(content):
                raise EmptyBodyError()
            return body

        if looks_like_html(text):
            text = html_to_text(text)
        if not text:
            raise EmptyBodyError()
        return text

    def _resolve_addresses(
        self, spec: ChannelSpec, ticket: Ticket, article_input: ArticleInput
    ) -> Tuple[Optional[str], Optional[str]]:
        to = (article_input.to or "").strip()
        cc = (article_input.cc or "").strip()

        if spec.reply_to_sender and not to and article_input.in_reply_to:
            replied = self.articles.get(article_input.in_reply_to)
            if replied is not None and replied.ticket_id == ticket.id:
                to = (replied.from_address or "").strip()

        if spec.kind == ChannelKind.EMAIL:
            to = ", ".join(parse_addresses(to, "to"))
            cc = ", ".join(parse_addresses(cc, "cc"))

        for field, value in (("to", to), ("cc", cc)):
            if field in spec.required_fields and not value:
                raise MissingAddressError(field)
        return to or None, cc or None

    def _decorate_body(self, body: str, spec: ChannelSpec, actor: Actor, ticket: Ticket) -> str:
        if spec.kind == ChannelKind.EMAIL and spec.content_type == ContentType.HTML:
            signature = self.signatures.active_signature_for(ticket.group)
            if signature is not None:
                body = self.signatures.append(body, signature, actor, ticket)
        if spec.appends_initials and actor.initials:
            body = f"{body}\n/{actor.initials}"
        return body

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, actor: Actor, ticket_id: str, article_input: ArticleInput) -> Article:
        """Validate and append a new article to the end of the ticket's log."""
        with self.locks.for_ticket(ticket_id):
            ticket = self.get_ticket(ticket_id)
            article = self.prepare(actor, ticket, article_input)
            return self.commit(ticket, article)

    def commit(self, ticket: Ticket, article: Article) -> Article:
        """Append a prepared article and notify subscribers.

        Callers must hold the ticket lock.
        """
        stored = self.store(ticket, article)
        self.announce(stored)
        return stored

    def store(self, ticket: Ticket, article: Article) -> Article:
        """Append a prepared article without publishing anything."""
        stored = self.articles.append(ticket.id, article)
        logger.info(
            "Article created",
            extra={
                "ticket_id": ticket.id,
                "article_id": stored.id,
                "channel": stored.channel.value,
                "internal": stored.internal,
                "position": stored.position,
            },
        )
        return stored

    def announce(self, stored: Article) -> None:
        self.publisher.publish(
            stored.ticket_id,
            TicketEvent(type=ARTICLE_CREATED, ticket_id=stored.ticket_id, article_id=stored.id),
        )

    def delete(self, actor: Actor, article_id: str) -> None:
        """Soft-delete an article; other articles keep their order."""
        if not actor.is_agent:
            raise ForbiddenActionError("Customers cannot delete articles")

        article = self.articles.get(article_id)
        if article is None:
            raise NotFoundError(f"Article {article_id} not found")

        with self.locks.for_ticket(article.ticket_id):
            current = self.articles.get(article_id)
            if current.deleted:
                logger.info("Article already deleted", extra={"article_id": article_id})
                return
            self.articles.mark_deleted(article_id, datetime.now(timezone.utc))
            logger.info(
                "Article deleted",
                extra={"ticket_id": current.ticket_id, "article_id": article_id},
            )
            self.publisher.publish(
                current.ticket_id,
                TicketEvent(
                    type=ARTICLE_DELETED, ticket_id=current.ticket_id, article_id=article_id
                ),
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_articles(self, ticket_id: str, include_deleted: bool = False) -> List[Article]:
        self.get_ticket(ticket_id)
        return self.articles.list_ordered(ticket_id, include_deleted=include_deleted)

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self.directory.get_ticket(ticket_id)
        if ticket is None:
            raise NotFoundError(f"Ticket {ticket_id} not found")
        return ticket
