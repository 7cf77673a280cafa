"""
In-memory repositories used for local runs and tests.

The article log is append-only: deletion flips a flag on the entry and
never removes it, so positions are stable for the lifetime of a ticket.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from threading import Lock
from typing import Dict, Iterable, List, Optional

from models.article import Article
from models.text_module import TextModule
from models.ticket import Signature, Ticket


class MemoryArticleRepository:
    """Per-ticket append-only article log."""

    def __init__(self) -> None:
        self._logs: Dict[str, List[Article]] = {}
        self._index: Dict[str, tuple] = {}
        self._lock = Lock()

    def append(self, ticket_id: str, article: Article) -> Article:
        """Store ``article`` after every existing entry and return the stored copy."""
        with self._lock:
            log = self._logs.setdefault(ticket_id, [])
            stored = article.model_copy(
                update={
                    "id": article.id or str(uuid.uuid4()),
                    "ticket_id": ticket_id,
                    "position": len(log),
                }
            )
            log.append(stored)
            self._index[stored.id] = (ticket_id, stored.position)
            return stored

    def get(self, article_id: str) -> Optional[Article]:
        with self._lock:
            location = self._index.get(article_id)
            if location is None:
                return None
            ticket_id, position = location
            return self._logs[ticket_id][position]

    def mark_deleted(self, article_id: str, deleted_at: datetime) -> Article:
        with self._lock:
            ticket_id, position = self._index[article_id]
            log = self._logs[ticket_id]
            log[position] = log[position].model_copy(
                update={"deleted": True, "deleted_at": deleted_at}
            )
            return log[position]

    def list_ordered(self, ticket_id: str, include_deleted: bool = False) -> List[Article]:
        with self._lock:
            log = list(self._logs.get(ticket_id, []))
        if include_deleted:
            return log
        return [article for article in log if not article.deleted]


class MemoryDirectory:
    """Tickets, signatures and text modules held in dictionaries."""

    def __init__(
        self,
        tickets: Iterable[Ticket] = (),
        signatures: Iterable[Signature] = (),
        text_modules: Iterable[TextModule] = (),
    ) -> None:
        self.tickets: Dict[str, Ticket] = {t.id: t for t in tickets}
        self.signatures: Dict[str, Signature] = {s.id: s for s in signatures}
        self.text_modules: Dict[str, TextModule] = {m.id: m for m in text_modules}

    def get_ticket(self, ticket_id: str) -> Optional[Ticket]:
        return self.tickets.get(ticket_id)

    def save_ticket(self, ticket: Ticket) -> Ticket:
        self.tickets[ticket.id] = ticket
        return ticket

    def get_signature(self, signature_id: str) -> Optional[Signature]:
        return self.signatures.get(signature_id)

    def get_text_module(self, module_id: str) -> Optional[TextModule]:
        return self.text_modules.get(module_id)

    def list_text_modules(self) -> List[TextModule]:
        return sorted(self.text_modules.values(), key=lambda module: module.name)
