"""PostgreSQL directory of tickets, signatures and text modules (SQLAlchemy Core)."""

from typing import Any, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from models.article import Actor, Role
from models.text_module import TextModule
from models.ticket import Group, Signature, Ticket


class PostgresRepository:
    """Thin wrapper to keep SQL organized and parameterized."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def fetch_one(self, query: str, params: dict) -> Optional[dict]:
        """Execute a SELECT and return one row as dict."""
        with self.engine.connect() as conn:
            row = conn.execute(text(query), params).fetchone()
            return dict(row._mapping) if row else None

    def fetch_all(self, query: str, params: Optional[dict] = None) -> List[dict]:
        """Execute a SELECT and return every row as dict."""
        with self.engine.connect() as conn:
            return [dict(row._mapping) for row in conn.execute(text(query), params or {})]

    def execute(self, query: str, params: dict) -> Any:
        """Execute a parameterized statement in its own transaction."""
        with self.engine.begin() as conn:
            return conn.execute(text(query), params)


class PostgresDirectory(PostgresRepository):
    """Lookups the article service needs from the ticketing database."""

    def get_ticket(self, ticket_id: str) -> Optional[Ticket]:
        row = self.fetch_one(
            """
            SELECT t.id, t.title, t.owner_id,
                   g.id AS group_id, g.name AS group_name, g.signature_id,
                   u.id AS customer_id, u.firstname, u.lastname, u.email
            FROM tickets t
            JOIN groups g ON g.id = t.group_id
            JOIN users u ON u.id = t.customer_id
            WHERE t.id = :ticket_id
            """,
            {"ticket_id": ticket_id},
        )
        if not row:
            return None
        return Ticket(
            id=str(row["id"]),
            title=row["title"],
            owner_id=str(row["owner_id"]) if row["owner_id"] is not None else None,
            group=Group(
                id=str(row["group_id"]),
                name=row["group_name"],
                signature_id=(
                    str(row["signature_id"]) if row["signature_id"] is not None else None
                ),
            ),
            customer=Actor(
                id=str(row["customer_id"]),
                role=Role.CUSTOMER,
                firstname=row["firstname"] or "",
                lastname=row["lastname"] or "",
                email=row["email"],
            ),
        )

    def save_ticket(self, ticket: Ticket) -> Ticket:
        self.execute(
            "UPDATE tickets SET title = :title, updated_at = now() WHERE id = :ticket_id",
            {"title": ticket.title, "ticket_id": ticket.id},
        )
        return ticket

    def get_signature(self, signature_id: str) -> Optional[Signature]:
        row = self.fetch_one(
            "SELECT id, name, body, active FROM signatures WHERE id = :signature_id",
            {"signature_id": signature_id},
        )
        if not row:
            return None
        return Signature(id=str(row["id"]), name=row["name"], body=row["body"], active=row["active"])

    def get_text_module(self, module_id: str) -> Optional[TextModule]:
        row = self.fetch_one(
            "SELECT id, name, keywords, content, active FROM text_modules WHERE id = :module_id",
            {"module_id": module_id},
        )
        return _text_module(row) if row else None

    def list_text_modules(self) -> List[TextModule]:
        rows = self.fetch_all(
            "SELECT id, name, keywords, content, active FROM text_modules ORDER BY name"
        )
        return [_text_module(row) for row in rows]


def _text_module(row: dict) -> TextModule:
    return TextModule(
        id=str(row["id"]),
        name=row["name"],
        keywords=row["keywords"] or "",
        content=row["content"],
        active=row["active"],
    )
