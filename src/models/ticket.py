"""Ticket models."""

from typing import Optional

from pydantic import BaseModel, field_validator

from models.article import Actor, ArticleInput


class Signature(BaseModel):
    """Group signature appended to outgoing agent emails."""

    id: str
    name: str
    body: str
    active: bool = True


class Group(BaseModel):
    """Ticket group; may carry a signature."""

    id: str
    name: str
    signature_id: Optional[str] = None


class Ticket(BaseModel):
    """Conversation the articles belong to."""

    id: str
    title: str
    group: Group
    customer: Actor
    owner_id: Optional[str] = None


class TicketUpdate(BaseModel):
    """Ticket attribute changes submitted together with an optional article."""

    title: Optional[str] = None
    article: Optional[ArticleInput] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: Optional[str]) -> Optional[str]:
        """A title may be left out but never blanked."""
        if value is None:
            return value
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("title must not be empty")
        return cleaned
