"""Article models: the closed channel enum, actors and persisted articles."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Who is writing the article."""

    AGENT = "agent"
    CUSTOMER = "customer"


class Channel(str, Enum):
    """Article types; the value is the persisted type name."""

    NOTE = "note"
    EMAIL = "email"
    PHONE = "phone"
    SMS = "sms"
    TELEGRAM = "telegram personal-message"
    TWITTER_STATUS = "twitter status"
    TWITTER_DM = "twitter direct-message"
    FACEBOOK_COMMENT = "facebook feed comment"
    WEB = "web"


class ChannelKind(str, Enum):
    """Channel families sharing addressing and formatting rules."""

    NOTE = "note"
    EMAIL = "email"
    PHONE = "phone"
    SMS = "sms"
    MESSENGER = "messenger"
    SOCIAL_POST = "social_post"
    WEB = "web"


class Visibility(str, Enum):
    INTERNAL = "internal"
    PUBLIC = "public"


class Sender(str, Enum):
    AGENT = "Agent"
    CUSTOMER = "Customer"
    SYSTEM = "System"


class ContentType(str, Enum):
    HTML = "text/html"
    PLAIN = "text/plain"


class Actor(BaseModel):
    """Authenticated user creating or deleting articles."""

    id: str
    role: Role
    firstname: str = ""
    lastname: str = ""
    email: Optional[str] = None

    @property
    def is_agent(self) -> bool:
        return self.role == Role.AGENT

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.firstname, self.lastname) if part)

    @property
    def initials(self) -> str:
        return f"{self.firstname[:1]}{self.lastname[:1]}"


class AttachmentRef(BaseModel):
    """Reference to a blob held by the attachment store."""

    id: str
    filename: str
    content_type: str = "application/octet-stream"
    size: int = Field(ge=0)
    store_key: str


class ArticleInput(BaseModel):
    """Article as submitted by the client, before defaulting and validation."""

    channel: Optional[Channel] = None
    visibility: Optional[Visibility] = None
    content_type: Optional[ContentType] = None
    body: str = ""
    to: Optional[str] = None
    cc: Optional[str] = None
    in_reply_to: Optional[str] = None
    attachments: List[AttachmentRef] = Field(default_factory=list)


class Article(BaseModel):
    """Persisted article. Only the deletion fields change after creation."""

    id: Optional[str] = None
    ticket_id: str
    position: Optional[int] = None
    channel: Channel
    internal: bool
    sender: Sender
    content_type: ContentType
    body: str
    from_address: Optional[str] = None
    to: Optional[str] = None
    cc: Optional[str] = None
    in_reply_to: Optional[str] = None
    attachments: List[AttachmentRef] = Field(default_factory=list)
    created_by_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def visibility(self) -> Visibility:
        return Visibility.INTERNAL if self.internal else Visibility.PUBLIC


class TicketEvent(BaseModel):
    """Change notification pushed to subscribers of a ticket."""

    type: str
    ticket_id: str
    article_id: Optional[str] = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
