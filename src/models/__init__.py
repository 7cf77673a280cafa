"""Pydantic models for API payloads."""

from models.article import (  # noqa: F401
    Actor,
    Article,
    ArticleInput,
    AttachmentRef,
    Channel,
    ChannelKind,
    ContentType,
    Role,
    Sender,
    TicketEvent,
    Visibility,
)
from models.response import (  # noqa: F401
    ArticleListResponse,
    ArticleResponse,
    ExpansionResponse,
)
from models.text_module import ExpansionRequest, TextModule  # noqa: F401
from models.ticket import Group, Signature, Ticket, TicketUpdate  # noqa: F401
