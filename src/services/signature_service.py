"""
Group signature composition for outgoing agent emails.

The rendered signature is appended as a trailing block tagged with the
signature id so a later edit can find and replace it.
"""

from __future__ import annotations

import re
from typing import Optional

from models.article import Actor
from models.ticket import Group, Signature, Ticket
from utils.html_body import EMPTY_PARAGRAPH
from utils.logging_config import get_logger
from utils.placeholders import render

logger = get_logger(__name__)

# The block is always the tail of the body, so match greedily up to the end.
_SIGNATURE_BLOCK_RE = re.compile(
    r'(?:<p><br\s*/?></p>)?<div data-signature="true"[^>]*>.*</div>\s*$',
    re.DOTALL,
)


class SignatureService:
    """Looks up and renders group signatures."""

    def __init__(self, directory):
        self.directory = directory

    def active_signature_for(self, group: Group) -> Optional[Signature]:
        """Return the group's signature when it exists and is active."""
        if not group.signature_id:
            return None
        signature = self.directory.get_signature(group.signature_id)
        if signature is None or not signature.active:
            return None
        return signature

    def render(self, signature: Signature, actor: Actor, ticket: Ticket) -> str:
        """Substitute user/ticket placeholders in the signature body."""
        context = {"user": actor, "ticket": ticket, "group": ticket.group}
        return render(signature.body, context)

    def block(self, signature: Signature, rendered: str) -> str:
        return (
            f'<div data-signature="true" data-signature-id="{signature.id}">'
            f"<p>{rendered}</p></div>"
        )

    def append(self, body: str, signature: Signature, actor: Actor, ticket: Ticket) -> str:
        """Return ``body`` with exactly one trailing signature block."""
        rendered = self.render(signature, actor, ticket)
        composed = f"{strip_signature(body)}{EMPTY_PARAGRAPH}{self.block(signature, rendered)}"
        logger.debug(
            "Signature appended",
            extra={"ticket_id": ticket.id, "signature_id": signature.id},
        )
        return composed


def strip_signature(body: str) -> str:
    """Remove a trailing signature block if there is one."""
    return _SIGNATURE_BLOCK_RE.sub("", body)
