"""
Text module suggestions and expansion.

While editing a body the user types ``::`` followed by a keyword; the
editor asks for suggestions and then swaps the trigger for the chosen
module. Placeholders are filled from the ticket at expansion time, so the
body handed to article intake is ordinary text.
"""

from __future__ import annotations

import re
from typing import List, Optional

from models.article import Actor
from models.text_module import TextModule
from models.ticket import Ticket
from utils.logging_config import get_logger
from utils.placeholders import render

logger = get_logger(__name__)

TRIGGER_PREFIX = "::"
# The key must close the body; only whitespace, line breaks and closing tags may follow.
_TRIGGER_RE = re.compile(
    re.escape(TRIGGER_PREFIX) + r"([\w.-]*)(?=(?:\s|<br\s*/?>|</[a-zA-Z][\w-]*>)*$)"
)


class TextModuleService:
    """Suggest and expand text modules."""

    def __init__(self, directory, max_suggestions: int = 10):
        self.directory = directory
        self.max_suggestions = max_suggestions

    def find_trigger(self, body: str) -> Optional[re.Match]:
        """Return the ``::key`` token at the end of the body, if any."""
        return _TRIGGER_RE.search(body or "")

    def suggest(self, query: str) -> List[TextModule]:
        """Active modules whose name or keywords contain the query."""
        needle = (query or "").strip().lower()
        candidates = []
        for module in self.directory.list_text_modules():
            if not module.active:
                continue
            haystacks = [module.name.lower()] + _keywords(module)
            if not needle or any(needle in hay for hay in haystacks):
                starts = any(hay.startswith(needle) for hay in haystacks)
                candidates.append((not starts, module.name.lower(), module))
        candidates.sort(key=lambda item: (item[0], item[1]))
        return [module for _, _, module in candidates[: self.max_suggestions]]

    def lookup(self, key: str) -> Optional[TextModule]:
        """Exact (case-insensitive) match on name or keyword."""
        wanted = key.strip().lower()
        for module in self.directory.list_text_modules():
            if module.active and (module.name.lower() == wanted or wanted in _keywords(module)):
                return module
        return None

    def render(self, module: TextModule, ticket: Ticket, actor: Actor) -> str:
        context = {
            "ticket": ticket,
            "user": actor,
            "customer": ticket.customer,
            "group": ticket.group,
        }
        return render(module.content, context)

    def expand(self, body: str, module: TextModule, ticket: Ticket, actor: Actor) -> str:
        """Replace the trigger token with the rendered module.

        Without a trigger the module is appended at the end of the body.
        """
        rendered = self.render(module, ticket, actor)
        trigger = self.find_trigger(body)
        logger.info(
            "Text module expanded",
            extra={"ticket_id": ticket.id, "module_id": module.id, "had_trigger": bool(trigger)},
        )
        if trigger is None:
            return f"{body}{rendered}"
        return f"{body[: trigger.start()]}{rendered}{body[trigger.end():]}"


def _keywords(module: TextModule) -> List[str]:
    return [word.strip().lower() for word in module.keywords.split(",") if word.strip()]
