"""
Placeholder rendering for signatures and text modules.

Templates reference live objects with ``#{object.attribute}`` paths, for
example ``#{ticket.customer.firstname}``. Paths are resolved against a
context mapping at render time; anything that cannot be resolved renders
as ``-``.
"""

import html
import re
from typing import Any, Mapping

PLACEHOLDER_RE = re.compile(r"#\{\s*([a-zA-Z_][\w.]*)\s*\}")
MISSING = "-"


def resolve(path: str, context: Mapping[str, Any]) -> Any:
    """Walk a dotted path through dicts and attribute access."""
    head, *rest = path.split(".")
    value = context.get(head)
    for part in rest:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def render(template: str, context: Mapping[str, Any], escape: bool = True) -> str:
    """Substitute every placeholder in ``template``."""

    def _replace(match: re.Match) -> str:
        value = resolve(match.group(1), context)
        if value is None or value == "":
            return MISSING
        text = str(value)
        return html.escape(text) if escape else text

    return PLACEHOLDER_RE.sub(_replace, template)
