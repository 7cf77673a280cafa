"""Conversions between editor HTML and plain article text."""

import html

import nh3

EMPTY_PARAGRAPH = "<p><br></p>"

# Tags the rich text editor produces, plus the signature block wrapper.
ALLOWED_TAGS = {
    "p", "br", "div", "span", "b", "strong", "i", "em", "u", "s",
    "a", "ul", "ol", "li", "blockquote", "pre", "code", "h1", "h2", "h3", "img",
}
ALLOWED_ATTRIBUTES = {
    "*": set(),
    "a": {"href", "title", "target"},
    "div": {"data-signature", "data-signature-id"},
    "img": {"src", "alt", "width", "height"},
}
URL_SCHEMES = {"http", "https", "mailto", "cid", "data"}

# Only block structure survives when reducing to text.
_TEXT_TAGS = {"p", "br", "div"}
_NO_ATTRIBUTES = {"*": set()}


def sanitize_html(body: str) -> str:
    """Sanitize HTML to prevent XSS, allowing only editor markup."""
    return nh3.clean(
        body, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, url_schemes=URL_SCHEMES
    )


def looks_like_html(body: str) -> bool:
    """True when the body opens with editor markup.

    Text such as ``<Ok> see you`` starts with something tag-shaped, but the
    sanitizer drops the unknown tag, so it still counts as plain text.
    """
    return sanitize_html(body.strip()).startswith("<")


def text_to_html(text: str) -> str:
    """Wrap plain text the way the editor does: one paragraph per line."""
    paragraphs = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        paragraphs.append(f"<p>{html.escape(line)}</p>" if line.strip() else EMPTY_PARAGRAPH)
    return "".join(paragraphs)


def html_to_text(body: str) -> str:
    """Strip markup, keeping paragraph and line breaks as newlines."""
    # nh3 serializes the kept tags without attributes, so they can be replaced literally.
    cleaned = nh3.clean(body, tags=_TEXT_TAGS, attributes=_NO_ATTRIBUTES)
    for tag, replacement in (("<br>", "\n"), ("</p>", "\n"), ("</div>", "\n"), ("<p>", ""), ("<div>", "")):
        cleaned = cleaned.replace(tag, replacement)
    lines = [line.rstrip() for line in html.unescape(cleaned).split("\n")]
    return "\n".join(lines).strip()


def is_blank(body: str) -> bool:
    """True when the body has no visible text or inline image."""
    if "<img" in sanitize_html(body):
        return False
    return not html_to_text(body).strip()
