"""Response payloads returned by the article handlers."""

from typing import List, Optional

from pydantic import BaseModel

from models.article import Article
from models.text_module import TextModule


class ArticleResponse(BaseModel):
    """Single article plus request correlation."""

    article: Article
    correlation_id: str


class ArticleListResponse(BaseModel):
    """Articles of one ticket in insertion order."""

    ticket_id: str
    articles: List[Article]
    correlation_id: Optional[str] = None


class ExpansionResponse(BaseModel):
    """Result of a text module expansion."""

    body: str
    module: Optional[TextModule] = None
    suggestions: List[TextModule] = []
