"""DynamoDB repository for the per-ticket article log."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key

from models.article import Article

ARTICLE_ID_INDEX = "article_id-index"
# Position -1 holds the per-ticket counter; real articles start at 0.
COUNTER_POSITION = -1


class DynamoDbArticleRepository:
    """Articles keyed by (ticket_id, position) with a counter per ticket."""

    def __init__(self, table_name: str, region: Optional[str] = None):
        self.table = boto3.resource("dynamodb", region_name=region).Table(table_name)

    def append(self, ticket_id: str, article: Article) -> Article:
        """Reserve the next position atomically, then write the article."""
        resp = self.table.update_item(
            Key={"ticket_id": ticket_id, "position": COUNTER_POSITION},
            UpdateExpression="ADD next_position :one",
            ExpressionAttributeValues={":one": 1},
            ReturnValues="UPDATED_NEW",
        )
        position = int(resp["Attributes"]["next_position"]) - 1
        stored = article.model_copy(
            update={
                "id": article.id or str(uuid.uuid4()),
                "ticket_id": ticket_id,
                "position": position,
            }
        )
        self.table.put_item(
            Item=_to_item(stored),
            ConditionExpression="attribute_not_exists(#pos)",
            ExpressionAttributeNames={"#pos": "position"},
        )
        return stored

    def get(self, article_id: str) -> Optional[Article]:
        resp = self.table.query(
            IndexName=ARTICLE_ID_INDEX,
            KeyConditionExpression=Key("article_id").eq(article_id),
            Limit=1,
        )
        items = resp.get("Items", [])
        return _from_item(items[0]) if items else None

    def mark_deleted(self, article_id: str, deleted_at: datetime) -> Article:
        article = self.get(article_id)
        if article is None:
            raise KeyError(article_id)
        self.table.update_item(
            Key={"ticket_id": article.ticket_id, "position": article.position},
            UpdateExpression="SET deleted = :deleted, deleted_at = :deleted_at",
            ExpressionAttributeValues={
                ":deleted": True,
                ":deleted_at": deleted_at.isoformat(),
            },
        )
        return article.model_copy(update={"deleted": True, "deleted_at": deleted_at})

    def list_ordered(self, ticket_id: str, include_deleted: bool = False) -> List[Article]:
        """Page through the ticket partition in position order."""
        articles: List[Article] = []
        query_kwargs: Dict[str, Any] = {
            "KeyConditionExpression": Key("ticket_id").eq(ticket_id) & Key("position").gte(0),
            "ScanIndexForward": True,
        }
        while True:
            resp = self.table.query(**query_kwargs)
            for item in resp.get("Items", []):
                article = _from_item(item)
                if include_deleted or not article.deleted:
                    articles.append(article)
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return articles
            query_kwargs["ExclusiveStartKey"] = last_key


def _to_item(article: Article) -> Dict[str, Any]:
    item = article.model_dump(mode="json", exclude={"id"})
    item["article_id"] = article.id
    return item


def _from_item(item: Dict[str, Any]) -> Article:
    data = _plain(item)
    data["id"] = data.pop("article_id")
    data.pop("next_position", None)
    return Article.model_validate(data)


def _plain(value: Any) -> Any:
    """DynamoDB returns numbers as Decimal; articles only hold integers."""
    if isinstance(value, Decimal):
        return int(value)
    if isinstance(value, dict):
        return {key: _plain(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [_plain(inner) for inner in value]
    return value
