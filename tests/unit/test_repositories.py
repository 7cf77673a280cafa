"""
Repository tests with mocked AWS clients and SQLAlchemy engine.

Run with: pytest tests/unit/test_repositories.py -v
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from models.article import Article, Channel, ContentType, Sender


def _article(body: str = "<p>Hi</p>") -> Article:
    return Article(
        ticket_id="t-1",
        channel=Channel.NOTE,
        internal=True,
        sender=Sender.AGENT,
        content_type=ContentType.HTML,
        body=body,
        created_by_id="agent-1",
    )


class TestMemoryArticleRepository:
    def test_append_assigns_id_and_position(self, article_repo):
        first = article_repo.append("t-1", _article("a"))
        second = article_repo.append("t-1", _article("b"))
        other = article_repo.append("t-2", _article("c"))

        assert first.id != second.id
        assert (first.position, second.position, other.position) == (0, 1, 0)
        assert article_repo.get(second.id) == second

    def test_mark_deleted_keeps_entry(self, article_repo):
        first = article_repo.append("t-1", _article("a"))
        article_repo.append("t-1", _article("b"))
        when = datetime.now(timezone.utc)

        deleted = article_repo.mark_deleted(first.id, when)

        assert deleted.deleted is True
        assert deleted.deleted_at == when
        assert [a.body for a in article_repo.list_ordered("t-1")] == ["b"]
        assert [a.body for a in article_repo.list_ordered("t-1", include_deleted=True)] == ["a", "b"]

    def test_unknown_lookups(self, article_repo):
        assert article_repo.get("missing") is None
        assert article_repo.list_ordered("t-404") == []


class TestDynamoDbArticleRepository:
    @pytest.fixture
    def table(self):
        with patch("repositories.dynamodb_repo.boto3") as mock_boto3:
            table = MagicMock()
            mock_boto3.resource.return_value.Table.return_value = table
            yield table

    @pytest.fixture
    def repo(self, table):
        from repositories.dynamodb_repo import DynamoDbArticleRepository

        return DynamoDbArticleRepository("articles")

    def _item(self, article: Article) -> dict:
        from repositories.dynamodb_repo import _to_item

        item = _to_item(article)
        item["position"] = Decimal(article.position)
        return item

    def test_append_reserves_position(self, repo, table):
        table.update_item.return_value = {"Attributes": {"next_position": Decimal(3)}}

        stored = repo.append("t-1", _article())

        assert stored.position == 2
        counter_call = table.update_item.call_args.kwargs
        assert counter_call["Key"] == {"ticket_id": "t-1", "position": -1}
        item = table.put_item.call_args.kwargs["Item"]
        assert item["article_id"] == stored.id
        assert item["position"] == 2
        assert item["channel"] == "note"
        assert "id" not in item

    def test_get_uses_article_index(self, repo, table):
        article = _article().model_copy(update={"id": "a-1", "position": 0})
        table.query.return_value = {"Items": [self._item(article)]}

        loaded = repo.get("a-1")

        assert loaded.id == "a-1"
        assert loaded.position == 0
        assert table.query.call_args.kwargs["IndexName"] == "article_id-index"

    def test_get_missing(self, repo, table):
        table.query.return_value = {"Items": []}
        assert repo.get("nope") is None

    def test_list_ordered_paginates_and_filters(self, repo, table):
        a0 = _article("a").model_copy(update={"id": "a-0", "position": 0})
        a1 = _article("b").model_copy(update={"id": "a-1", "position": 1, "deleted": True})
        a2 = _article("c").model_copy(update={"id": "a-2", "position": 2})
        table.query.side_effect = [
            {"Items": [self._item(a0), self._item(a1)], "LastEvaluatedKey": {"k": 1}},
            {"Items": [self._item(a2)]},
        ]

        visible = repo.list_ordered("t-1")

        assert [a.id for a in visible] == ["a-0", "a-2"]
        assert table.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {"k": 1}

    def test_mark_deleted_updates_item(self, repo, table):
        article = _article().model_copy(update={"id": "a-1", "position": 4})
        table.query.return_value = {"Items": [self._item(article)]}
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)

        deleted = repo.mark_deleted("a-1", when)

        assert deleted.deleted is True
        kwargs = table.update_item.call_args.kwargs
        assert kwargs["Key"] == {"ticket_id": "t-1", "position": 4}
        assert kwargs["ExpressionAttributeValues"][":deleted_at"] == when.isoformat()


class TestPostgresDirectory:
    @pytest.fixture
    def conn(self):
        return MagicMock()

    @pytest.fixture
    def directory(self, conn):
        from repositories.postgres_repo import PostgresDirectory

        engine = MagicMock()
        engine.connect.return_value.__enter__.return_value = conn
        engine.begin.return_value.__enter__.return_value = conn
        return PostgresDirectory(engine)

    def test_get_ticket_maps_row(self, directory, conn):
        row = MagicMock()
        row._mapping = {
            "id": 7,
            "title": "Printer on fire",
            "owner_id": None,
            "group_id": 1,
            "group_name": "Users",
            "signature_id": 3,
            "customer_id": 42,
            "firstname": "Jane",
            "lastname": None,
            "email": "jane@example.com",
        }
        conn.execute.return_value.fetchone.return_value = row

        ticket = directory.get_ticket("7")

        assert ticket.id == "7"
        assert ticket.group.signature_id == "3"
        assert ticket.customer.firstname == "Jane"
        assert ticket.customer.lastname == ""
        assert ticket.owner_id is None

    def test_get_ticket_missing(self, directory, conn):
        conn.execute.return_value.fetchone.return_value = None
        assert directory.get_ticket("404") is None

    def test_save_ticket_updates_title(self, directory, conn, ticket):
        directory.save_ticket(ticket)
        params = conn.execute.call_args.args[1]
        assert params == {"title": "Printer on fire", "ticket_id": "t-1"}

    def test_list_text_modules(self, directory, conn):
        row = MagicMock()
        row._mapping = {"id": 1, "name": "test", "keywords": None, "content": "Hi", "active": True}
        conn.execute.return_value = [row]

        modules = directory.list_text_modules()

        assert [m.name for m in modules] == ["test"]
        assert modules[0].keywords == ""


class TestAttachmentStores:
    @patch("repositories.s3_repo.boto3")
    def test_s3_put(self, mock_boto3):
        from repositories.s3_repo import S3AttachmentStore

        client = MagicMock()
        mock_boto3.client.return_value = client
        store = S3AttachmentStore("bucket")

        ref = store.put("large.png", "image/png", b"\x89PNG")

        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "bucket"
        assert kwargs["Key"] == ref.store_key
        assert ref.store_key.startswith("attachments/") and ref.store_key.endswith("/large.png")
        assert ref.size == 4

    def test_memory_roundtrip(self):
        from repositories.s3_repo import MemoryAttachmentStore

        store = MemoryAttachmentStore()
        ref = store.put("a.txt", "text/plain", b"hello")
        assert store.get(ref) == b"hello"
