from unittest.mock import patch

import pytest

from services import registry


@pytest.fixture(autouse=True)
def clean_registry():
    registry.reset()
    yield
    registry.reset()


def test_memory_backend_by_default(monkeypatch):
    from repositories.memory_repo import MemoryArticleRepository, MemoryDirectory

    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_SECRET_ARN", raising=False)

    service = registry.get_article_service()

    assert isinstance(service.articles, MemoryArticleRepository)
    assert isinstance(service.directory, MemoryDirectory)
    assert registry.get_ticket_service().articles is service
    assert registry.get_text_module_service().directory is service.directory


def test_aws_backend(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "aws")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_SECRET_ARN", raising=False)

    with patch("repositories.dynamodb_repo.boto3"), patch(
        "repositories.s3_repo.boto3"
    ), patch("services.notification_service.boto3"):
        from repositories.dynamodb_repo import DynamoDbArticleRepository
        from services.notification_service import EventBridgePublisher

        service = registry.get_article_service()

        assert isinstance(service.articles, DynamoDbArticleRepository)
        assert isinstance(service.publisher, EventBridgePublisher)


def test_database_url_selects_postgres(monkeypatch):
    from repositories.postgres_repo import PostgresDirectory

    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://u:p@db:5432/support")

    with patch("services.registry.create_engine") as mock_create_engine:
        service = registry.get_article_service()

    assert isinstance(service.directory, PostgresDirectory)
    assert service.directory.engine is mock_create_engine.return_value
    assert mock_create_engine.call_args[0][0] == "postgresql+psycopg2://u:p@db:5432/support"


def test_secret_failure_falls_back(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_SECRET_ARN", "arn:aws:secretsmanager:eu-west-2:1:secret:x")

    with patch("services.registry.boto3") as mock_boto3:
        mock_boto3.client.return_value.get_secret_value.side_effect = Exception("denied")
        from repositories.memory_repo import MemoryDirectory

        service = registry.get_article_service()

    assert isinstance(service.directory, MemoryDirectory)
