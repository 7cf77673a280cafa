"""
Lazily built service singletons shared by every handler.

Services survive warm Lambda invocations. With the in-memory backend all
handlers must see the same repositories, so they are built once here
rather than per handler module.
"""

from __future__ import annotations

import json
import os
from typing import Optional

import boto3
from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from utils.logging_config import get_logger
from utils.settings import Settings

logger = get_logger(__name__)

_engine = None
_article_service = None
_ticket_service = None
_text_module_service = None
_attachment_store = None


def get_db_engine(settings: Settings):
    """Get or create SQLAlchemy engine with connection pooling."""
    global _engine
    if _engine is None:
        db_url = settings.database_url
        if not db_url:
            secret_arn = os.environ.get("DB_SECRET_ARN")
            if secret_arn:
                db_url = _secret_to_db_url(secret_arn)
            if not db_url:
                logger.warning("DATABASE_URL not set; using in-memory directory")
                return None
        _engine = create_engine(
            db_url,
            poolclass=QueuePool,
            pool_size=1,
            max_overflow=2,
            pool_pre_ping=True,
            pool_recycle=300,
        )
    return _engine


def _secret_to_db_url(secret_arn: str) -> Optional[str]:
    """Build a SQLAlchemy URL from an RDS secret."""
    try:
        sm = boto3.client("secretsmanager")
        secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
        host = secret.get("host")
        port = secret.get("port", 5432)
        username = secret.get("username")
        password = secret.get("password")
        dbname = secret.get("dbname", "postgres")
        if not (host and username and password):
            return None
        return f"postgresql+psycopg2://{username}:{password}@{host}:{port}/{dbname}"
    except Exception as exc:
        logger.warning("Failed to load DB secret", extra={"error": str(exc)})
        return None


def _build_directory(settings: Settings):
    engine = get_db_engine(settings)
    if engine is None:
        from repositories.memory_repo import MemoryDirectory

        return MemoryDirectory()
    from repositories.postgres_repo import PostgresDirectory

    return PostgresDirectory(engine)


def configure(article_service, text_module_service=None, attachment_store=None) -> None:
    """Install pre-built services (local wiring and tests)."""
    global _article_service, _ticket_service, _text_module_service, _attachment_store
    from services.text_module_service import TextModuleService
    from services.ticket_service import TicketService
    from repositories.s3_repo import MemoryAttachmentStore

    _article_service = article_service
    _ticket_service = TicketService(article_service)
    _text_module_service = text_module_service or TextModuleService(article_service.directory)
    _attachment_store = attachment_store or MemoryAttachmentStore()


def reset() -> None:
    """Drop every singleton so the next call rebuilds from the environment."""
    global _engine, _article_service, _ticket_service, _text_module_service, _attachment_store
    _engine = None
    _article_service = None
    _ticket_service = None
    _text_module_service = None
    _attachment_store = None


def _build(settings: Optional[Settings] = None) -> None:
    from services.article_service import ArticleService

    settings = settings or Settings.from_environment()
    directory = _build_directory(settings)

    if settings.uses_aws:
        from repositories.dynamodb_repo import DynamoDbArticleRepository
        from repositories.s3_repo import S3AttachmentStore
        from services.notification_service import EventBridgePublisher

        articles = DynamoDbArticleRepository(settings.articles_table, region=settings.aws_region)
        publisher = EventBridgePublisher(settings.event_bus_name, region=settings.aws_region)
        attachments = S3AttachmentStore(settings.attachments_bucket)
    else:
        from repositories.memory_repo import MemoryArticleRepository
        from repositories.s3_repo import MemoryAttachmentStore
        from services.notification_service import MemoryPublisher

        articles = MemoryArticleRepository()
        publisher = MemoryPublisher()
        attachments = MemoryAttachmentStore()

    logger.info(
        "Article services initialised",
        extra={"environment": settings.environment, "backend": settings.storage_backend},
    )
    configure(ArticleService(articles, directory, publisher), attachment_store=attachments)


def get_article_service():
    if _article_service is None:
        _build()
    return _article_service


def get_ticket_service():
    if _ticket_service is None:
        _build()
    return _ticket_service


def get_text_module_service():
    if _text_module_service is None:
        _build()
    return _text_module_service


def get_attachment_store():
    if _attachment_store is None:
        _build()
    return _attachment_store
