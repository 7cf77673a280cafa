"""
Runtime configuration for the article Lambdas.

Defaults keep everything in memory so local runs and tests need no AWS
resources; the CDK stack switches STORAGE_BACKEND to "aws".
"""

from dataclasses import dataclass
import os
from typing import Optional


@dataclass
class Settings:
    """Application settings resolved from the Lambda environment."""

    environment: str = "dev"
    storage_backend: str = "memory"  # memory | aws
    aws_region: str = "eu-west-2"

    # AWS resources
    articles_table: str = "ticket-articles"
    event_bus_name: str = "default"
    attachments_bucket: str = "ticket-article-attachments"

    # PostgreSQL holds tickets, groups, signatures and text modules.
    database_url: Optional[str] = None

    @property
    def uses_aws(self) -> bool:
        return self.storage_backend == "aws"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            storage_backend=os.environ.get("STORAGE_BACKEND", "memory").lower(),
            aws_region=os.environ.get("AWS_REGION", "eu-west-2"),
            articles_table=os.environ.get("ARTICLES_TABLE", "ticket-articles"),
            event_bus_name=os.environ.get("EVENT_BUS_NAME", "default"),
            attachments_bucket=os.environ.get(
                "ATTACHMENTS_BUCKET", "ticket-article-attachments"
            ),
            database_url=os.environ.get("DATABASE_URL") or None,
        )
