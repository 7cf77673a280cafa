"""
Environment-specific configuration settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Stack settings with cost-optimized defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"  # Default AWS region

    # Database Configuration (tickets, groups, signatures, text modules)
    db_instance_class: str = "t3.micro"  # Free tier eligible
    db_allocated_storage: int = 20  # Minimum GB

    # Lambda Configuration
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 15
    log_level: str = "INFO"

    # Attachments older than this move to infrequent access.
    attachment_ia_days: int = 30

    # Platform Lambda authorizer that resolves the calling agent or customer.
    authorizer_function_arn: str = ""

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        region = os.environ.get("AWS_REGION", "eu-west-2")
        log_level = os.environ.get("LOG_LEVEL", "INFO")
        authorizer_arn = os.environ.get("AUTHORIZER_FUNCTION_ARN", "")

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                aws_region=region,
                db_instance_class="t3.small",  # Upgrade for prod
                db_allocated_storage=50,
                lambda_memory_mb=512,
                lambda_timeout_seconds=30,
                log_level=log_level,
                authorizer_function_arn=authorizer_arn,
            )

        return cls(
            environment=env,
            aws_region=region,
            log_level=log_level,
            authorizer_function_arn=authorizer_arn,
        )
