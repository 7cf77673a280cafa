"""
Main CDK Stack for the ticket article service.
"""

from aws_cdk import (
    Stack,
    Tags,
    CfnOutput,
    aws_lambda as _lambda,
)
from constructs import Construct

from infrastructure.constructs.data_layer import DataLayerConstruct
from infrastructure.constructs.api_layer import ApiLayerConstruct
from infrastructure.constructs.event_pipeline import EventPipelineConstruct
from infrastructure.config.settings import Settings


class TicketArticlesStack(Stack):
    """Main stack wiring all constructs together."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Global tags for cost/accounting.
        Tags.of(self).add("Project", "ticket-articles")
        Tags.of(self).add("Environment", settings.environment)
        Tags.of(self).add("CostCenter", "support-platform")
        Tags.of(self).add("ManagedBy", "cdk")

        # 1) Storage.
        data_construct = DataLayerConstruct(
            self,
            "DataLayer",
            environment=settings.environment,
            db_instance_class=settings.db_instance_class,
            db_allocated_storage=settings.db_allocated_storage,
            attachment_ia_days=settings.attachment_ia_days,
        )

        # 2) Change notifications.
        event_construct = EventPipelineConstruct(
            self,
            "EventPipeline",
            environment=settings.environment,
        )

        # 3) API layer (single Lambda) behind the platform authorizer.
        if not settings.authorizer_function_arn:
            raise ValueError("AUTHORIZER_FUNCTION_ARN must be set to deploy the API")
        authorizer_fn = _lambda.Function.from_function_attributes(
            self,
            "ActorAuthorizerFunction",
            function_arn=settings.authorizer_function_arn,
            same_environment=True,
        )
        api_construct = ApiLayerConstruct(
            self,
            "ApiLayer",
            environment=settings.environment,
            vpc=data_construct.vpc,
            authorizer_function=authorizer_fn,
            lambda_environment={
                "STORAGE_BACKEND": "aws",
                "LOG_LEVEL": settings.log_level,
                "DB_SECRET_ARN": data_construct.db_secret.secret_arn,
                "ARTICLES_TABLE": data_construct.articles_table.table_name,
                "ATTACHMENTS_BUCKET": data_construct.attachments_bucket.bucket_name,
                "EVENT_BUS_NAME": event_construct.event_bus.event_bus_name,
            },
            lambda_memory_mb=settings.lambda_memory_mb,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # Permissions for the API Lambda.
        fn = api_construct.main_lambda
        data_construct.db_secret.grant_read(fn)
        data_construct.db_instance.connections.allow_default_port_from(fn)
        data_construct.articles_table.grant_read_write_data(fn)
        data_construct.attachments_bucket.grant_read_write(fn)
        event_construct.event_bus.grant_put_events_to(fn)

        # Outputs to quickly find resources.
        CfnOutput(self, "ApiEndpoint", value=api_construct.api.api_endpoint)
        CfnOutput(self, "ArticlesTable", value=data_construct.articles_table.table_name)
        CfnOutput(self, "AttachmentsBucket", value=data_construct.attachments_bucket.bucket_name)
        CfnOutput(self, "EventBusName", value=event_construct.event_bus.event_bus_name)
