"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda keeps the service singletons warm across routes.
Uses Docker bundling for dependencies (runs in CI/CD pipeline).
Every route except /health goes through the platform's Lambda authorizer,
whose simple-response context becomes ``requestContext.authorizer.lambda``.
"""

from typing import Dict

from aws_cdk import (
    BundlingOptions,
    Duration,
    aws_ec2 as ec2,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_authorizers as authorizers,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct

# (method, path, needs an authenticated actor)
ROUTES = [
    (apigw.HttpMethod.GET, "/health", False),
    (apigw.HttpMethod.GET, "/tickets/{id}/articles", True),
    (apigw.HttpMethod.POST, "/tickets/{id}/articles", True),
    (apigw.HttpMethod.PATCH, "/tickets/{id}", True),
    (apigw.HttpMethod.DELETE, "/articles/{id}", True),
    (apigw.HttpMethod.GET, "/text-modules", True),
    (apigw.HttpMethod.POST, "/tickets/{id}/text-modules/expand", True),
    (apigw.HttpMethod.POST, "/attachments", True),
]


class ApiLayerConstruct(Construct):
    """Expose article endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        vpc: ec2.IVpc,
        authorizer_function: _lambda.IFunction,
        lambda_environment: Dict[str, str],
        lambda_memory_mb: int = 256,
        lambda_timeout_seconds: int = 15,
        authorizer_cache_seconds: int = 300,
    ) -> None:
        super().__init__(scope, construct_id)

        # Installs pydantic, python-json-logger, nh3, email-validator, sqlalchemy, psycopg2-binary.
        bundled_code = _lambda.Code.from_asset(
            "src",
            bundling=BundlingOptions(
                image=_lambda.Runtime.PYTHON_3_12.bundling_image,
                command=[
                    "bash", "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r . /asset-output"
                ],
            ),
        )

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.main.lambda_handler",
            code=bundled_code,
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            vpc=vpc,
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED),
            environment={"ENVIRONMENT": environment, **lambda_environment},
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"ticket-articles-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigw.CorsHttpMethod.ANY],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        self.authorizer = authorizers.HttpLambdaAuthorizer(
            "ActorAuthorizer",
            authorizer_function,
            response_types=[authorizers.HttpLambdaResponseType.SIMPLE],
            identity_source=["$request.header.Authorization"],
            results_cache_ttl=Duration.seconds(authorizer_cache_seconds),
        )

        for method, path, needs_actor in ROUTES:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
                authorizer=self.authorizer if needs_actor else None,
            )
