"""
Event pipeline: article events -> EventBridge bus -> subscribers.

The API Lambda publishes ArticleCreated/ArticleDeleted/TicketUpdated events;
a catch-all rule archives them to CloudWatch Logs so the real-time fan-out
can be debugged.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_events as events,
    aws_events_targets as targets,
    aws_logs as logs,
)
from constructs import Construct

EVENT_SOURCE = "support.tickets.articles"


class EventPipelineConstruct(Construct):
    """Bus that carries ticket change notifications."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
    ) -> None:
        super().__init__(scope, construct_id)

        self.event_bus = events.EventBus(
            self, "TicketEvents", event_bus_name=f"ticket-events-{environment}"
        )

        self.event_log = logs.LogGroup(
            self,
            "TicketEventLog",
            retention=logs.RetentionDays.ONE_WEEK,
            removal_policy=RemovalPolicy.DESTROY,
        )

        events.Rule(
            self,
            "ArticleEventsToLogs",
            event_bus=self.event_bus,
            event_pattern=events.EventPattern(
                source=[EVENT_SOURCE],
                detail_type=["ArticleCreated", "ArticleDeleted", "TicketUpdated"],
            ),
            targets=[targets.CloudWatchLogGroup(self.event_log)],
        )
