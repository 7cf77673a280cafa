"""
Ticket change notifications.

Publishing is fire-and-forget: a failed publish is logged and dropped so it
can never undo an article that has already been stored. Subscribers must
tolerate duplicates.
"""

from __future__ import annotations

import json
from typing import List, Optional, Tuple

import boto3

from models.article import TicketEvent
from utils.logging_config import get_logger

logger = get_logger(__name__)

EVENT_SOURCE = "support.tickets.articles"


class EventBridgePublisher:
    """Publish ticket events to an EventBridge bus."""

    def __init__(self, event_bus_name: str = "default", region: Optional[str] = None):
        self.event_bus_name = event_bus_name
        self.client = boto3.client("events", region_name=region)

    def publish(self, ticket_id: str, event: TicketEvent) -> None:
        try:
            response = self.client.put_events(
                Entries=[
                    {
                        "Source": EVENT_SOURCE,
                        "DetailType": event.type,
                        "Detail": json.dumps(event.model_dump(mode="json")),
                        "EventBusName": self.event_bus_name,
                        "Resources": [f"ticket/{ticket_id}"],
                    }
                ]
            )
            if response.get("FailedEntryCount"):
                logger.warning(
                    "Ticket event rejected",
                    extra={"ticket_id": ticket_id, "event_type": event.type},
                )
        except Exception as exc:
            logger.warning(
                "Failed to publish ticket event",
                extra={"ticket_id": ticket_id, "event_type": event.type, "error": str(exc)},
            )


class MemoryPublisher:
    """Collects events in order; used for local runs and tests."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, TicketEvent]] = []

    def publish(self, ticket_id: str, event: TicketEvent) -> None:
        self.events.append((ticket_id, event))

    def for_ticket(self, ticket_id: str) -> List[TicketEvent]:
        return [event for tid, event in self.events if tid == ticket_id]
