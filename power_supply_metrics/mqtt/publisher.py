"""
Publishing of collection results to MQTT.

Topics:
- {prefix}/{device}/{metric}  JSON {"value": ..., "labels": {...}}
- {prefix}/state              "online" or "error"
"""

from typing import Protocol

from ..collectors.base import CollectorResult
from ..logging import get_logger
from ..models.metric import MetricRecord

logger = get_logger("mqtt.publisher")


class Publisher(Protocol):
    def publish(self, topic: str, payload, retain: bool | None = None) -> bool: ...


class MetricPublisher:
    """Hands each cycle's records to an MQTT client."""

    def __init__(self, client: Publisher, topic_prefix: str):
        self.client = client
        self.topic_prefix = topic_prefix.rstrip("/")

    def record_topic(self, record: MetricRecord) -> str:
        """Topic for one record."""
        device = record.device_name or "unknown"
        return f"{self.topic_prefix}/{device}/{record.name}"

    @property
    def state_topic(self) -> str:
        return f"{self.topic_prefix}/state"

    def publish_result(self, result: CollectorResult) -> int:
        """
        Publish a cycle result.

        Returns:
            Number of records queued
        """
        if not result.available:
            self.client.publish(self.state_topic, "error")
            return 0

        queued = 0
        for record in result.records:
            if self.client.publish(self.record_topic(record), record.to_json_dict()):
                queued += 1

        self.client.publish(self.state_topic, "online")

        if queued < len(result.records):
            logger.warning(f"Dropped {len(result.records) - queued} of {len(result.records)} records")
        return queued
