"""
MQTT client and metric publishing.
"""

from .client import MQTTClient
from .publisher import MetricPublisher

__all__ = [
    "MQTTClient",
    "MetricPublisher",
]
