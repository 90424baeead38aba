"""
Tests for MQTT publication of collection results.
"""

import asyncio
import json
import logging

from power_supply_metrics.collectors.base import CollectorResult
from power_supply_metrics.collectors.power_supply import PowerSupplyCollector
from power_supply_metrics.config.schema import MQTTConfig, RetainMode
from power_supply_metrics.models.metric import DeviceDescriptor, MetricDesc, MetricRecord
from power_supply_metrics.mqtt.client import MQTTClient
from power_supply_metrics.mqtt.publisher import MetricPublisher


class FakeClient:
    """Records published messages."""

    def __init__(self, accept: int | None = None):
        self.messages: list[tuple[str, object]] = []
        self.accept = accept

    def publish(self, topic, payload, retain=None) -> bool:
        if self.accept is not None and len(self.messages) >= self.accept:
            return False
        self.messages.append((topic, payload))
        return True


def test_publish_result(make_supply, config_for) -> None:
    make_supply("BAT0", {"status": "Charging", "model_name": "X1"})
    result = asyncio.run(PowerSupplyCollector(config_for()).collect())
    client = FakeClient()

    queued = MetricPublisher(client, "laptop/").publish_result(result)

    assert queued == len(result.records)
    topic, payload = client.messages[0]
    assert topic == "laptop/BAT0/node_power_supply_alarm"
    assert payload["value"] == 0
    assert payload["labels"]["model"] == "X1"
    status = dict(client.messages)["laptop/BAT0/node_power_supply_status"]
    assert status["value"] == 1
    assert client.messages[-1] == ("laptop/state", "online")


def test_publish_failed_result() -> None:
    result = CollectorResult()
    result.set_error("couldn't list /sys/class/power_supply")
    client = FakeClient()

    assert MetricPublisher(client, "laptop").publish_result(result) == 0
    assert client.messages == [("laptop/state", "error")]


def test_publish_counts_dropped(make_supply, config_for) -> None:
    make_supply("BAT0")
    result = asyncio.run(PowerSupplyCollector(config_for()).collect())

    queued = MetricPublisher(FakeClient(accept=3), "p").publish_result(result)

    assert queued == 3


def test_mqtt_client_queues_json() -> None:
    async def scenario() -> list[tuple[str, str, int, bool]]:
        client = MQTTClient(MQTTConfig(topic_prefix="p", qos=0, retain=RetainMode.FULL))
        assert client.publish("p/BAT0/x", {"value": 1.0, "labels": {}})
        assert client.publish("p/state", "online", retain=False)
        assert client.pending == 2
        return [client._queue.get_nowait() for _ in range(2)]

    first, second = asyncio.run(scenario())

    assert first[0] == "p/BAT0/x"
    assert json.loads(first[1]) == {"value": 1.0, "labels": {}}
    assert first[2:] == (0, True)
    assert second == ("p/state", "online", 0, False)


def test_mqtt_client_default_availability_topic() -> None:
    client = MQTTClient(MQTTConfig(topic_prefix="laptop"))

    assert client.availability_topic == "laptop/status"
    assert not client.connected


def test_record_topic_without_device() -> None:
    record = MetricRecord(MetricDesc("m", ""), 0.0, DeviceDescriptor())

    assert MetricPublisher(FakeClient(), "p").record_topic(record) == "p/unknown/m"


class FailingBroker:
    """Connected aiomqtt client stand-in whose publish raises."""

    def __init__(self, error: Exception):
        self.error = error

    async def publish(self, topic, payload, qos=0, retain=False):
        raise self.error


class RecordingBroker:
    """Connected aiomqtt client stand-in that records publishes."""

    def __init__(self):
        self.published: list[tuple[str, str]] = []
        self.closed = False

    async def publish(self, topic, payload, qos=0, retain=False):
        self.published.append((topic, payload))

    async def __aexit__(self, *exc_info):
        self.closed = True


def test_mqtt_client_survives_unexpected_publish_error(caplog) -> None:
    client = MQTTClient(MQTTConfig(topic_prefix="p"))

    async def scenario() -> bool:
        client._client = FailingBroker(ValueError("Publish topic cannot contain wildcards."))
        client._connected = True
        await client.start()
        client.publish("p/#", "1")
        await asyncio.sleep(0.2)
        alive = not client._publisher_task.done()
        await client.stop()
        return alive

    with caplog.at_level(logging.ERROR, logger="power_supply_metrics"):
        assert asyncio.run(scenario())

    assert "Publisher loop error: Publish topic cannot contain wildcards." in caplog.text
    assert client.pending == 0
    assert not client.connected


def test_mqtt_client_stop_after_task_failure() -> None:
    broker = RecordingBroker()
    client = MQTTClient(MQTTConfig(topic_prefix="p"))

    async def crash() -> None:
        raise TypeError("boom")

    async def scenario() -> None:
        client._publisher_task = asyncio.create_task(crash())
        await asyncio.sleep(0)
        client._client = broker
        client._connected = True
        await client.stop()

    asyncio.run(scenario())

    assert broker.published == [("p/status", "offline")]
    assert broker.closed
    assert not client.connected
