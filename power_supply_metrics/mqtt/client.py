"""
MQTT client wrapper using aiomqtt.

Features:
- Automatic reconnection with backoff
- Last Will and Testament (LWT) for availability
- Bounded queue for messages published while disconnected
"""

import asyncio
import json
import uuid
from typing import Any

import aiomqtt

from ..config.schema import MQTTConfig
from ..logging import get_logger

logger = get_logger("mqtt.client")


class MQTTClient:
    """
    Async MQTT client with a background publisher task.

    publish() only enqueues; the publisher task owns the connection and
    reconnects when it is lost.
    """

    QUEUE_SIZE = 1000

    def __init__(
        self,
        config: MQTTConfig,
        availability_topic: str | None = None,
    ):
        """
        Initialize MQTT client.

        Args:
            config: MQTT configuration
            availability_topic: Topic for availability messages (LWT)
        """
        self.config = config
        self.availability_topic = availability_topic or f"{config.topic_prefix}/status"

        self._client: aiomqtt.Client | None = None
        self._connected = False
        self._reconnect_interval = 5.0
        self._max_reconnect_interval = 60.0

        self._client_id = config.client_id or f"power_supply_metrics_{uuid.uuid4().hex[:8]}"

        self._queue: asyncio.Queue[tuple[str, str, int, bool]] = asyncio.Queue(
            maxsize=self.QUEUE_SIZE
        )
        self._publisher_task: asyncio.Task | None = None
        self._running = False

    @property
    def connected(self) -> bool:
        """Check if client is connected."""
        return self._connected

    @property
    def pending(self) -> int:
        """Number of queued messages."""
        return self._queue.qsize()

    def _create_client(self) -> aiomqtt.Client:
        will = aiomqtt.Will(
            topic=self.availability_topic,
            payload="offline",
            qos=1,
            retain=self.config.should_retain_status(),
        )
        return aiomqtt.Client(
            hostname=self.config.host,
            port=self.config.port,
            username=self.config.username,
            password=self.config.password,
            identifier=self._client_id,
            keepalive=self.config.keepalive,
            will=will,
        )

    async def connect(self) -> None:
        """
        Connect to MQTT broker and announce availability.

        Raises:
            aiomqtt.MqttError: If connection fails
        """
        logger.debug(f"Connecting to MQTT broker {self.config.host}:{self.config.port} as {self._client_id}")

        self._client = self._create_client()
        await self._client.__aenter__()
        self._connected = True

        await self._client.publish(
            self.availability_topic,
            "online",
            qos=1,
            retain=self.config.should_retain_status(),
        )
        logger.info(f"Connected to MQTT broker at {self.config.host}:{self.config.port}")

    async def disconnect(self) -> None:
        """Publish offline status and disconnect."""
        if not (self._client and self._connected):
            return

        try:
            await self._client.publish(
                self.availability_topic,
                "offline",
                qos=1,
                retain=self.config.should_retain_status(),
            )
            await self._client.__aexit__(None, None, None)
        except aiomqtt.MqttError as e:
            logger.warning(f"Error while disconnecting: {e}")
        finally:
            self._connected = False
            self._client = None

        logger.info("Disconnected from MQTT broker")

    def publish(self, topic: str, payload: Any, retain: bool | None = None) -> bool:
        """
        Queue a message.

        Args:
            topic: MQTT topic
            payload: str is sent as-is, anything else is JSON encoded
            retain: Retain flag (None = data retain mode from config)

        Returns:
            False if the queue is full and the message was dropped
        """
        if retain is None:
            retain = self.config.should_retain_data()

        payload_str = payload if isinstance(payload, str) else json.dumps(payload)

        try:
            self._queue.put_nowait((topic, payload_str, self.config.qos, retain))
        except asyncio.QueueFull:
            logger.warning(f"Message queue full, dropping message for {topic}")
            return False
        return True

    async def _publisher_loop(self) -> None:
        """Background task: keep connected and drain the queue."""
        reconnect_interval = self._reconnect_interval

        while self._running:
            try:
                if not self._connected:
                    try:
                        await self.connect()
                        reconnect_interval = self._reconnect_interval
                    except aiomqtt.MqttError as e:
                        logger.error(f"Failed to connect to MQTT: {e}")
                        await asyncio.sleep(reconnect_interval)
                        reconnect_interval = min(reconnect_interval * 2, self._max_reconnect_interval)
                        continue

                try:
                    topic, payload, qos, retain = await asyncio.wait_for(self._queue.get(), timeout=1.0)
                except asyncio.TimeoutError:
                    continue

                try:
                    logger.debug(f"Publishing to {topic}: {payload[:100]}")
                    await self._client.publish(topic, payload, qos=qos, retain=retain)
                except aiomqtt.MqttError as e:
                    logger.error(f"MQTT error: {e}")
                    self._connected = False
                    self._client = None
                    try:
                        self._queue.put_nowait((topic, payload, qos, retain))
                    except asyncio.QueueFull:
                        logger.warning(f"Message queue full, dropping message for {topic}")

            except Exception as e:
                # The failed message is dropped
                logger.error(f"Publisher loop error: {e}")
                self._connected = False
                await asyncio.sleep(1.0)

    async def start(self) -> None:
        """Start the background publisher."""
        self._running = True
        self._publisher_task = asyncio.create_task(self._publisher_loop())
        logger.info("MQTT client started")

    async def stop(self) -> None:
        """Stop the publisher and disconnect."""
        self._running = False

        if self._publisher_task:
            self._publisher_task.cancel()
            try:
                await self._publisher_task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error(f"Publisher task failed: {e}")
            self._publisher_task = None

        await self.disconnect()
        logger.info("MQTT client stopped")

    async def wait_connected(self, timeout: float = 30.0) -> bool:
        """
        Wait for connection to be established.

        Returns:
            True if connected, False on timeout
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not self._connected:
            if loop.time() > deadline:
                return False
            await asyncio.sleep(0.1)
        return True
