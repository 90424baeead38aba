"""
Configuration schema with dataclasses for validation and type safety.

Defines all configuration sections, their fields, defaults, and validation.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from ..const import (
    DEFAULT_IGNORED_DEVICES,
    DEFAULT_MQTT_KEEPALIVE,
    DEFAULT_MQTT_PORT,
    DEFAULT_NAMESPACE,
    DEFAULT_SYSFS_ROOT,
    DEFAULT_TOPIC_PREFIX,
    DEFAULT_UPDATE_INTERVAL,
)
from .parser import Block, ConfigDocument


class RetainMode(Enum):
    """MQTT retain message modes."""
    OFF = "off"                # Don't retain any messages
    ONLINE = "online"          # Only retain availability (LWT) status
    FULL = "full"              # Retain all messages


@dataclass
class MQTTConfig:
    """MQTT connection configuration."""
    host: str = "localhost"
    port: int = DEFAULT_MQTT_PORT
    username: str | None = None
    password: str | None = None
    client_id: str | None = None
    topic_prefix: str = DEFAULT_TOPIC_PREFIX
    qos: int = 1
    retain: RetainMode = RetainMode.ONLINE
    keepalive: int = DEFAULT_MQTT_KEEPALIVE

    @classmethod
    def from_block(cls, block: Block | None) -> "MQTTConfig":
        """Create MQTTConfig from a parsed 'mqtt' block."""
        if block is None:
            return cls()

        retain_val = block.get_value("retain", "online")
        if isinstance(retain_val, bool):
            # on -> full, off -> off
            retain_mode = RetainMode.FULL if retain_val else RetainMode.OFF
        else:
            try:
                retain_mode = RetainMode(str(retain_val).lower())
            except ValueError:
                raise ValueError(f"Invalid retain mode: {retain_val!r}") from None

        qos = int(block.get_value("qos", 1))
        if qos not in (0, 1, 2):
            raise ValueError(f"Invalid MQTT qos: {qos}")

        return cls(
            host=block.get_value("host", "localhost"),
            port=int(block.get_value("port", DEFAULT_MQTT_PORT)),
            username=block.get_value("username"),
            password=block.get_value("password"),
            client_id=block.get_value("client_id"),
            topic_prefix=block.get_value("topic_prefix", DEFAULT_TOPIC_PREFIX),
            qos=qos,
            retain=retain_mode,
            keepalive=int(block.get_value("keepalive", DEFAULT_MQTT_KEEPALIVE)),
        )

    def should_retain_data(self) -> bool:
        """Check if data messages should be retained."""
        return self.retain == RetainMode.FULL

    def should_retain_status(self) -> bool:
        """Check if status/availability messages should be retained."""
        return self.retain in (RetainMode.FULL, RetainMode.ONLINE)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "info"  # debug, info, warning, error
    file: str | None = None  # Log file path
    file_level: str = "debug"
    file_max_size: int = 10  # Max file size in MB
    file_keep: int = 5  # Number of backup files to keep
    colors: bool = True
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @classmethod
    def from_block(cls, block: Block | None) -> "LoggingConfig":
        """Create LoggingConfig from a parsed 'logging' block."""
        if block is None:
            return cls()

        return cls(
            level=str(block.get_value("level", "info")),
            file=block.get_value("file"),
            file_level=str(block.get_value("file_level", "debug")),
            file_max_size=int(block.get_value("file_max_size", 10)),
            file_keep=int(block.get_value("file_keep", 5)),
            colors=bool(block.get_value("colors", True)),
            format=block.get_value("format", cls.format),
        )


@dataclass
class PowerSupplyConfig:
    """Power supply collector configuration."""
    name: str = "power_supply"
    sysfs: str = DEFAULT_SYSFS_ROOT      # sysfs mount point
    namespace: str = DEFAULT_NAMESPACE   # Metric name prefix
    ignored_devices: str = DEFAULT_IGNORED_DEVICES  # Regex of device paths to skip
    update_interval: float = DEFAULT_UPDATE_INTERVAL

    @classmethod
    def from_block(cls, block: Block | None) -> "PowerSupplyConfig":
        """Create PowerSupplyConfig from a parsed 'power_supply' block."""
        if block is None:
            return cls()

        ignored = str(block.get_value("ignored_devices", DEFAULT_IGNORED_DEVICES))
        try:
            re.compile(ignored)
        except re.error as e:
            raise ValueError(f"Invalid ignored_devices pattern {ignored!r}: {e}") from e

        interval = float(block.get_value("update_interval", DEFAULT_UPDATE_INTERVAL))
        if interval <= 0:
            raise ValueError(f"update_interval must be positive, got {interval}")

        return cls(
            name=block.name or "power_supply",
            sysfs=str(block.get_value("sysfs", DEFAULT_SYSFS_ROOT)),
            namespace=str(block.get_value("namespace", DEFAULT_NAMESPACE)),
            ignored_devices=ignored,
            update_interval=interval,
        )


@dataclass
class Config:
    """Complete application configuration."""
    mqtt: MQTTConfig = field(default_factory=MQTTConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    power_supply: PowerSupplyConfig = field(default_factory=PowerSupplyConfig)

    @classmethod
    def from_document(cls, doc: ConfigDocument) -> "Config":
        """Create Config from a parsed ConfigDocument."""
        return cls(
            mqtt=MQTTConfig.from_block(doc.get_block("mqtt")),
            logging=LoggingConfig.from_block(doc.get_block("logging")),
            power_supply=PowerSupplyConfig.from_block(doc.get_block("power_supply")),
        )
