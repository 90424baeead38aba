"""
Main application.

Handles:
- Configuration loading
- Running the power supply collector at a fixed interval
- MQTT publishing
- Graceful shutdown
"""

import asyncio
import signal

from .collectors.base import CollectorResult
from .collectors.power_supply import PowerSupplyCollector
from .config.loader import ConfigLoader
from .config.schema import Config, PowerSupplyConfig
from .logging import LogConfig, get_logger, setup_logging
from .mqtt.client import MQTTClient
from .mqtt.publisher import MetricPublisher

logger = get_logger("app")


class Application:
    """
    Main application class.

    Runs one collector and publishes every cycle's records over MQTT.
    """

    def __init__(self, config: Config):
        """
        Initialize application.

        Args:
            config: Application configuration
        """
        self.config = config

        self.mqtt = MQTTClient(
            config.mqtt,
            availability_topic=f"{config.mqtt.topic_prefix}/status",
        )
        self.publisher = MetricPublisher(self.mqtt, config.mqtt.topic_prefix)
        self.collector = PowerSupplyCollector(config.power_supply)

        self._task: asyncio.Task | None = None
        self._shutdown_event = asyncio.Event()

    def handle_result(self, result: CollectorResult) -> None:
        """Publish a cycle result and report failures."""
        if not result.available:
            logger.warning(f"Collector {self.collector.name} failed: {result.error}")
        self.publisher.publish_result(result)

    async def _run_collector(self) -> None:
        """Collection loop; cycles never overlap."""
        logger.info(
            f"Starting collector: {self.collector.name} (interval: {self.collector.update_interval}s)"
        )
        async for result in self.collector.run_forever():
            self.handle_result(result)

    def _setup_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._signal_handler)

    def _signal_handler(self) -> None:
        logger.info("Received shutdown signal")
        self._shutdown_event.set()

    async def start(self) -> None:
        """Start the application and wait for shutdown."""
        logger.info("Starting Power Supply Metrics")

        await self.mqtt.start()

        connected = await self.mqtt.wait_connected(timeout=30.0)
        if not connected:
            logger.error("Failed to connect to MQTT broker")
            await self.mqtt.stop()
            return

        self._setup_signal_handlers()
        self._task = asyncio.create_task(self._run_collector())
        logger.info("Power Supply Metrics started successfully")

        await self._shutdown_event.wait()
        await self.stop()

    async def stop(self) -> None:
        """Stop the application."""
        logger.info("Stopping Power Supply Metrics")

        if self._task:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None

        await self.mqtt.stop()
        logger.info("Power Supply Metrics stopped")


async def collect_once(config: PowerSupplyConfig) -> CollectorResult:
    """Run a single collection cycle without MQTT."""
    collector = PowerSupplyCollector(config)
    return await collector.safe_collect()


def load_and_setup(config_path: str, cli_log_config: LogConfig | None = None) -> Config:
    """
    Load configuration and configure logging from it.

    CLI logging flags take precedence; file output settings from the
    config file are used when the CLI did not set any.

    Raises:
        ConfigError: If configuration cannot be loaded
    """
    loader = ConfigLoader()
    config = loader.load_file(config_path)

    if cli_log_config is None:
        setup_logging(LogConfig.from_config(config.logging))
    else:
        cli_log_config.merge_file_settings(config.logging)
        setup_logging(cli_log_config)

    logger.info(f"Loaded configuration from {config_path}")
    logger.debug(f"MQTT: {config.mqtt.host}:{config.mqtt.port}, topic prefix {config.mqtt.topic_prefix}")
    logger.debug(f"sysfs: {config.power_supply.sysfs}, ignored devices: {config.power_supply.ignored_devices}")

    for warning in loader.validate(config):
        logger.warning(f"Config warning: {warning}")

    return config


async def run_app(config_path: str, cli_log_config: LogConfig | None = None) -> None:
    """
    Load configuration and run the application.

    Args:
        config_path: Path to configuration file
        cli_log_config: Logging config from CLI args (overrides file config)
    """
    config = load_and_setup(config_path, cli_log_config)
    app = Application(config)
    await app.start()
