"""
Entry point for Power Supply Metrics.

Usage:
    python -m power_supply_metrics /path/to/config.conf
    python -m power_supply_metrics --once
    python -m power_supply_metrics --help
"""

import argparse
import asyncio
import sys
from pathlib import Path

from . import __version__
from .app import collect_once, load_and_setup, run_app
from .config.loader import ConfigError, ConfigLoader
from .config.schema import Config
from .logging import LogConfig, get_logger, setup_logging

logger = get_logger("main")

DEFAULT_CONFIG_PATH = "/etc/power-supply-metrics/config.conf"


def validate_config(config_path: str) -> int:
    """Validate configuration file and print warnings."""
    try:
        loader = ConfigLoader()
        config = loader.load_file(config_path)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    warnings = loader.validate(config)
    if warnings:
        print(f"Configuration warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    print("\nConfiguration summary:")
    print(f"  MQTT: {config.mqtt.host}:{config.mqtt.port} (prefix {config.mqtt.topic_prefix})")
    print(f"  Logging level: {config.logging.level}")
    if config.logging.file:
        print(f"  Log file: {config.logging.file}")
    print(f"  sysfs: {config.power_supply.sysfs}")
    print(f"  Ignored devices: {config.power_supply.ignored_devices}")
    print(f"  Update interval: {config.power_supply.update_interval}s")

    print("\nConfiguration is valid!")
    return 0


def run_once(config: Config) -> int:
    """Run one collection cycle and print records in text form."""
    result = asyncio.run(collect_once(config.power_supply))

    if not result.available:
        print(f"Collection failed: {result.error}", file=sys.stderr)
        return 1

    for record in result.records:
        print(record.format_text())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="power-supply-metrics",
        description="Linux power supply telemetry exporter via MQTT",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging (INFO level)")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging (DEBUG level)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Quiet mode (only errors)")
    parser.add_argument("--log-file", metavar="PATH", help="Write logs to file")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--validate", action="store_true", help="Validate configuration and exit")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Collect once, print records to stdout and exit (no MQTT)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    log_config = LogConfig()
    if args.debug:
        log_config.console_level = "debug"
    elif args.verbose:
        log_config.console_level = "info"
    elif args.quiet:
        log_config.console_level = "error"
    else:
        log_config.console_level = "warning"

    if args.no_color:
        log_config.console_colors = False

    if args.log_file:
        log_config.file_enabled = True
        log_config.file_path = args.log_file

    setup_logging(log_config)

    # --once works without a config file
    if args.once and args.config is None:
        return run_once(Config())

    config_path = Path(args.config or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        print(f"Configuration file not found: {config_path}", file=sys.stderr)
        return 1

    if args.validate:
        return validate_config(str(config_path))

    try:
        if args.once:
            return run_once(load_and_setup(str(config_path), cli_log_config=log_config))
        asyncio.run(run_app(str(config_path), cli_log_config=log_config))
        return 0
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
