"""
Application constants and metadata.
"""

# Application info
APP_NAME = "Power Supply Metrics"
APP_VERSION = "0.1.0"

# Default values
DEFAULT_SYSFS_ROOT = "/sys"
DEFAULT_NAMESPACE = "node"
DEFAULT_IGNORED_DEVICES = r"^(BAT|AC)\d+$"
DEFAULT_UPDATE_INTERVAL = 15.0
DEFAULT_MQTT_PORT = 1883
DEFAULT_MQTT_KEEPALIVE = 60
DEFAULT_TOPIC_PREFIX = "power_supply_metrics"
