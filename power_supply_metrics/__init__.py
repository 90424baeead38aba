"""
Power supply metrics exporter.

Reads /sys/class/power_supply and publishes labeled gauge samples.
"""

from .const import APP_VERSION

__version__ = APP_VERSION
