"""
Tests for constants.
"""

import re

from power_supply_metrics import __version__
from power_supply_metrics.const import APP_NAME, APP_VERSION, DEFAULT_IGNORED_DEVICES


def test_constants():
    """Test that constants are defined."""
    assert APP_NAME == "Power Supply Metrics"
    assert APP_VERSION == __version__


def test_default_ignored_devices_pattern():
    pattern = re.compile(DEFAULT_IGNORED_DEVICES)

    assert pattern.search("BAT0")
    assert pattern.search("AC1")
    assert not pattern.search("ADP1")
    assert not pattern.search("BAT")
