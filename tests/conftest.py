"""
Pytest configuration and fixtures.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from power_supply_metrics.config.schema import PowerSupplyConfig

# A typical laptop battery
_BATTERY_ATTRIBUTES = {
    "alarm": "0",
    "charge_full": "4680000",
    "charge_full_design": "5800000",
    "charge_now": "3120000",
    "charge_type": "Fast",
    "current_now": "1452000",
    "cycle_count": "87",
    "health": "Good",
    "model_name": "5B10W13930",
    "online": "1",
    "present": "1",
    "serial_number": "1234",
    "status": "Discharging",
    "technology": "Li-poly",
    "type": "Battery",
    "voltage_min_design": "11520000",
    "voltage_now": "12211000",
}

MakeSupply = Callable[..., Path]


@pytest.fixture
def battery_attributes() -> dict[str, str]:
    """Attribute files of a typical laptop battery (fresh copy per test)."""
    return dict(_BATTERY_ATTRIBUTES)


@pytest.fixture
def sysfs_root(tmp_path: Path) -> Path:
    """Empty sysfs tree with a power_supply class directory."""
    root = tmp_path / "sys"
    (root / "class" / "power_supply").mkdir(parents=True)
    return root


@pytest.fixture
def make_supply(sysfs_root: Path) -> MakeSupply:
    """Factory creating a device directory with attribute files."""

    def _make(name: str, attributes: dict[str, str] | None = None) -> Path:
        device = sysfs_root / "class" / "power_supply" / name
        device.mkdir()
        for attr, value in (attributes or {}).items():
            (device / attr).write_text(f"{value}\n")
        return device

    return _make


@pytest.fixture
def config_for(sysfs_root: Path) -> Callable[..., PowerSupplyConfig]:
    """Build a PowerSupplyConfig pointing at the test sysfs tree."""

    def _config(**overrides) -> PowerSupplyConfig:
        # Default keeps every device
        overrides.setdefault("ignored_devices", "^NOMATCH$")
        return PowerSupplyConfig(sysfs=str(sysfs_root), **overrides)

    return _config
