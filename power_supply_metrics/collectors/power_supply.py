"""
Power supply collector.

Reads every numbered device under /sys/class/power_supply/ and emits one
gauge per attribute per device. Attribute names and meanings follow
https://www.kernel.org/doc/Documentation/power/power_supply_class.txt

Collects:
- Alarm, charge (full/now), current, voltage
- Cycle count
- Online/present flags
- Charge type, health, status (as numeric codes)

Every metric of a device is labeled with its descriptor: design capacity,
model, technology, supply type, serial number and minimum design voltage.

Read failures are never fatal for a device: a missing or unparsable
attribute is reported as 0, a missing descriptor field as "". Only a
failure to list the device class aborts the cycle.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from ..config.schema import PowerSupplyConfig
from ..models.metric import DeviceDescriptor, MetricDesc, MetricRecord, build_fq_name
from ..utils.sysfs import enumerate_devices, try_read_attribute, try_read_attribute_float
from .base import Collector, CollectorResult
from .categorical import CategoricalKind, encode


@dataclass(frozen=True)
class AttributeSpec:
    """A per-device attribute exported as a gauge."""

    name: str
    help: str
    # Set for attributes reported as categories
    kind: CategoricalKind | None = None


# Emission order for each device
ATTRIBUTES: tuple[AttributeSpec, ...] = (
    AttributeSpec("alarm", "Alarm state."),
    AttributeSpec("charge_full", "Maximum charge in µAh."),
    AttributeSpec("charge_now", "Charge in µAh."),
    AttributeSpec("charge_type", "Charge category.", CategoricalKind.CHARGE_TYPE),
    AttributeSpec("current_now", "Current in µA."),
    AttributeSpec("cycle_count", "Cycles on supply."),
    AttributeSpec("health", "Health state.", CategoricalKind.HEALTH),
    AttributeSpec("online", "Device online."),
    AttributeSpec("present", "Device present."),
    AttributeSpec("status", "Status.", CategoricalKind.STATUS),
    AttributeSpec("voltage_now", "Supply voltage in µV."),
)

# Attribute files backing the DeviceDescriptor fields, in field order
DESCRIPTOR_ATTRIBUTES: tuple[str, ...] = (
    "charge_full_design",
    "model_name",
    "technology",
    "type",
    "serial_number",
    "voltage_min_design",
)


def is_ignored(pattern: re.Pattern[str], device_path: Path) -> bool:
    """
    Check whether a device is excluded from collection.

    The pattern is searched in the full device path. The device name is
    tested as well so anchored patterns like ^(BAT|AC)\\d+$ apply.
    """
    return bool(pattern.search(str(device_path)) or pattern.search(device_path.name))


class PowerSupplyCollector(Collector):
    """
    Collector for power_supply class devices.

    One cycle: enumerate devices, drop ignored ones, read the descriptor
    and all attributes of each remaining device, emit one record per
    attribute.
    """

    SUBSYSTEM = "power_supply"

    def __init__(self, config: PowerSupplyConfig):
        """
        Initialize power supply collector.

        Args:
            config: Power supply configuration

        Raises:
            re.error: If ignored_devices is not a valid regex
        """
        super().__init__(
            name=config.name,
            update_interval=config.update_interval,
        )

        self.config = config
        self.sysfs_root = Path(config.sysfs)
        self.ignored_devices_pattern = re.compile(config.ignored_devices)

        self.descs: dict[str, MetricDesc] = {
            attr.name: MetricDesc(
                name=build_fq_name(config.namespace, self.SUBSYSTEM, attr.name),
                help=attr.help,
            )
            for attr in ATTRIBUTES
        }

    async def collect(self) -> CollectorResult:
        """
        Collect power supply metrics.

        Raises:
            EnumerationError: If the device class cannot be listed
        """
        result = CollectorResult()
        devices = enumerate_devices(self.sysfs_root)

        for device in devices:
            if is_ignored(self.ignored_devices_pattern, device):
                self.logger.debug(f"Ignoring device: {device}")
                continue
            result.extend(self.collect_device(device))

        self.logger.debug(f"Collected {len(result)} records from {len(devices)} devices")
        return result

    def collect_device(self, device: Path) -> list[MetricRecord]:
        """Read one device and build its records in ATTRIBUTES order."""
        descriptor = self.read_descriptor(device)
        return [
            MetricRecord(
                desc=self.descs[attr.name],
                value=self.read_value(device, attr),
                descriptor=descriptor,
                device=device,
            )
            for attr in ATTRIBUTES
        ]

    def read_descriptor(self, device: Path) -> DeviceDescriptor:
        """Read the label set of a device."""
        return DeviceDescriptor(*(self._read_text(device, name) for name in DESCRIPTOR_ATTRIBUTES))

    def read_value(self, device: Path, attr: AttributeSpec) -> float:
        """Read one attribute as a gauge value."""
        if attr.kind is not None:
            return encode(attr.kind, self._read_text(device, attr.name))
        return self._read_number(device, attr.name)

    # Read failures are substituted here and only here: "" for text, 0 for numbers.

    @staticmethod
    def _read_text(device: Path, name: str) -> str:
        text, error = try_read_attribute(device, name)
        if error is not None:
            return ""
        return text

    @staticmethod
    def _read_number(device: Path, name: str) -> float:
        value, error = try_read_attribute_float(device, name)
        if error is not None:
            return 0.0
        return value
